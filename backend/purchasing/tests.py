"""
Test suite for Purchasing module
Tests: subrentals, job costs and the projected/actual cost summary
"""
from decimal import Decimal
from django.test import TestCase
from rest_framework import status
from backend.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from backend.purchasing.models import Subrental, JobCost
from backend.purchasing.services import margin_percent, job_cost_summary
from backend.quotes.models import Quote


class CostSummaryTests(TestCase):
    """Test margin and summary helpers"""

    def test_margin_percent(self):
        self.assertEqual(margin_percent(10000, 2500), Decimal('25.00'))
        self.assertEqual(margin_percent(3, 1), Decimal('33.33'))
        self.assertEqual(margin_percent(0, 0), Decimal('0.00'))

    def test_summary(self):
        item = TestDataFactory.create_catalog_item(price_per_day_cents=10000)
        quote = TestDataFactory.create_quote(items=[(item, 1)], status=Quote.Status.APPROVED)
        vendor = TestDataFactory.create_vendor()
        costs = [
            JobCost.objects.create(quote=quote, vendor=vendor, vendor_category='audio',
                                   projected_cost_cents=3000, actual_cost_cents=3500),
            JobCost.objects.create(quote=quote, vendor_category='labor',
                                   projected_cost_cents=2000, actual_cost_cents=1000),
        ]
        summary = job_cost_summary(quote, costs)
        self.assertEqual(summary['projected_cost_cents'], 5000)
        self.assertEqual(summary['actual_cost_cents'], 4500)
        self.assertEqual(summary['variance_cents'], -500)
        self.assertEqual(summary['projected_profit_cents'], 5000)
        self.assertEqual(summary['actual_margin_percent'], '55.00')
        self.assertEqual(costs[0].variance_cents, 500)


class SubrentalAPITests(TestCase):
    """Test subrental endpoints"""

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)
        self.vendor = TestDataFactory.create_vendor(name='Audio Rentals Inc')
        self.item = TestDataFactory.create_catalog_item(name='Line Array', category='audio')
        self.quote = TestDataFactory.create_quote(status=Quote.Status.APPROVED)

    def test_create_subrental(self):
        response = self.client.post('/api/v1/subrentals/', {
            'quote': self.quote.id, 'vendor': self.vendor.id, 'item': self.item.id,
            'quantity': 4, 'cost_cents': 40000,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['status'], 'requested')
        self.assertEqual(response.data['vendor_name'], 'Audio Rentals Inc')
        self.assertEqual(response.data['created_by'], self.user.id)

    def test_needs_item_or_description(self):
        response = self.client.post('/api/v1/subrentals/', {
            'quote': self.quote.id, 'vendor': self.vendor.id, 'quantity': 1,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_quote_subrentals(self):
        response = self.client.post(f'/api/v1/quotes/{self.quote.id}/subrentals/', {
            'vendor': self.vendor.id, 'description': 'Extra subwoofers', 'quantity': 2,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        response = self.client.get(f'/api/v1/quotes/{self.quote.id}/subrentals/')
        self.assertEqual(len(response.data), 1)

    def test_list_is_paginated_and_filtered(self):
        for _ in range(3):
            Subrental.objects.create(quote=self.quote, vendor=self.vendor, description='Cable', quantity=1)
        Subrental.objects.create(quote=self.quote, vendor=self.vendor, description='Drape', status='received')
        response = self.client.get('/api/v1/subrentals/?limit=2')
        self.assertEqual(response.data['count'], 4)
        self.assertEqual(len(response.data['results']), 2)
        self.assertEqual(response.data['total_pages'], 2)
        response = self.client.get('/api/v1/subrentals/?status=received')
        self.assertEqual(response.data['count'], 1)

    def test_update_status(self):
        subrental = Subrental.objects.create(quote=self.quote, vendor=self.vendor, item=self.item)
        response = self.client.patch(f'/api/v1/subrentals/{subrental.id}/', {'status': 'confirmed'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        subrental.refresh_from_db()
        self.assertEqual(subrental.status, 'confirmed')

    def test_vendor_with_subrentals_cannot_be_deleted(self):
        Subrental.objects.create(quote=self.quote, vendor=self.vendor, item=self.item)
        response = self.client.delete(f'/api/v1/vendors/{self.vendor.id}/')
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

    def test_deleting_quote_removes_subrentals(self):
        Subrental.objects.create(quote=self.quote, vendor=self.vendor, item=self.item)
        self.client.delete(f'/api/v1/quotes/{self.quote.id}/')
        self.assertEqual(Subrental.objects.count(), 0)


class JobCostAPITests(TestCase):
    """Test job cost endpoints"""

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)
        self.vendor = TestDataFactory.create_vendor(category='transport')
        item = TestDataFactory.create_catalog_item(price_per_day_cents=20000)
        self.quote = TestDataFactory.create_quote(items=[(item, 1)], status=Quote.Status.APPROVED)

    def test_record_cost_on_job(self):
        response = self.client.post(f'/api/v1/quotes/{self.quote.id}/costs/', {
            'vendor': self.vendor.id, 'vendor_category': 'transport', 'projected_cost_cents': 5000,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['actual_cost_cents'], 0)

        response = self.client.get(f'/api/v1/quotes/{self.quote.id}/costs/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data['costs']), 1)
        summary = response.data['summary']
        self.assertEqual(summary['quote_total_cents'], 20000)
        self.assertEqual(summary['projected_profit_cents'], 15000)
        self.assertEqual(summary['projected_margin_percent'], '75.00')

    def test_projected_cost_required(self):
        response = self.client.post('/api/v1/costs/', {
            'quote': self.quote.id, 'vendor_category': 'transport',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_negative_cost_rejected(self):
        response = self.client.post('/api/v1/costs/', {
            'quote': self.quote.id, 'vendor_category': 'labor', 'projected_cost_cents': -1,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_update_actual_cost(self):
        cost = JobCost.objects.create(quote=self.quote, vendor_category='labor', projected_cost_cents=1000)
        response = self.client.patch(f'/api/v1/costs/{cost.id}/', {'actual_cost_cents': 1200}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['variance_cents'], 200)

    def test_filter_costs(self):
        JobCost.objects.create(quote=self.quote, vendor_category='labor', projected_cost_cents=1000)
        JobCost.objects.create(quote=self.quote, vendor_category='transport', projected_cost_cents=1000)
        response = self.client.get('/api/v1/costs/?vendor_category=labor')
        self.assertEqual(len(response.data), 1)

    def test_delete_cost(self):
        cost = JobCost.objects.create(quote=self.quote, vendor_category='labor', projected_cost_cents=1000)
        response = self.client.delete(f'/api/v1/costs/{cost.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
