"""
Test suite for Reports module
Tests: dashboard numbers, upcoming bookings and cache invalidation
"""
from datetime import timedelta
from django.core.cache import cache
from django.test import TestCase
from django.utils import timezone
from rest_framework import status
from backend.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from backend.inventory.models import AssetUnit
from backend.quotes.models import Quote


class DashboardTests(TestCase):
    """Test the dashboard endpoint"""

    def setUp(self):
        cache.clear()
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)
        self.today = timezone.localdate()

    def test_empty_dashboard(self):
        response = self.client.get('/api/v1/reports/dashboard/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['catalog_items'], 0)
        self.assertEqual(response.data['confirmed_revenue_cents'], 0)
        self.assertEqual(response.data['quotes_by_status']['approved'], 0)
        self.assertEqual(response.data['asset_units_by_status']['maintenance'], 0)

    def test_counts_and_revenue(self):
        item = TestDataFactory.create_catalog_item(price_per_day_cents=10000)
        TestDataFactory.create_asset_units(item, 2)
        TestDataFactory.create_asset_unit(item=item, status=AssetUnit.Status.MAINTENANCE, office='miami')
        TestDataFactory.create_quote(
            items=[(item, 1)], status=Quote.Status.APPROVED,
            event_start_date=self.today + timedelta(days=3),
        )
        TestDataFactory.create_quote(
            items=[(item, 2)], status=Quote.Status.APPROVED,
            event_start_date=self.today - timedelta(days=30),
        )
        TestDataFactory.create_quote(items=[(item, 5)], status=Quote.Status.DRAFT)

        response = self.client.get('/api/v1/reports/dashboard/')
        data = response.data
        self.assertEqual(data['catalog_items'], 1)
        self.assertEqual(data['asset_units'], 3)
        self.assertEqual(data['asset_units_by_status']['available'], 2)
        self.assertEqual(data['asset_units_by_office']['miami'], 1)
        self.assertEqual(data['clients'], 3)
        self.assertEqual(data['quotes_by_status'], {'draft': 1, 'sent': 0, 'approved': 2, 'rejected': 0})
        self.assertEqual(data['confirmed_revenue_cents'], 30000)
        self.assertEqual(data['upcoming_jobs_count'], 1)

    def test_dashboard_refreshes_after_changes(self):
        self.assertEqual(self.client.get('/api/v1/reports/dashboard/').data['clients'], 0)
        TestDataFactory.create_client()
        self.assertEqual(self.client.get('/api/v1/reports/dashboard/').data['clients'], 1)

    def test_upcoming_bookings_count(self):
        TestDataFactory.create_booking(start_date=self.today + timedelta(days=2))
        TestDataFactory.create_booking(start_date=self.today + timedelta(days=30))
        response = self.client.get('/api/v1/reports/dashboard/')
        self.assertEqual(response.data['upcoming_bookings_count'], 1)

    def test_venue_rename_refreshes_upcoming_jobs(self):
        venue = TestDataFactory.create_venue(venue_name='Old Hall')
        TestDataFactory.create_quote(
            status=Quote.Status.APPROVED, venue=venue, event_start_date=self.today + timedelta(days=1),
        )
        response = self.client.get('/api/v1/reports/dashboard/')
        self.assertEqual(response.data['upcoming_jobs'][0]['venue_name'], 'Old Hall')

        venue.venue_name = 'Grand Ballroom'
        venue.save()
        response = self.client.get('/api/v1/reports/dashboard/')
        self.assertEqual(response.data['upcoming_jobs'][0]['venue_name'], 'Grand Ballroom')

    def test_requires_authentication(self):
        self.client.logout()
        response = self.client.get('/api/v1/reports/dashboard/')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
