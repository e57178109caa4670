"""
Test suite for Parties module
Tests: clients, venues and vendors, search and protected deletes
"""
from django.test import TestCase
from rest_framework import status
from backend.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from backend.parties.models import Client, Venue, Vendor


class ClientAPITests(TestCase):
    """Test client endpoints"""

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)

    def test_create_client(self):
        response = self.client.post('/api/v1/clients/', {
            'name': 'Acme Events', 'company': 'Acme', 'email': 'events@acme.test',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(Client.objects.filter(name='Acme Events').exists())

    def test_blank_name_rejected(self):
        response = self.client.post('/api/v1/clients/', {'name': '   '}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_search(self):
        TestDataFactory.create_client(name='Acme Events')
        TestDataFactory.create_client(name='Globex')
        response = self.client.get('/api/v1/clients/?search=acme')
        self.assertEqual(len(response.data), 1)

    def test_delete_client_with_quotes_conflicts(self):
        client = TestDataFactory.create_client()
        TestDataFactory.create_quote(client=client)
        response = self.client.delete(f'/api/v1/clients/{client.id}/')
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

    def test_delete_client(self):
        client = TestDataFactory.create_client()
        response = self.client.delete(f'/api/v1/clients/{client.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)


class VenueAPITests(TestCase):
    """Test venue endpoints"""

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)

    def test_create_venue_defaults_country(self):
        response = self.client.post('/api/v1/venues/', {
            'venue_name': 'Convention Center', 'city': 'Dallas', 'state': 'TX',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['country'], 'USA')

    def test_search_by_city(self):
        TestDataFactory.create_venue(venue_name='Ballroom', city='Miami', state='FL')
        TestDataFactory.create_venue(venue_name='Arena', city='Phoenix', state='AZ')
        response = self.client.get('/api/v1/venues/?search=miami')
        self.assertEqual([row['venue_name'] for row in response.data], ['Ballroom'])

    def test_deleting_venue_keeps_quote(self):
        venue = TestDataFactory.create_venue()
        quote = TestDataFactory.create_quote(venue=venue)
        response = self.client.delete(f'/api/v1/venues/{venue.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        quote.refresh_from_db()
        self.assertIsNone(quote.venue)
        self.assertFalse(Venue.objects.filter(id=venue.id).exists())


class VendorAPITests(TestCase):
    """Test vendor endpoints"""

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)

    def test_create_vendor(self):
        response = self.client.post('/api/v1/vendors/', {
            'name': 'Stage Pros', 'category': 'staging', 'contact_name': 'Sam',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['category_display'], 'Staging')

    def test_filter_by_category(self):
        TestDataFactory.create_vendor(category=Vendor.Category.AUDIO)
        TestDataFactory.create_vendor(category=Vendor.Category.LABOR)
        response = self.client.get('/api/v1/vendors/?category=labor')
        self.assertEqual(len(response.data), 1)

    def test_update_vendor(self):
        vendor = TestDataFactory.create_vendor()
        response = self.client.patch(f'/api/v1/vendors/{vendor.id}/', {'phone': '555-0100'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        vendor.refresh_from_db()
        self.assertEqual(vendor.phone, '555-0100')
