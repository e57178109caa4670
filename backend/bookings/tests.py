"""
Test suite for Bookings module
Tests: booking CRUD, date validation, list filters and the upcoming-bookings window
"""
from datetime import date, timedelta
from django.test import TestCase
from rest_framework import status
from backend.bookings.models import Booking
from backend.bookings.views import upcoming_bookings
from backend.core.test_utils import TestDataFactory, AuthenticatedAPIClient


class BookingAPITests(TestCase):
    """Test booking endpoints"""

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)
        self.item = TestDataFactory.create_catalog_item(name='LED Par Light')
        self.customer = TestDataFactory.create_client(name='Acme Events')

    def test_create_booking(self):
        response = self.client.post('/api/v1/bookings/', {
            'equipment': self.item.id,
            'client': self.customer.id,
            'start_date': '2025-06-10',
            'end_date': '2025-06-12',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['status'], 'confirmed')
        self.assertEqual(response.data['equipment_name'], 'LED Par Light')
        self.assertEqual(response.data['client_name'], 'Acme Events')
        self.assertEqual(Booking.objects.get().created_by, self.user)

    def test_end_before_start_rejected(self):
        response = self.client.post('/api/v1/bookings/', {
            'equipment': self.item.id,
            'client': self.customer.id,
            'start_date': '2025-06-12',
            'end_date': '2025-06-10',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('end_date', response.data)

    def test_patch_cannot_move_end_before_start(self):
        booking = TestDataFactory.create_booking(equipment=self.item, start_date=date(2025, 6, 10))
        response = self.client.patch(f'/api/v1/bookings/{booking.id}/', {'end_date': '2025-06-01'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_update_status(self):
        booking = TestDataFactory.create_booking(equipment=self.item)
        response = self.client.patch(f'/api/v1/bookings/{booking.id}/', {'status': 'cancelled'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        booking.refresh_from_db()
        self.assertEqual(booking.status, Booking.Status.CANCELLED)

    def test_delete_booking(self):
        booking = TestDataFactory.create_booking(equipment=self.item)
        response = self.client.delete(f'/api/v1/bookings/{booking.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Booking.objects.exists())

    def test_list_filters(self):
        TestDataFactory.create_booking(
            equipment=self.item, client=self.customer,
            start_date=date(2025, 6, 1), end_date=date(2025, 6, 10),
        )
        TestDataFactory.create_booking(equipment=self.item, start_date=date(2025, 6, 20))
        TestDataFactory.create_booking(start_date=date(2025, 6, 11), status=Booking.Status.PENDING)

        response = self.client.get('/api/v1/bookings/', {'date_from': '2025-06-10', 'date_to': '2025-06-12'})
        self.assertEqual(len(response.data), 2)

        response = self.client.get('/api/v1/bookings/', {'equipment': self.item.id})
        self.assertEqual(len(response.data), 2)

        response = self.client.get('/api/v1/bookings/', {'client': self.customer.id, 'status': 'confirmed'})
        self.assertEqual(len(response.data), 1)

    def test_booked_item_cannot_be_deleted(self):
        TestDataFactory.create_booking(equipment=self.item)
        response = self.client.delete(f'/api/v1/catalog-items/{self.item.id}/')
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

    def test_requires_authentication(self):
        self.client.logout()
        response = self.client.get('/api/v1/bookings/')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


class UpcomingBookingsTests(TestCase):
    """Test the one-week upcoming window"""

    def test_window_is_today_through_seven_days(self):
        today = date(2025, 6, 10)
        TestDataFactory.create_booking(start_date=today)
        TestDataFactory.create_booking(start_date=today + timedelta(days=7))
        TestDataFactory.create_booking(start_date=today + timedelta(days=8))
        TestDataFactory.create_booking(start_date=today - timedelta(days=1), end_date=today + timedelta(days=2))
        TestDataFactory.create_booking(start_date=today + timedelta(days=2), status=Booking.Status.CANCELLED)
        self.assertEqual(upcoming_bookings(today).count(), 2)
