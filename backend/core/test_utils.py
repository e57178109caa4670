"""
Test utilities and factories for creating test data
"""
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from backend.bookings.models import Booking
from backend.catalog.models import CatalogItem
from backend.core.choices import OfficeLocation
from backend.inventory.models import AssetUnit
from backend.parties.models import Client, Venue, Vendor
from backend.quotes.models import Quote, QuoteSection, QuoteItem
import datetime
import random
import string

User = get_user_model()


class TestDataFactory:
    """Factory class for creating test data"""

    @staticmethod
    def random_string(length=10):
        """Generate a random string"""
        return ''.join(random.choices(string.ascii_letters + string.digits, k=length))

    @staticmethod
    def create_user(username=None, email=None, password='testpass123', is_staff=False, is_superuser=False):
        """Create a test user"""
        if not username:
            username = f'testuser_{TestDataFactory.random_string(6)}'
        if not email:
            email = f'{username}@test.com'
        return User.objects.create_user(
            username=username,
            email=email,
            password=password,
            is_staff=is_staff,
            is_superuser=is_superuser
        )

    @staticmethod
    def create_catalog_item(name=None, category=CatalogItem.Category.LIGHTING, price_per_day_cents=2500, **kwargs):
        """Create a test catalog item"""
        if not name:
            name = f'Item_{TestDataFactory.random_string(6)}'
        return CatalogItem.objects.create(
            name=name,
            category=category,
            price_per_day_cents=price_per_day_cents,
            **kwargs
        )

    @staticmethod
    def create_asset_unit(item=None, office=OfficeLocation.DALLAS, status=AssetUnit.Status.AVAILABLE, asset_tag=None):
        """Create a test asset unit"""
        if not item:
            item = TestDataFactory.create_catalog_item()
        if not asset_tag:
            asset_tag = f'TAG-{TestDataFactory.random_string(8).upper()}'
        return AssetUnit.objects.create(item=item, asset_tag=asset_tag, office_location=office, status=status)

    @staticmethod
    def create_asset_units(item, count, office=OfficeLocation.DALLAS, status=AssetUnit.Status.AVAILABLE):
        """Create several asset units of one item at one office"""
        return [TestDataFactory.create_asset_unit(item=item, office=office, status=status) for _ in range(count)]

    @staticmethod
    def create_client(name=None, company=''):
        """Create a test client"""
        if not name:
            name = f'Client_{TestDataFactory.random_string(6)}'
        return Client.objects.create(name=name, company=company, email=f'{name.lower()}@example.com')

    @staticmethod
    def create_venue(venue_name=None, city='Dallas', state='TX'):
        """Create a test venue"""
        if not venue_name:
            venue_name = f'Venue_{TestDataFactory.random_string(6)}'
        return Venue.objects.create(venue_name=venue_name, city=city, state=state)

    @staticmethod
    def create_vendor(name=None, category=Vendor.Category.AUDIO):
        """Create a test vendor"""
        if not name:
            name = f'Vendor_{TestDataFactory.random_string(6)}'
        return Vendor.objects.create(name=name, category=category)

    @staticmethod
    def create_quote(client=None, office=OfficeLocation.DALLAS, event_start_date=None, event_end_date=None,
                     status=Quote.Status.DRAFT, items=None, tax_enabled=False, tax_rate=0, venue=None,
                     created_by=None):
        """
        Create a test quote with a single section.

        items: list of (catalog_item, quantity) pairs or dicts of QuoteItem
        fields. Totals are recalculated after the lines are written.
        """
        if not client:
            client = TestDataFactory.create_client()
        if not event_start_date:
            event_start_date = datetime.date(2025, 6, 10)
        quote = Quote.objects.create(
            reference_number=f'Q-TEST-{TestDataFactory.random_string(8).upper()}',
            client=client,
            venue=venue,
            office=office,
            event_start_date=event_start_date,
            event_end_date=event_end_date,
            status=status,
            created_by=created_by,
        )
        section = QuoteSection.objects.create(
            quote=quote, position=0, name='Equipment', tax_enabled=tax_enabled, tax_rate=tax_rate
        )
        for position, line in enumerate(items or []):
            if isinstance(line, dict):
                QuoteItem.objects.create(section=section, position=position, **line)
                continue
            catalog_item, quantity = line
            QuoteItem.objects.create(
                section=section,
                position=position,
                equipment=catalog_item,
                quantity=quantity,
                price_per_day_cents=catalog_item.price_per_day_cents,
                number_of_days=1,
            )
        quote.recalculate_totals()
        return quote

    @staticmethod
    def create_booking(equipment=None, client=None, start_date=None, end_date=None,
                       status=Booking.Status.CONFIRMED):
        """Create a test booking; single day starting 2025-06-10 by default"""
        if not equipment:
            equipment = TestDataFactory.create_catalog_item()
        if not client:
            client = TestDataFactory.create_client()
        if not start_date:
            start_date = datetime.date(2025, 6, 10)
        return Booking.objects.create(
            equipment=equipment, client=client, start_date=start_date,
            end_date=end_date or start_date, status=status,
        )


class AuthenticatedAPIClient(APIClient):
    """APIClient with authentication helper"""

    def authenticate_user(self, user):
        """Authenticate the client with a user"""
        refresh = RefreshToken.for_user(user)
        self.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
        return self

    def logout(self):
        """Remove authentication"""
        self.credentials()
