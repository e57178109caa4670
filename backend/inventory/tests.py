"""
Test suite for Inventory module
Tests: availability resolver, asset unit API, availability endpoint and quote prep lines
"""
from datetime import date
from django.test import SimpleTestCase, TestCase
from rest_framework import status
from backend.core.models import AuditLog
from backend.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from backend.inventory.availability import (
    AssetUnitSnapshot, BookedItem, QuoteSnapshot,
    date_range, dates_overlap, available_quantity, shortage,
)
from backend.inventory.models import AssetUnit
from backend.inventory.services import item_availability, load_confirmed_quotes, quote_prep_lines
from backend.quotes.models import Quote

ITEM_X = 1
ITEM_Y = 2


def units(item_id, office, count, unit_status='available'):
    return [AssetUnitSnapshot(item_id=item_id, office_location=office, status=unit_status) for _ in range(count)]


def confirmed(quote_id, office, start, end=None, **quantities):
    """quantities: item_<id>=quantity"""
    items = tuple(
        BookedItem(equipment_id=int(key.split('_')[1]), quantity=quantity)
        for key, quantity in quantities.items()
    )
    return QuoteSnapshot(id=quote_id, office=office, event_start_date=start, event_end_date=end, items=items)


class DateRangeTests(SimpleTestCase):
    """Test date range normalisation and overlap"""

    def test_missing_end_is_single_day(self):
        self.assertEqual(date_range(date(2025, 6, 10), None), (date(2025, 6, 10), date(2025, 6, 10)))

    def test_overlap_is_inclusive(self):
        # One range ends on the day the other starts
        self.assertTrue(dates_overlap(date(2025, 6, 1), date(2025, 6, 10), date(2025, 6, 10), date(2025, 6, 12)))

    def test_disjoint_ranges(self):
        self.assertFalse(dates_overlap(date(2025, 6, 1), date(2025, 6, 9), date(2025, 6, 10), date(2025, 6, 12)))

    def test_open_ended_ranges(self):
        self.assertTrue(dates_overlap(date(2025, 6, 10), None, date(2025, 6, 10), None))
        self.assertFalse(dates_overlap(date(2025, 6, 10), None, date(2025, 6, 11), None))
        self.assertTrue(dates_overlap(date(2025, 6, 10), None, date(2025, 6, 1), date(2025, 6, 30)))


class AvailableQuantityTests(SimpleTestCase):
    """Test the availability resolver over in-memory snapshots"""

    def setUp(self):
        self.start = date(2025, 6, 10)
        self.end = date(2025, 6, 12)
        self.asset_units = units(ITEM_X, 'dallas', 5)

    def test_other_confirmed_quote_reduces_availability(self):
        """5 units at dallas, 3 committed on an overlapping job leaves 2"""
        quotes = [confirmed(10, 'dallas', date(2025, 6, 11), date(2025, 6, 13), item_1=3)]
        self.assertEqual(
            available_quantity(ITEM_X, 'dallas', None, self.start, self.end, self.asset_units, quotes), 2
        )

    def test_shortage_is_negative_when_short(self):
        quotes = [confirmed(10, 'dallas', date(2025, 6, 11), date(2025, 6, 13), item_1=3)]
        self.assertEqual(
            shortage(ITEM_X, 'dallas', 4, None, self.start, self.end, self.asset_units, quotes), -2
        )

    def test_shortage_is_surplus_when_enough(self):
        self.assertEqual(shortage(ITEM_X, 'dallas', 3, None, self.start, self.end, self.asset_units, []), 2)

    def test_no_quotes_means_all_available_units(self):
        self.assertEqual(available_quantity(ITEM_X, 'dallas', None, self.start, self.end, self.asset_units, []), 5)

    def test_rented_and_maintenance_units_never_count(self):
        asset_units = (
            units(ITEM_X, 'dallas', 2)
            + units(ITEM_X, 'dallas', 2, 'rented')
            + units(ITEM_X, 'dallas', 1, 'maintenance')
        )
        self.assertEqual(available_quantity(ITEM_X, 'dallas', None, self.start, self.end, asset_units, []), 2)

    def test_never_negative(self):
        quotes = [confirmed(10, 'dallas', self.start, self.end, item_1=9)]
        self.assertEqual(
            available_quantity(ITEM_X, 'dallas', None, self.start, self.end, self.asset_units, quotes), 0
        )
        self.assertEqual(
            shortage(ITEM_X, 'dallas', 1, None, self.start, self.end, self.asset_units, quotes), -1
        )

    def test_boundary_day_counts_as_overlap(self):
        """A job ending on the query's start date still holds its units"""
        quotes = [confirmed(10, 'dallas', date(2025, 6, 8), date(2025, 6, 10), item_1=1)]
        self.assertEqual(
            available_quantity(ITEM_X, 'dallas', None, self.start, self.end, self.asset_units, quotes), 4
        )

    def test_non_overlapping_quote_ignored(self):
        quotes = [confirmed(10, 'dallas', date(2025, 6, 1), date(2025, 6, 9), item_1=5)]
        self.assertEqual(
            available_quantity(ITEM_X, 'dallas', None, self.start, self.end, self.asset_units, quotes), 5
        )

    def test_quote_without_end_date_is_single_day(self):
        """A job on 2025-06-10 with no end date only blocks that day"""
        quotes = [confirmed(10, 'dallas', date(2025, 6, 10), None, item_1=2)]
        self.assertEqual(
            available_quantity(ITEM_X, 'dallas', None, date(2025, 6, 10), None, self.asset_units, quotes), 3
        )
        self.assertEqual(
            available_quantity(ITEM_X, 'dallas', None, date(2025, 6, 11), None, self.asset_units, quotes), 5
        )

    def test_other_offices_are_ignored(self):
        asset_units = self.asset_units + units(ITEM_X, 'miami', 10)
        quotes = [confirmed(10, 'miami', self.start, self.end, item_1=4)]
        self.assertEqual(available_quantity(ITEM_X, 'dallas', None, self.start, self.end, asset_units, quotes), 5)
        self.assertEqual(available_quantity(ITEM_X, 'miami', None, self.start, self.end, asset_units, quotes), 6)

    def test_excluded_quote_does_not_count_against_itself(self):
        quotes = [
            confirmed(10, 'dallas', self.start, self.end, item_1=3),
            confirmed(11, 'dallas', self.start, self.end, item_1=1),
        ]
        self.assertEqual(available_quantity(ITEM_X, 'dallas', 10, self.start, self.end, self.asset_units, quotes), 4)

    def test_only_matching_non_custom_lines_count(self):
        items = (
            BookedItem(equipment_id=ITEM_X, quantity=1),
            BookedItem(equipment_id=ITEM_Y, quantity=3),
            BookedItem(equipment_id=None, quantity=2, is_custom=True),
            BookedItem(equipment_id=ITEM_X, quantity=2, is_custom=True),
        )
        quotes = [QuoteSnapshot(id=10, office='dallas', event_start_date=self.start, event_end_date=self.end, items=items)]
        self.assertEqual(available_quantity(ITEM_X, 'dallas', None, self.start, self.end, self.asset_units, quotes), 4)

    def test_lines_across_quotes_add_up(self):
        quotes = [
            confirmed(10, 'dallas', self.start, None, item_1=1),
            confirmed(11, 'dallas', self.end, None, item_1=2),
        ]
        self.assertEqual(available_quantity(ITEM_X, 'dallas', None, self.start, self.end, self.asset_units, quotes), 2)


class AvailabilityServiceTests(TestCase):
    """Test loading snapshots from the database"""

    def setUp(self):
        self.item = TestDataFactory.create_catalog_item(name='LED Par Light')
        TestDataFactory.create_asset_units(self.item, 5, office='dallas')
        TestDataFactory.create_asset_unit(item=self.item, office='dallas', status=AssetUnit.Status.MAINTENANCE)

    def test_only_approved_quotes_are_loaded(self):
        TestDataFactory.create_quote(status=Quote.Status.APPROVED, items=[(self.item, 2)])
        TestDataFactory.create_quote(status=Quote.Status.DRAFT, items=[(self.item, 2)])
        TestDataFactory.create_quote(status=Quote.Status.SENT, items=[(self.item, 2)])
        TestDataFactory.create_quote(status=Quote.Status.REJECTED, items=[(self.item, 2)])
        snapshots = load_confirmed_quotes()
        self.assertEqual(len(snapshots), 1)
        self.assertEqual(snapshots[0].items[0].quantity, 2)

    def test_loader_keeps_only_quotes_overlapping_the_window(self):
        TestDataFactory.create_quote(
            status=Quote.Status.APPROVED, items=[(self.item, 1)],
            event_start_date=date(2025, 6, 1), event_end_date=date(2025, 6, 10),
        )
        TestDataFactory.create_quote(
            status=Quote.Status.APPROVED, items=[(self.item, 1)], event_start_date=date(2025, 6, 12),
        )
        TestDataFactory.create_quote(
            status=Quote.Status.APPROVED, items=[(self.item, 1)],
            event_start_date=date(2025, 6, 20), event_end_date=date(2025, 6, 22),
        )
        TestDataFactory.create_quote(
            status=Quote.Status.APPROVED, items=[(self.item, 1)], event_start_date=date(2025, 6, 5),
        )
        snapshots = load_confirmed_quotes(office='dallas', start_date=date(2025, 6, 10), end_date=date(2025, 6, 12))
        self.assertEqual(
            sorted(snapshot.event_start_date for snapshot in snapshots),
            [date(2025, 6, 1), date(2025, 6, 12)],
        )

    def test_item_availability(self):
        TestDataFactory.create_quote(
            status=Quote.Status.APPROVED, items=[(self.item, 3)],
            event_start_date=date(2025, 6, 11), event_end_date=date(2025, 6, 13),
        )
        result = item_availability(self.item.id, 'dallas', date(2025, 6, 10), date(2025, 6, 12), required_quantity=4)
        self.assertEqual(result['available'], 2)
        self.assertEqual(result['shortage'], -2)

    def test_prep_lines_exclude_the_quote_itself(self):
        quote = TestDataFactory.create_quote(status=Quote.Status.APPROVED, items=[(self.item, 4)])
        lines = quote_prep_lines(quote)
        self.assertEqual(len(lines), 1)
        self.assertEqual(lines[0]['required'], 4)
        self.assertEqual(lines[0]['available'], 5)
        self.assertEqual(lines[0]['shortage'], 1)

    def test_prep_lines_sum_repeated_items_and_skip_custom(self):
        quote = TestDataFactory.create_quote(items=[
            (self.item, 4),
            (self.item, 3),
            {'is_custom': True, 'custom_name': 'Rigging labor', 'quantity': 2, 'price_per_day_cents': 5000},
        ])
        lines = quote_prep_lines(quote)
        self.assertEqual(len(lines), 1)
        self.assertEqual(lines[0]['required'], 7)
        self.assertEqual(lines[0]['shortage'], -2)


class AssetUnitAPITests(TestCase):
    """Test asset unit endpoints"""

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)
        self.item = TestDataFactory.create_catalog_item(name='Shure SM58')

    def test_add_unit_to_item(self):
        response = self.client.post(f'/api/v1/catalog-items/{self.item.id}/asset-units/', {
            'asset_tag': 'AUD-0001',
            'office_location': 'dallas',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['status'], 'available')
        self.assertEqual(response.data['item'], self.item.id)
        self.assertTrue(AuditLog.objects.filter(action='unit_create', object_reference='AUD-0001').exists())

    def test_duplicate_asset_tag_rejected(self):
        TestDataFactory.create_asset_unit(item=self.item, asset_tag='AUD-0001')
        response = self.client.post(f'/api/v1/catalog-items/{self.item.id}/asset-units/', {
            'asset_tag': 'AUD-0001',
            'office_location': 'dallas',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_invalid_office_rejected(self):
        response = self.client.post(f'/api/v1/catalog-items/{self.item.id}/asset-units/', {
            'asset_tag': 'AUD-0002',
            'office_location': 'boston',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_list_filters(self):
        TestDataFactory.create_asset_unit(item=self.item, office='dallas')
        TestDataFactory.create_asset_unit(item=self.item, office='miami')
        TestDataFactory.create_asset_unit(item=self.item, office='miami', status=AssetUnit.Status.RENTED)
        response = self.client.get('/api/v1/asset-units/?office=miami&status=rented')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)

    def test_status_change_is_audited(self):
        unit = TestDataFactory.create_asset_unit(item=self.item)
        response = self.client.patch(f'/api/v1/asset-units/{unit.id}/', {'status': 'maintenance'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        unit.refresh_from_db()
        self.assertEqual(unit.status, 'maintenance')
        self.assertTrue(AuditLog.objects.filter(action='unit_status', object_id=str(unit.id)).exists())

    def test_delete_unit(self):
        unit = TestDataFactory.create_asset_unit(item=self.item)
        response = self.client.delete(f'/api/v1/asset-units/{unit.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(AssetUnit.objects.filter(id=unit.id).exists())


class AvailabilityAPITests(TestCase):
    """Test the availability endpoint"""

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)
        self.item = TestDataFactory.create_catalog_item()
        TestDataFactory.create_asset_units(self.item, 5, office='dallas')
        self.booked = TestDataFactory.create_quote(
            status=Quote.Status.APPROVED, items=[(self.item, 3)],
            event_start_date=date(2025, 6, 11), event_end_date=date(2025, 6, 13),
        )

    def test_availability(self):
        response = self.client.get(
            f'/api/v1/catalog-items/{self.item.id}/availability/'
            '?office=dallas&start_date=2025-06-10&end_date=2025-06-12&required=4'
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['available'], 2)
        self.assertEqual(response.data['required'], 4)
        self.assertEqual(response.data['shortage'], -2)

    def test_exclude_quote(self):
        response = self.client.get(
            f'/api/v1/catalog-items/{self.item.id}/availability/'
            f'?office=dallas&start_date=2025-06-10&end_date=2025-06-12&exclude_quote={self.booked.id}'
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['available'], 5)

    def test_missing_office(self):
        response = self.client.get(f'/api/v1/catalog-items/{self.item.id}/availability/?start_date=2025-06-10')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_end_before_start(self):
        response = self.client.get(
            f'/api/v1/catalog-items/{self.item.id}/availability/'
            '?office=dallas&start_date=2025-06-10&end_date=2025-06-01'
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_unknown_item(self):
        response = self.client.get('/api/v1/catalog-items/99999/availability/?office=dallas&start_date=2025-06-10')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
