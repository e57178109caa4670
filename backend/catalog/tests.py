"""
Test suite for Catalog module
Tests: catalog item CRUD, list filters, unit counts, caching, protected deletes and CSV import
"""
from django.core.cache import cache
from django.test import TestCase
from rest_framework import status
from backend.catalog.models import CatalogItem
from backend.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from backend.inventory.models import AssetUnit


class CatalogItemAPITests(TestCase):
    """Test catalog item endpoints"""

    def setUp(self):
        cache.clear()
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)

    def test_create_item(self):
        response = self.client.post('/api/v1/catalog-items/', {
            'name': 'LED Par Light',
            'category': 'lighting',
            'price_per_day_cents': 2500,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['category_display'], 'Lighting')
        self.assertTrue(CatalogItem.objects.filter(name='LED Par Light').exists())

    def test_negative_price_rejected(self):
        response = self.client.post('/api/v1/catalog-items/', {
            'name': 'Broken', 'category': 'audio', 'price_per_day_cents': -100,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_unknown_category_rejected(self):
        response = self.client.post('/api/v1/catalog-items/', {
            'name': 'Fog machine', 'category': 'effects', 'price_per_day_cents': 100,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_list_includes_unit_counts(self):
        item = TestDataFactory.create_catalog_item(name='Shure SM58', category='audio')
        TestDataFactory.create_asset_units(item, 3)
        TestDataFactory.create_asset_unit(item=item, status=AssetUnit.Status.RENTED)
        response = self.client.get('/api/v1/catalog-items/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['unit_count'], 4)
        self.assertEqual(response.data[0]['available_unit_count'], 3)

    def test_list_filters(self):
        TestDataFactory.create_catalog_item(name='Shure SM58', category='audio')
        TestDataFactory.create_catalog_item(name='LED Par Light', category='lighting')
        TestDataFactory.create_catalog_item(name='LED Wash', category='lighting', is_active=False)

        response = self.client.get('/api/v1/catalog-items/?category=lighting')
        self.assertEqual(len(response.data), 2)

        response = self.client.get('/api/v1/catalog-items/', {'search': 'led par'})
        self.assertEqual([row['name'] for row in response.data], ['LED Par Light'])

        response = self.client.get('/api/v1/catalog-items/?active=true&category=lighting')
        self.assertEqual(len(response.data), 1)

    def test_office_filter(self):
        dallas_item = TestDataFactory.create_catalog_item(name='Dallas only')
        TestDataFactory.create_catalog_item(name='Nowhere')
        TestDataFactory.create_asset_units(dallas_item, 2, office='dallas')
        response = self.client.get('/api/v1/catalog-items/?office=dallas')
        self.assertEqual([row['name'] for row in response.data], ['Dallas only'])

    def test_invalid_category_filter(self):
        response = self.client.get('/api/v1/catalog-items/?category=effects')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_list_cache_invalidated_on_write(self):
        TestDataFactory.create_catalog_item(name='First')
        self.assertEqual(len(self.client.get('/api/v1/catalog-items/').data), 1)
        TestDataFactory.create_catalog_item(name='Second')
        self.assertEqual(len(self.client.get('/api/v1/catalog-items/').data), 2)

    def test_update_item(self):
        item = TestDataFactory.create_catalog_item(price_per_day_cents=2500)
        response = self.client.patch(f'/api/v1/catalog-items/{item.id}/', {'price_per_day_cents': 3000}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        item.refresh_from_db()
        self.assertEqual(item.price_per_day_cents, 3000)

    def test_delete_cascades_to_units(self):
        item = TestDataFactory.create_catalog_item()
        TestDataFactory.create_asset_units(item, 2)
        response = self.client.delete(f'/api/v1/catalog-items/{item.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertEqual(AssetUnit.objects.count(), 0)

    def test_delete_item_used_on_quote_conflicts(self):
        item = TestDataFactory.create_catalog_item()
        TestDataFactory.create_quote(items=[(item, 1)])
        response = self.client.delete(f'/api/v1/catalog-items/{item.id}/')
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertTrue(CatalogItem.objects.filter(id=item.id).exists())

    def test_missing_item(self):
        response = self.client.get('/api/v1/catalog-items/99999/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


class InventoryCsvImportTests(TestCase):
    """Test CSV import, the template download and clearing inventory"""

    CSV = (
        "item_name,category,description,price,asset_tag,location,notes\n"
        "LED Par Light,lighting,RGBW par,25.00,LGT-0001,Dallas,\n"
        "LED Par Light,lighting,RGBW par,25.00,LGT-0002,Miami,Cracked lens\n"
        "Shure SM58,audio,Vocal mic,15.50,AUD-0001,phoenix,\n"
    )

    def setUp(self):
        cache.clear()
        self.admin = TestDataFactory.create_user(is_staff=True)
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.admin)

    def test_import_creates_items_and_units(self):
        existing = TestDataFactory.create_catalog_item(name='Shure SM58', category='audio', price_per_day_cents=1500)
        response = self.client.post('/api/v1/catalog-items/import/', {'csv_data': self.CSV}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['units_created'], 3)
        self.assertEqual(response.data['catalog_items_created'], 1)
        self.assertEqual(response.data['catalog_items_reused'], 1)

        par = CatalogItem.objects.get(name='LED Par Light')
        self.assertEqual(par.price_per_day_cents, 2500)
        self.assertEqual(par.asset_units.count(), 2)
        self.assertEqual(AssetUnit.objects.get(asset_tag='LGT-0002').office_location, 'miami')
        self.assertEqual(AssetUnit.objects.get(asset_tag='LGT-0002').notes, 'Cracked lens')
        self.assertEqual(AssetUnit.objects.get(asset_tag='AUD-0001').item, existing)

    def test_import_refreshes_cached_list(self):
        self.assertEqual(self.client.get('/api/v1/catalog-items/').data, [])
        self.client.post('/api/v1/catalog-items/import/', {'csv_data': self.CSV}, format='json')
        response = self.client.get('/api/v1/catalog-items/')
        self.assertEqual(len(response.data), 2)

    def test_duplicate_asset_tag_rejects_whole_file(self):
        TestDataFactory.create_asset_unit(asset_tag='AUD-0001')
        response = self.client.post('/api/v1/catalog-items/import/', {'csv_data': self.CSV}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['rows'][0]['line'], 4)
        self.assertFalse(CatalogItem.objects.filter(name='LED Par Light').exists())
        self.assertEqual(AssetUnit.objects.count(), 1)

    def test_tag_repeated_within_file_rejected(self):
        csv_data = (
            "Shure SM58,audio,,15.00,AUD-0009,Dallas,\n"
            "Shure SM58,audio,,15.00,AUD-0009,Dallas,\n"
        )
        response = self.client.post('/api/v1/catalog-items/import/', {'csv_data': csv_data}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['rows'][0]['line'], 2)
        self.assertEqual(AssetUnit.objects.count(), 0)

    def test_bad_category_price_and_location_reported(self):
        csv_data = "Fog machine,effects,,abc,FX-1,Boston,\n"
        response = self.client.post('/api/v1/catalog-items/import/', {'csv_data': csv_data}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(len(response.data['rows'][0]['errors']), 3)

    def test_empty_body_rejected(self):
        response = self.client.post('/api/v1/catalog-items/import/', {}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_non_admin_cannot_import(self):
        self.client.authenticate_user(self.user)
        response = self.client.post('/api/v1/catalog-items/import/', {'csv_data': self.CSV}, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(AssetUnit.objects.count(), 0)

    def test_template_download(self):
        response = self.client.get('/api/v1/catalog-items/csv-template/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response['Content-Type'], 'text/csv')
        header = response.content.decode().splitlines()[0]
        self.assertEqual(header, 'item_name,category,description,price,asset_tag,location,notes')

    def test_template_requires_admin(self):
        self.client.authenticate_user(self.user)
        response = self.client.get('/api/v1/catalog-items/csv-template/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_clear_inventory_keeps_items_on_quotes(self):
        quoted = TestDataFactory.create_catalog_item(name='On a quote')
        unused = TestDataFactory.create_catalog_item(name='Unused')
        TestDataFactory.create_asset_units(quoted, 2)
        TestDataFactory.create_asset_units(unused, 1)
        TestDataFactory.create_quote(items=[(quoted, 1)])

        response = self.client.post('/api/v1/inventory/clear/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['units_deleted'], 3)
        self.assertEqual(response.data['catalog_items_deleted'], 1)
        self.assertEqual(AssetUnit.objects.count(), 0)
        self.assertEqual(list(CatalogItem.objects.values_list('name', flat=True)), ['On a quote'])

    def test_non_admin_cannot_clear(self):
        TestDataFactory.create_asset_unit()
        self.client.authenticate_user(self.user)
        response = self.client.post('/api/v1/inventory/clear/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(AssetUnit.objects.count(), 1)
