"""
Test suite for Core module
Tests: registration and JWT login, audit logging, cache versioning and global search
"""
from django.core.cache import cache
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from backend.core.cache_utils import (
    CATALOG_NAMESPACE, get_namespace_version, make_cache_key, invalidate_catalog_cache,
)
from backend.core.models import AuditLog
from backend.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from backend.core.utils import create_audit_log
from backend.parties.models import Client


class AuthTests(TestCase):
    """Test registration, login and the current-user endpoint"""

    def setUp(self):
        self.client = APIClient()

    def test_register_returns_tokens(self):
        response = self.client.post('/api/v1/auth/register/', {
            'username': 'warehouse_lead',
            'email': 'lead@example.com',
            'password': 'Tr1pod-Stand-42',
            'password_confirm': 'Tr1pod-Stand-42',
            'home_office': 'miami',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertIn('access', response.data)
        self.assertIn('refresh', response.data)
        self.assertEqual(response.data['user']['username'], 'warehouse_lead')
        self.assertEqual(response.data['user']['home_office_display'], 'Miami')

    def test_register_password_mismatch(self):
        response = self.client.post('/api/v1/auth/register/', {
            'username': 'warehouse_lead',
            'password': 'Tr1pod-Stand-42',
            'password_confirm': 'something-else-42',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_login_and_me(self):
        TestDataFactory.create_user(username='planner', password='testpass123')
        response = self.client.post('/api/v1/auth/login/', {
            'username': 'planner', 'password': 'testpass123'
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {response.data['access']}")
        me = self.client.get('/api/v1/auth/me/')
        self.assertEqual(me.status_code, status.HTTP_200_OK)
        self.assertEqual(me.data['username'], 'planner')
        self.assertFalse(me.data['is_admin'])

    def test_login_wrong_password(self):
        TestDataFactory.create_user(username='planner', password='testpass123')
        response = self.client.post('/api/v1/auth/login/', {
            'username': 'planner', 'password': 'nope'
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_me_requires_token(self):
        response = self.client.get('/api/v1/auth/me/')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_me_patch_updates_profile(self):
        user = TestDataFactory.create_user(username='planner')
        self.client.credentials(HTTP_AUTHORIZATION=f'Bearer {RefreshToken.for_user(user).access_token}')
        response = self.client.patch('/api/v1/auth/me/', {
            'first_name': 'Dana',
            'last_name': 'Reyes',
            'phone': '555-0100',
            'home_office': 'phoenix',
            'username': 'renamed',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['home_office_display'], 'Phoenix')
        user.refresh_from_db()
        self.assertEqual((user.first_name, user.last_name, user.phone), ('Dana', 'Reyes', '555-0100'))
        self.assertEqual(user.home_office, 'phoenix')
        self.assertEqual(user.username, 'planner')

    def test_me_patch_rejects_unknown_office(self):
        user = TestDataFactory.create_user()
        self.client.credentials(HTTP_AUTHORIZATION=f'Bearer {RefreshToken.for_user(user).access_token}')
        response = self.client.patch('/api/v1/auth/me/', {'home_office': 'boston'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class AuditLogTests(TestCase):
    """Test audit log creation and visibility"""

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.admin = TestDataFactory.create_user(is_staff=True)
        self.client = AuthenticatedAPIClient()
        self.quote = TestDataFactory.create_quote()
        self.unit = TestDataFactory.create_asset_unit(asset_tag='AUD-0042')

    def test_create_audit_log(self):
        log = create_audit_log(
            AuditLog.Action.QUOTE_CREATE, self.quote,
            user=self.user, object_reference=self.quote.reference_number, changes={'total_cents': 10800},
        )
        self.assertIsNotNone(log)
        self.assertEqual(log.model_name, 'Quote')
        self.assertEqual(log.object_id, str(self.quote.id))
        self.assertEqual(log.user, self.user)

    def test_unsaved_instance_is_skipped(self):
        unsaved = Client(name='Not saved')
        self.assertIsNone(create_audit_log(AuditLog.Action.QUOTE_CREATE, unsaved))
        self.assertEqual(AuditLog.objects.count(), 0)

    def test_non_staff_only_see_their_own_entries(self):
        create_audit_log(AuditLog.Action.UNIT_CREATE, self.unit, user=self.user, object_reference='AUD-0042')
        create_audit_log(AuditLog.Action.UNIT_STATUS, self.unit, user=self.admin, object_reference='AUD-0042')

        self.client.authenticate_user(self.user)
        response = self.client.get('/api/v1/audit-logs/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['username'], self.user.username)

        self.client.authenticate_user(self.admin)
        response = self.client.get('/api/v1/audit-logs/', {'model': 'AssetUnit', 'reference': 'AUD-0042'})
        self.assertEqual(len(response.data), 2)

    def test_detail_forbidden_for_other_users(self):
        log = create_audit_log(AuditLog.Action.UNIT_CREATE, self.unit, user=self.admin)
        self.client.authenticate_user(self.user)
        response = self.client.get(f'/api/v1/audit-logs/{log.id}/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class CacheVersionTests(TestCase):
    """Test versioned cache keys and signal-driven invalidation"""

    def setUp(self):
        cache.clear()

    def test_invalidation_changes_keys(self):
        before = make_cache_key(CATALOG_NAMESPACE, category='audio')
        invalidate_catalog_cache()
        after = make_cache_key(CATALOG_NAMESPACE, category='audio')
        self.assertNotEqual(before, after)

    def test_same_filters_same_key(self):
        self.assertEqual(
            make_cache_key(CATALOG_NAMESPACE, category='audio', search='par'),
            make_cache_key(CATALOG_NAMESPACE, search='par', category='audio'),
        )

    def test_saving_a_catalog_item_bumps_the_version(self):
        version = get_namespace_version(CATALOG_NAMESPACE)
        TestDataFactory.create_catalog_item()
        self.assertGreater(get_namespace_version(CATALOG_NAMESPACE), version)


class GlobalSearchTests(TestCase):
    """Test global search"""

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)

    def test_empty_query(self):
        response = self.client.get('/api/v1/search/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['quotes'], [])

    def test_search_across_models(self):
        item = TestDataFactory.create_catalog_item(name='Martin MAC Aura')
        TestDataFactory.create_asset_unit(item=item, asset_tag='MAC-001')
        client = TestDataFactory.create_client(name='Macro Events')
        TestDataFactory.create_quote(client=client)
        response = self.client.get('/api/v1/search/?q=mac')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data['catalog_items']), 1)
        self.assertEqual(len(response.data['asset_units']), 1)
        self.assertEqual(len(response.data['clients']), 1)
        self.assertEqual(len(response.data['quotes']), 1)
