"""
Test suite for Quotes module
Tests: nested quote writes, recomputed totals, line invariants, filters,
status changes, prep and pull lists
"""
from datetime import date
from django.test import TestCase
from rest_framework import status
from backend.core.models import AuditLog
from backend.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from backend.quotes.models import Quote, QuoteSection, QuoteItem


class QuoteModelTests(TestCase):
    """Test Quote model helpers"""

    def test_recalculate_totals(self):
        item = TestDataFactory.create_catalog_item(price_per_day_cents=10000)
        quote = TestDataFactory.create_quote(items=[(item, 1)], tax_enabled=True, tax_rate=8)
        self.assertEqual(quote.subtotal_cents, 10000)
        self.assertEqual(quote.tax_cents, 800)
        self.assertEqual(quote.total_cents, 10800)
        section = quote.sections.get()
        self.assertEqual(section.total_cents, 10800)

    def test_effective_end_date(self):
        quote = TestDataFactory.create_quote(event_start_date=date(2025, 6, 10))
        self.assertEqual(quote.effective_end_date, date(2025, 6, 10))

    def test_display_name(self):
        item = TestDataFactory.create_catalog_item(name='LED Par Light')
        quote = TestDataFactory.create_quote(items=[
            (item, 1),
            {'is_custom': True, 'custom_name': 'Truss build', 'quantity': 1, 'price_per_day_cents': 0},
        ])
        names = [line.display_name for line in QuoteItem.objects.filter(section__quote=quote)]
        self.assertEqual(names, ['LED Par Light', 'Truss build'])


class QuoteAPITests(TestCase):
    """Test quote create/update/delete"""

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)
        self.customer = TestDataFactory.create_client(name='Acme Events')
        self.venue = TestDataFactory.create_venue(venue_name='Convention Center')
        self.par = TestDataFactory.create_catalog_item(name='LED Par Light', price_per_day_cents=2500)
        self.speaker = TestDataFactory.create_catalog_item(name='Line Array', category='audio', price_per_day_cents=10000)

    def quote_payload(self, **overrides):
        payload = {
            'client': self.customer.id,
            'venue': self.venue.id,
            'event_start_date': '2025-06-10',
            'event_end_date': '2025-06-12',
            'office': 'dallas',
            'sections': [
                {
                    'name': 'Lighting',
                    'items': [
                        {'equipment': self.par.id, 'quantity': 2, 'price_per_day_cents': 2500, 'number_of_days': 3},
                    ],
                },
                {
                    'name': 'Audio',
                    'tax_enabled': True,
                    'tax_rate': 8,
                    'items': [
                        {'equipment': self.speaker.id, 'quantity': 1, 'price_per_day_cents': 10000, 'number_of_days': 1},
                        {'is_custom': True, 'custom_name': 'A1 engineer', 'quantity': 1,
                         'price_per_day_cents': 0, 'number_of_days': 1},
                    ],
                },
            ],
        }
        payload.update(overrides)
        return payload

    def test_create_quote_computes_totals(self):
        response = self.client.post('/api/v1/quotes/', self.quote_payload(), format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(response.data['reference_number'].startswith('Q-'))
        self.assertEqual(response.data['status'], 'draft')
        self.assertEqual(response.data['subtotal_cents'], 25000)
        self.assertEqual(response.data['tax_cents'], 800)
        self.assertEqual(response.data['total_cents'], 25800)
        self.assertEqual([s['name'] for s in response.data['sections']], ['Lighting', 'Audio'])
        self.assertEqual(response.data['sections'][0]['total_cents'], 15000)
        self.assertEqual(response.data['sections'][1]['total_cents'], 10800)
        self.assertEqual(response.data['created_by'], self.user.id)
        self.assertTrue(AuditLog.objects.filter(action='quote_create').exists())

    def test_submitted_totals_are_ignored(self):
        response = self.client.post('/api/v1/quotes/', self.quote_payload(total_cents=1), format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['total_cents'], 25800)

    def test_quote_without_sections(self):
        response = self.client.post('/api/v1/quotes/', self.quote_payload(sections=[]), format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['total_cents'], 0)

    def test_catalog_line_needs_equipment(self):
        payload = self.quote_payload(sections=[{
            'name': 'Lighting',
            'items': [{'quantity': 1, 'price_per_day_cents': 100, 'number_of_days': 1}],
        }])
        response = self.client.post('/api/v1/quotes/', payload, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(Quote.objects.count(), 0)

    def test_custom_line_needs_name(self):
        payload = self.quote_payload(sections=[{
            'name': 'Labor',
            'items': [{'is_custom': True, 'custom_name': ' ', 'quantity': 1,
                       'price_per_day_cents': 100, 'number_of_days': 1}],
        }])
        response = self.client.post('/api/v1/quotes/', payload, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_custom_line_drops_equipment(self):
        payload = self.quote_payload(sections=[{
            'name': 'Labor',
            'items': [{'is_custom': True, 'custom_name': 'Stagehand', 'equipment': self.par.id,
                       'quantity': 2, 'price_per_day_cents': 100, 'number_of_days': 1}],
        }])
        response = self.client.post('/api/v1/quotes/', payload, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertIsNone(QuoteItem.objects.get().equipment)

    def test_quantity_and_days_must_be_positive(self):
        for field in ('quantity', 'number_of_days'):
            line = {'equipment': self.par.id, 'quantity': 1, 'price_per_day_cents': 100, 'number_of_days': 1}
            line[field] = 0
            payload = self.quote_payload(sections=[{'name': 'Lighting', 'items': [line]}])
            response = self.client.post('/api/v1/quotes/', payload, format='json')
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, field)

    def test_end_before_start_rejected(self):
        response = self.client.post(
            '/api/v1/quotes/', self.quote_payload(event_end_date='2025-06-01'), format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_invalid_office_rejected(self):
        response = self.client.post('/api/v1/quotes/', self.quote_payload(office='boston'), format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_update_replaces_sections(self):
        created = self.client.post('/api/v1/quotes/', self.quote_payload(), format='json').data
        payload = self.quote_payload(sections=[{
            'name': 'Everything',
            'tax_enabled': True,
            'tax_rate': 10,
            'items': [{'equipment': self.par.id, 'quantity': 1, 'price_per_day_cents': 1250, 'number_of_days': 1}],
        }])
        response = self.client.put(f"/api/v1/quotes/{created['id']}/", payload, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data['sections']), 1)
        self.assertEqual(response.data['subtotal_cents'], 1250)
        self.assertEqual(response.data['tax_cents'], 125)
        self.assertEqual(response.data['total_cents'], 1375)
        self.assertEqual(response.data['reference_number'], created['reference_number'])
        self.assertEqual(QuoteSection.objects.count(), 1)
        self.assertEqual(QuoteItem.objects.count(), 1)
        self.assertTrue(AuditLog.objects.filter(action='quote_update').exists())

    def test_patch_without_sections_keeps_lines(self):
        created = self.client.post('/api/v1/quotes/', self.quote_payload(), format='json').data
        response = self.client.patch(f"/api/v1/quotes/{created['id']}/", {'notes': 'Load in 7am'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['notes'], 'Load in 7am')
        self.assertEqual(response.data['total_cents'], 25800)
        self.assertEqual(QuoteItem.objects.count(), 3)

    def test_delete_quote(self):
        quote = TestDataFactory.create_quote(items=[(self.par, 1)])
        response = self.client.delete(f'/api/v1/quotes/{quote.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Quote.objects.filter(id=quote.id).exists())
        self.assertEqual(QuoteItem.objects.count(), 0)
        self.assertTrue(AuditLog.objects.filter(action='quote_delete', object_reference=quote.reference_number).exists())


class QuoteListTests(TestCase):
    """Test quote list filters and the confirmed list"""

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)
        self.june = TestDataFactory.create_quote(
            event_start_date=date(2025, 6, 10), event_end_date=date(2025, 6, 12), status=Quote.Status.APPROVED
        )
        self.july = TestDataFactory.create_quote(
            event_start_date=date(2025, 7, 1), office='miami', status=Quote.Status.SENT
        )

    def test_filter_by_status_and_office(self):
        response = self.client.get('/api/v1/quotes/?status=approved')
        self.assertEqual([row['id'] for row in response.data], [self.june.id])
        response = self.client.get('/api/v1/quotes/?office=miami')
        self.assertEqual([row['id'] for row in response.data], [self.july.id])

    def test_date_window_uses_overlap(self):
        # Window starts on the June job's last day
        response = self.client.get('/api/v1/quotes/?date_from=2025-06-12&date_to=2025-06-30')
        self.assertEqual([row['id'] for row in response.data], [self.june.id])
        # Single-day July job
        response = self.client.get('/api/v1/quotes/?date_from=2025-07-01&date_to=2025-07-01')
        self.assertEqual([row['id'] for row in response.data], [self.july.id])
        response = self.client.get('/api/v1/quotes/?date_from=2025-07-02')
        self.assertEqual(response.data, [])

    def test_filter_by_client(self):
        response = self.client.get(f'/api/v1/quotes/?client={self.july.client_id}')
        self.assertEqual([row['id'] for row in response.data], [self.july.id])

    def test_invalid_status_filter(self):
        response = self.client.get('/api/v1/quotes/?status=won')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_confirmed_list(self):
        response = self.client.get('/api/v1/quotes/confirmed/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([row['id'] for row in response.data], [self.june.id])


class QuoteStatusTests(TestCase):
    """Test status changes"""

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)
        self.quote = TestDataFactory.create_quote()

    def test_approve(self):
        response = self.client.post(f'/api/v1/quotes/{self.quote.id}/status/', {'status': 'approved'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.quote.refresh_from_db()
        self.assertTrue(self.quote.is_confirmed)
        log = AuditLog.objects.get(action='quote_status')
        self.assertEqual(log.changes['status'], {'old': 'draft', 'new': 'approved'})

    def test_unknown_status(self):
        response = self.client.post(f'/api/v1/quotes/{self.quote.id}/status/', {'status': 'won'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_same_status_is_not_audited(self):
        self.client.post(f'/api/v1/quotes/{self.quote.id}/status/', {'status': 'draft'}, format='json')
        self.assertFalse(AuditLog.objects.filter(action='quote_status').exists())


class QuotePrepAndPullTests(TestCase):
    """Test prep (availability) and pull lists"""

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)
        self.par = TestDataFactory.create_catalog_item(name='LED Par Light')
        self.mic = TestDataFactory.create_catalog_item(name='Shure SM58', category='audio')
        TestDataFactory.create_asset_units(self.par, 5, office='dallas')
        TestDataFactory.create_asset_units(self.mic, 2, office='dallas')
        TestDataFactory.create_asset_units(self.mic, 10, office='miami')
        # Another confirmed job holding 3 pars over overlapping dates
        TestDataFactory.create_quote(
            status=Quote.Status.APPROVED, items=[(self.par, 3)],
            event_start_date=date(2025, 6, 11), event_end_date=date(2025, 6, 13),
        )
        self.quote = TestDataFactory.create_quote(
            status=Quote.Status.APPROVED,
            items=[
                (self.par, 4),
                (self.mic, 1),
                {'is_custom': True, 'custom_name': 'Haze machine', 'custom_category': 'effects',
                 'quantity': 1, 'price_per_day_cents': 5000},
            ],
            event_start_date=date(2025, 6, 10), event_end_date=date(2025, 6, 12),
        )

    def test_prep(self):
        response = self.client.get(f'/api/v1/quotes/{self.quote.id}/prep/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        lines = {line['item_name']: line for line in response.data['lines']}
        self.assertEqual(set(lines), {'LED Par Light', 'Shure SM58'})
        self.assertEqual(lines['LED Par Light']['available'], 2)
        self.assertEqual(lines['LED Par Light']['shortage'], -2)
        # Only dallas units count
        self.assertEqual(lines['Shure SM58']['available'], 2)
        self.assertEqual(lines['Shure SM58']['shortage'], 1)
        self.assertTrue(response.data['has_shortage'])

    def test_pull_list(self):
        self.quote.sections.first().items.create(
            position=9, equipment=self.par, quantity=2, price_per_day_cents=2500
        )
        response = self.client.get(f'/api/v1/quotes/{self.quote.id}/pull-list/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        equipment = {row['item_name']: row['quantity'] for row in response.data['equipment']}
        self.assertEqual(equipment, {'LED Par Light': 6, 'Shure SM58': 1})
        self.assertEqual(response.data['custom_items'][0]['name'], 'Haze machine')
        self.assertEqual(response.data['total_lines'], 4)

    def test_missing_quote(self):
        response = self.client.get('/api/v1/quotes/99999/prep/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
