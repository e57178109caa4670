"""
Test suite for Pricing module
Tests: line/section/quote totals, tax rounding, and the totals preview endpoint
"""
from django.test import SimpleTestCase, TestCase
from rest_framework import status
from backend.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from backend.pricing.totals import (
    LineItem, Section, Totals,
    line_total_cents, compute_section_totals, compute_quote_totals,
    percent_of_cents, section_from_data,
)


class LineTotalTests(SimpleTestCase):
    """Test per-line arithmetic"""

    def test_price_times_quantity_times_days(self):
        """$25.00/day, 2 units, 3 days is $150.00"""
        item = LineItem(price_per_day_cents=2500, quantity=2, number_of_days=3)
        self.assertEqual(line_total_cents(item), 15000)

    def test_free_item(self):
        self.assertEqual(line_total_cents(LineItem(0, 5, 2)), 0)


class SectionTotalsTests(SimpleTestCase):
    """Test section subtotal, tax and total"""

    def test_empty_section_is_all_zero(self):
        totals = compute_section_totals(Section(items=(), tax_enabled=True, tax_rate=8))
        self.assertEqual(totals, Totals(0, 0, 0))

    def test_taxed_section(self):
        """One $100.00 item taxed at 8%"""
        section = Section(items=(LineItem(10000, 1, 1),), tax_enabled=True, tax_rate=8)
        totals = compute_section_totals(section)
        self.assertEqual(totals.subtotal_cents, 10000)
        self.assertEqual(totals.tax_cents, 800)
        self.assertEqual(totals.total_cents, 10800)

    def test_tax_disabled_ignores_rate(self):
        for rate in (0, 8, 25, 100):
            section = Section(items=(LineItem(10000, 1, 1),), tax_enabled=False, tax_rate=rate)
            self.assertEqual(compute_section_totals(section).tax_cents, 0)

    def test_subtotal_is_sum_of_lines(self):
        section = Section(items=(LineItem(2500, 2, 3), LineItem(1000, 1, 1), LineItem(99, 3, 2)))
        self.assertEqual(compute_section_totals(section).subtotal_cents, 15000 + 1000 + 594)

    def test_line_order_does_not_matter(self):
        items = (LineItem(2500, 2, 3), LineItem(1999, 1, 4), LineItem(333, 7, 1))
        forward = compute_section_totals(Section(items=items, tax_enabled=True, tax_rate=7))
        backward = compute_section_totals(Section(items=tuple(reversed(items)), tax_enabled=True, tax_rate=7))
        self.assertEqual(forward, backward)

    def test_idempotent(self):
        section = Section(items=(LineItem(1234, 3, 2),), tax_enabled=True, tax_rate=9)
        self.assertEqual(compute_section_totals(section), compute_section_totals(section))


class TaxRoundingTests(SimpleTestCase):
    """Tax is rounded half-up to the cent using integer arithmetic"""

    def test_exact_cents(self):
        self.assertEqual(percent_of_cents(1250, 10), 125)

    def test_half_cent_rounds_up(self):
        # 5 * 10 / 100 = 0.5
        self.assertEqual(percent_of_cents(5, 10), 1)
        # 15 * 10 / 100 = 1.5
        self.assertEqual(percent_of_cents(15, 10), 2)

    def test_below_half_rounds_down(self):
        # 14 * 10 / 100 = 1.4
        self.assertEqual(percent_of_cents(14, 10), 1)
        # 1 * 8 / 100 = 0.08
        self.assertEqual(percent_of_cents(1, 8), 0)

    def test_section_tax_uses_rounding(self):
        # 1999 * 7 / 100 = 139.93
        section = Section(items=(LineItem(1999, 1, 1),), tax_enabled=True, tax_rate=7)
        totals = compute_section_totals(section)
        self.assertEqual(totals.tax_cents, 140)
        self.assertEqual(totals.total_cents, 2139)


class QuoteTotalsTests(SimpleTestCase):
    """Quote totals are elementwise sums of section totals"""

    def test_no_sections(self):
        self.assertEqual(compute_quote_totals([]), Totals(0, 0, 0))

    def test_sections_taxed_independently(self):
        lighting = Section(items=(LineItem(10000, 1, 1),), tax_enabled=True, tax_rate=8)
        labor = Section(items=(LineItem(5000, 2, 1),), tax_enabled=False, tax_rate=8)
        totals = compute_quote_totals([lighting, labor])
        self.assertEqual(totals.subtotal_cents, 20000)
        self.assertEqual(totals.tax_cents, 800)
        self.assertEqual(totals.total_cents, 20800)

    def test_subtotal_matches_merged_section(self):
        a = Section(items=(LineItem(2500, 2, 3), LineItem(100, 1, 1)), tax_enabled=True, tax_rate=8)
        b = Section(items=(LineItem(777, 4, 2),), tax_enabled=True, tax_rate=10)
        merged = Section(items=a.items + b.items)
        self.assertEqual(
            compute_quote_totals([a, b]).subtotal_cents,
            compute_section_totals(merged).subtotal_cents,
        )

    def test_accepts_generator(self):
        sections = (Section(items=(LineItem(100, 1, 1),)) for _ in range(3))
        self.assertEqual(compute_quote_totals(sections).total_cents, 300)

    def test_totals_as_dict(self):
        self.assertEqual(
            Totals(100, 8, 108).as_dict(),
            {'subtotal_cents': 100, 'tax_cents': 8, 'total_cents': 108},
        )


class SectionFromDataTests(SimpleTestCase):
    """Building section records from request payloads"""

    def test_builds_items_and_tax(self):
        section = section_from_data({
            'tax_enabled': True,
            'tax_rate': 8,
            'items': [{'price_per_day_cents': 10000, 'quantity': 1, 'number_of_days': 1}],
        })
        self.assertEqual(section, Section(items=(LineItem(10000, 1, 1),), tax_enabled=True, tax_rate=8))

    def test_defaults(self):
        self.assertEqual(section_from_data({}), Section())


class QuoteTotalsPreviewAPITests(TestCase):
    """Test the totals preview endpoint"""

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)

    def test_preview(self):
        response = self.client.post('/api/v1/pricing/quote-totals/', {
            'sections': [
                {
                    'name': 'Lighting',
                    'tax_enabled': True,
                    'tax_rate': 8,
                    'items': [{'price_per_day_cents': 10000, 'quantity': 1, 'number_of_days': 1}],
                },
                {
                    'name': 'Audio',
                    'items': [{'price_per_day_cents': 2500, 'quantity': 2, 'number_of_days': 3}],
                },
            ]
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['subtotal_cents'], 25000)
        self.assertEqual(response.data['tax_cents'], 800)
        self.assertEqual(response.data['total_cents'], 25800)
        self.assertEqual(response.data['sections'][0]['name'], 'Lighting')
        self.assertEqual(response.data['sections'][0]['total_cents'], 10800)
        self.assertEqual(response.data['sections'][1]['tax_cents'], 0)

    def test_preview_rejects_zero_quantity(self):
        response = self.client.post('/api/v1/pricing/quote-totals/', {
            'sections': [{'items': [{'price_per_day_cents': 100, 'quantity': 0, 'number_of_days': 1}]}]
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_preview_rejects_negative_price(self):
        response = self.client.post('/api/v1/pricing/quote-totals/', {
            'sections': [{'items': [{'price_per_day_cents': -1, 'quantity': 1, 'number_of_days': 1}]}]
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_preview_requires_authentication(self):
        self.client.logout()
        response = self.client.post('/api/v1/pricing/quote-totals/', {'sections': []}, format='json')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
