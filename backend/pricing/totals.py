"""
Quote totals calculator.

All money is integer cents. A line is priced as
    price_per_day_cents * quantity * number_of_days
a section adds its lines and, when tax is enabled, a tax of
    subtotal * tax_rate / 100
rounded half-up to the cent. Quote totals are the plain sums of the
section totals; each section is taxed on its own subtotal only.

These are pure functions over immutable records: no database, no
caching, no floats. Inputs are expected to be validated by the caller
(quantity >= 1, number_of_days >= 1, non-negative price and rate).
"""
from dataclasses import dataclass, field
from typing import Iterable, Tuple


@dataclass(frozen=True)
class LineItem:
    price_per_day_cents: int
    quantity: int
    number_of_days: int


@dataclass(frozen=True)
class Section:
    items: Tuple[LineItem, ...] = field(default_factory=tuple)
    tax_enabled: bool = False
    tax_rate: int = 0


@dataclass(frozen=True)
class Totals:
    subtotal_cents: int = 0
    tax_cents: int = 0
    total_cents: int = 0

    def __add__(self, other):
        return Totals(
            subtotal_cents=self.subtotal_cents + other.subtotal_cents,
            tax_cents=self.tax_cents + other.tax_cents,
            total_cents=self.total_cents + other.total_cents,
        )

    def as_dict(self):
        return {
            'subtotal_cents': self.subtotal_cents,
            'tax_cents': self.tax_cents,
            'total_cents': self.total_cents,
        }


def percent_of_cents(amount_cents: int, rate_percent: int) -> int:
    """rate_percent % of amount_cents, rounded half-up to the cent"""
    assert amount_cents >= 0 and rate_percent >= 0, 'amounts and rates must be non-negative'
    return (amount_cents * rate_percent + 50) // 100


def line_total_cents(item: LineItem) -> int:
    assert item.quantity >= 1, 'quantity must be at least 1'
    assert item.number_of_days >= 1, 'number_of_days must be at least 1'
    return item.price_per_day_cents * item.quantity * item.number_of_days


def compute_section_totals(section: Section) -> Totals:
    """Subtotal, tax and total of one section"""
    subtotal = sum(line_total_cents(item) for item in section.items)
    tax = percent_of_cents(subtotal, section.tax_rate) if section.tax_enabled else 0
    return Totals(subtotal_cents=subtotal, tax_cents=tax, total_cents=subtotal + tax)


def compute_quote_totals(sections: Iterable[Section]) -> Totals:
    """Elementwise sum of every section's totals"""
    totals = Totals()
    for section in sections:
        totals = totals + compute_section_totals(section)
    return totals


def section_from_data(data) -> Section:
    """
    Build a Section record from a mapping shaped like the quote API payload:
    {'tax_enabled', 'tax_rate', 'items': [{'price_per_day_cents', 'quantity', 'number_of_days'}, ...]}
    """
    items = tuple(
        LineItem(
            price_per_day_cents=int(item['price_per_day_cents']),
            quantity=int(item['quantity']),
            number_of_days=int(item['number_of_days']),
        )
        for item in data.get('items', [])
    )
    return Section(
        items=items,
        tax_enabled=bool(data.get('tax_enabled', False)),
        tax_rate=int(data.get('tax_rate', 0) or 0),
    )
