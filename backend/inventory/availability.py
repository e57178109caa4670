"""
Equipment availability at one office over a date range.

Availability = units of the item at the office whose status is
'available', minus the quantities already committed to other confirmed
quotes at the same office whose event dates overlap the requested range.

Unit status is a manual flag and is not date-aware: a unit marked
'rented' or 'maintenance' never counts, whatever the dates.

Everything here works on in-memory snapshots; loading them from the
database is done in backend.inventory.services.
"""
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Optional, Tuple

AVAILABLE_STATUS = 'available'


@dataclass(frozen=True)
class AssetUnitSnapshot:
    item_id: int
    office_location: str
    status: str


@dataclass(frozen=True)
class BookedItem:
    equipment_id: Optional[int]
    quantity: int
    is_custom: bool = False


@dataclass(frozen=True)
class QuoteSnapshot:
    id: int
    office: str
    event_start_date: date
    event_end_date: Optional[date] = None
    items: Tuple[BookedItem, ...] = field(default_factory=tuple)


def date_range(start: date, end: Optional[date]) -> Tuple[date, date]:
    """A missing end date means a single-day event"""
    return start, end or start


def dates_overlap(start1: date, end1: Optional[date], start2: date, end2: Optional[date]) -> bool:
    """Inclusive overlap: ranges sharing a single boundary day overlap"""
    s1, e1 = date_range(start1, end1)
    s2, e2 = date_range(start2, end2)
    return s1 <= e2 and s2 <= e1


def count_available_units(item_id, office, asset_units: Iterable[AssetUnitSnapshot]) -> int:
    return sum(
        1 for unit in asset_units
        if unit.item_id == item_id
        and unit.office_location == office
        and unit.status == AVAILABLE_STATUS
    )


def allocated_quantity(item_id, office, exclude_quote_id, start_date: date, end_date: Optional[date],
                       confirmed_quotes: Iterable[QuoteSnapshot]) -> int:
    """Units of item_id committed to other overlapping confirmed quotes at office"""
    allocated = 0
    for quote in confirmed_quotes:
        if exclude_quote_id is not None and quote.id == exclude_quote_id:
            continue
        if quote.office != office:
            continue
        if not dates_overlap(quote.event_start_date, quote.event_end_date, start_date, end_date):
            continue
        allocated += sum(
            booked.quantity for booked in quote.items
            if not booked.is_custom and booked.equipment_id == item_id
        )
    return allocated


def available_quantity(item_id, office, exclude_quote_id, start_date: date, end_date: Optional[date],
                       asset_units: Iterable[AssetUnitSnapshot],
                       confirmed_quotes: Iterable[QuoteSnapshot]) -> int:
    """Free units of item_id at office for the range; never negative"""
    total_available = count_available_units(item_id, office, asset_units)
    allocated = allocated_quantity(item_id, office, exclude_quote_id, start_date, end_date, confirmed_quotes)
    return max(0, total_available - allocated)


def shortage(item_id, office, required_quantity: int, exclude_quote_id, start_date: date,
             end_date: Optional[date], asset_units: Iterable[AssetUnitSnapshot],
             confirmed_quotes: Iterable[QuoteSnapshot]) -> int:
    """Available minus required. Negative means short by that many units."""
    available = available_quantity(
        item_id, office, exclude_quote_id, start_date, end_date, asset_units, confirmed_quotes
    )
    return available - required_quantity
