"""
Database side of availability: load asset-unit and confirmed-quote
snapshots and feed them to backend.inventory.availability.
"""
import logging
from collections import OrderedDict, defaultdict

from django.db import transaction
from django.db.models import Q

from .availability import (
    AssetUnitSnapshot, BookedItem, QuoteSnapshot,
    available_quantity, shortage, date_range,
)
from .models import AssetUnit
from backend.catalog.models import CatalogItem

logger = logging.getLogger(__name__)


def load_asset_units(item_ids=None, office=None):
    """Snapshots of asset units, optionally narrowed to some items and one office"""
    queryset = AssetUnit.objects.all()
    if item_ids is not None:
        queryset = queryset.filter(item_id__in=list(item_ids))
    if office:
        queryset = queryset.filter(office_location=office)
    return [
        AssetUnitSnapshot(item_id=item_id, office_location=office_location, status=unit_status)
        for item_id, office_location, unit_status in queryset.values_list('item_id', 'office_location', 'status')
    ]


def load_confirmed_quotes(office=None, start_date=None, end_date=None):
    """
    Snapshots of approved quotes with their equipment lines, optionally
    narrowed to one office and to quotes overlapping [start_date, end_date].
    """
    from backend.quotes.models import Quote, QuoteItem

    quotes = Quote.objects.filter(status=Quote.Status.APPROVED)
    if office:
        quotes = quotes.filter(office=office)
    if start_date:
        start, end = date_range(start_date, end_date)
        quotes = quotes.filter(event_start_date__lte=end).filter(
            Q(event_end_date__gte=start) |
            Q(event_end_date__isnull=True, event_start_date__gte=start)
        )

    booked_by_quote = defaultdict(list)
    rows = QuoteItem.objects.filter(section__quote__in=quotes).values_list(
        'section__quote_id', 'equipment_id', 'quantity', 'is_custom'
    )
    for quote_id, equipment_id, quantity, is_custom in rows:
        booked_by_quote[quote_id].append(
            BookedItem(equipment_id=equipment_id, quantity=quantity, is_custom=is_custom)
        )

    return [
        QuoteSnapshot(
            id=quote_id,
            office=quote_office,
            event_start_date=start,
            event_end_date=end,
            items=tuple(booked_by_quote.get(quote_id, ())),
        )
        for quote_id, quote_office, start, end in quotes.values_list(
            'id', 'office', 'event_start_date', 'event_end_date'
        )
    ]


def item_availability(item_id, office, start_date, end_date=None, exclude_quote_id=None, required_quantity=0):
    """Availability of one catalog item at one office for a date range"""
    asset_units = load_asset_units(item_ids=[item_id], office=office)
    confirmed_quotes = load_confirmed_quotes(office=office, start_date=start_date, end_date=end_date)
    available = available_quantity(
        item_id, office, exclude_quote_id, start_date, end_date, asset_units, confirmed_quotes
    )
    start, end = date_range(start_date, end_date)
    return {
        'item': item_id,
        'office': office,
        'start_date': start,
        'end_date': end,
        'available': available,
        'required': required_quantity,
        'shortage': available - required_quantity,
    }


def quote_prep_lines(quote):
    """
    Per catalog item on a quote: quantity required by the quote, units free
    at the quote's office over its dates (excluding the quote itself) and
    the resulting shortage. Custom lines are not stock items and are skipped.
    """
    required_by_item = OrderedDict()
    names = {}
    for section in quote.sections.all():
        for line in section.items.all():
            if line.is_custom or line.equipment_id is None:
                continue
            required_by_item[line.equipment_id] = required_by_item.get(line.equipment_id, 0) + line.quantity
            names[line.equipment_id] = line.equipment.name

    if not required_by_item:
        return []

    asset_units = load_asset_units(item_ids=required_by_item.keys(), office=quote.office)
    confirmed_quotes = load_confirmed_quotes(
        office=quote.office, start_date=quote.event_start_date, end_date=quote.event_end_date
    )

    lines = []
    for item_id, required in required_by_item.items():
        available = available_quantity(
            item_id, quote.office, quote.id, quote.event_start_date, quote.event_end_date,
            asset_units, confirmed_quotes
        )
        lines.append({
            'item': item_id,
            'item_name': names[item_id],
            'required': required,
            'available': available,
            'shortage': shortage(
                item_id, quote.office, required, quote.id, quote.event_start_date, quote.event_end_date,
                asset_units, confirmed_quotes
            ),
        })

    short = [line for line in lines if line['shortage'] < 0]
    if short:
        logger.info(f"Quote {quote.reference_number} is short on {len(short)} item(s) at {quote.office}")
    return lines


@transaction.atomic
def clear_inventory():
    """
    Delete every asset unit and every catalog item that no quote line or
    booking refers to. Referenced items are kept.
    """
    units_deleted, _ = AssetUnit.objects.all().delete()
    removable = CatalogItem.objects.filter(quote_items__isnull=True, bookings__isnull=True)
    items_deleted = removable.count()
    removable.delete()
    items_kept = CatalogItem.objects.count()
    logger.warning(f"Inventory cleared: {units_deleted} unit(s) and {items_deleted} item(s) deleted, {items_kept} item(s) kept")
    return {
        'units_deleted': units_deleted,
        'catalog_items_deleted': items_deleted,
        'catalog_items_kept': items_kept,
    }
