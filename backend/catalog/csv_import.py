"""
Inventory CSV import.

One row per physical unit:
    item_name, category, description, price, asset_tag, location, notes
price is dollars per day ("25.00"); location is an office name and defaults
to Dallas. Rows sharing name and category become one catalog item; an
existing catalog item with the same name and category is reused.
"""
import csv
import io
import logging
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from django.db import transaction

from backend.core.cache_utils import invalidate_catalog_cache, invalidate_dashboard_cache
from backend.core.choices import OfficeLocation
from backend.inventory.models import AssetUnit
from .models import CatalogItem

logger = logging.getLogger('backend.catalog')

CSV_COLUMNS = ['item_name', 'category', 'description', 'price', 'asset_tag', 'location', 'notes']

CSV_TEMPLATE_ROWS = [
    ['LED Par Light', 'lighting', 'RGBW LED par can', '25.00', 'LGT-0001', 'Dallas', ''],
    ['LED Par Light', 'lighting', 'RGBW LED par can', '25.00', 'LGT-0002', 'Miami', 'Cracked lens cover'],
    ['Shure SM58', 'audio', 'Dynamic vocal microphone', '15.00', 'AUD-0001', 'Phoenix', ''],
]


class CsvImportError(Exception):
    """Raised with every row error found; nothing is written when it is raised"""

    def __init__(self, errors):
        self.errors = errors
        super().__init__(f"{len(errors)} invalid row(s)")


def csv_template():
    """Header plus example rows, as CSV text"""
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(CSV_COLUMNS)
    writer.writerows(CSV_TEMPLATE_ROWS)
    return buffer.getvalue()


def dollars_to_cents(value):
    cents = (Decimal(value.strip().lstrip('$') or '0') * 100).quantize(Decimal('1'), rounding=ROUND_HALF_UP)
    if cents < 0:
        raise InvalidOperation
    return int(cents)


def _office_for(location):
    location = (location or '').strip().lower() or OfficeLocation.DALLAS
    if location not in OfficeLocation.values:
        raise ValueError(f"unknown location '{location}'")
    return location


def parse_rows(csv_text):
    """
    Validate CSV text and return cleaned row dicts.

    The header line is optional. Raises CsvImportError listing every bad
    row (1-based line numbers) including asset tags repeated in the file
    or already in use.
    """
    reader = csv.reader(io.StringIO(csv_text.strip()))
    rows, errors, seen_tags = [], [], set()

    for line_number, fields in enumerate(reader, start=1):
        fields = [field.strip() for field in fields]
        if not any(fields):
            continue
        if line_number == 1 and fields[0].lower() == 'item_name':
            continue
        if len(fields) < len(CSV_COLUMNS):
            fields += [''] * (len(CSV_COLUMNS) - len(fields))
        row = dict(zip(CSV_COLUMNS, fields))

        problems = []
        if not row['item_name']:
            problems.append('item_name is required')
        category = row['category'].lower()
        if category not in CatalogItem.Category.values:
            problems.append(f"unknown category '{row['category']}'")
        try:
            price_cents = dollars_to_cents(row['price'])
        except InvalidOperation:
            problems.append(f"invalid price '{row['price']}'")
            price_cents = None
        try:
            office = _office_for(row['location'])
        except ValueError as e:
            problems.append(str(e))
            office = None

        tag = row['asset_tag']
        if not tag:
            problems.append('asset_tag is required')
        elif tag.lower() in seen_tags:
            problems.append(f"asset_tag '{tag}' appears more than once")
        seen_tags.add(tag.lower())

        if problems:
            errors.append({'line': line_number, 'errors': problems})
            continue
        rows.append({
            'line': line_number,
            'name': row['item_name'],
            'category': category,
            'description': row['description'],
            'price_per_day_cents': price_cents,
            'asset_tag': tag,
            'office_location': office,
            'notes': row['notes'],
        })

    existing = set(
        AssetUnit.objects.filter(asset_tag__in=[row['asset_tag'] for row in rows])
        .values_list('asset_tag', flat=True)
    )
    for row in rows:
        if row['asset_tag'] in existing:
            errors.append({'line': row['line'], 'errors': [f"asset_tag '{row['asset_tag']}' already exists"]})

    if errors:
        raise CsvImportError(sorted(errors, key=lambda error: error['line']))
    return rows


@transaction.atomic
def import_inventory_csv(csv_text):
    """Create catalog items and asset units from CSV text; all rows or none"""
    rows = parse_rows(csv_text)
    items = {}
    created_items = 0

    for row in rows:
        key = (row['name'].lower(), row['category'])
        item = items.get(key)
        if item is None:
            item = CatalogItem.objects.filter(name__iexact=row['name'], category=row['category']).first()
            if item is None:
                item = CatalogItem.objects.create(
                    name=row['name'],
                    category=row['category'],
                    description=row['description'],
                    price_per_day_cents=row['price_per_day_cents'],
                )
                created_items += 1
            items[key] = item

    AssetUnit.objects.bulk_create([
        AssetUnit(
            item=items[(row['name'].lower(), row['category'])],
            asset_tag=row['asset_tag'],
            office_location=row['office_location'],
            notes=row['notes'],
        )
        for row in rows
    ])
    # bulk_create sends no post_save signals
    invalidate_catalog_cache()
    invalidate_dashboard_cache()

    logger.info(f"CSV import: {len(rows)} unit(s), {created_items} new catalog item(s)")
    return {
        'units_created': len(rows),
        'catalog_items_created': created_items,
        'catalog_items_reused': len(items) - created_items,
    }

