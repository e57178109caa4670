from django.core.exceptions import ValidationError
from django.db import models
from backend.catalog.models import CatalogItem
from backend.core.choices import OfficeLocation
from backend.core.models import User
from backend.parties.models import Client, Venue
from backend.pricing.totals import LineItem, Section, compute_section_totals, compute_quote_totals


class Quote(models.Model):
    """Rental quote for an event. An approved quote is a confirmed booking."""

    class Status(models.TextChoices):
        DRAFT = 'draft', 'Draft'
        SENT = 'sent', 'Sent'
        APPROVED = 'approved', 'Approved'
        REJECTED = 'rejected', 'Rejected'

    reference_number = models.CharField(max_length=100, unique=True)
    client = models.ForeignKey(Client, on_delete=models.PROTECT, related_name='quotes')
    venue = models.ForeignKey(Venue, on_delete=models.SET_NULL, null=True, blank=True, related_name='quotes')
    event_start_date = models.DateField(db_index=True)
    event_end_date = models.DateField(null=True, blank=True)
    office = models.CharField(max_length=20, choices=OfficeLocation.choices, db_index=True)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.DRAFT, db_index=True)
    notes = models.TextField(blank=True)
    subtotal_cents = models.BigIntegerField(default=0)
    tax_cents = models.BigIntegerField(default=0)
    total_cents = models.BigIntegerField(default=0)
    created_by = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True, related_name='quotes')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.reference_number

    @property
    def is_confirmed(self):
        return self.status == self.Status.APPROVED

    @property
    def effective_end_date(self):
        """Quotes without an end date are single-day events"""
        return self.event_end_date or self.event_start_date

    def clean(self):
        if self.event_end_date and self.event_start_date and self.event_end_date < self.event_start_date:
            raise ValidationError({'event_end_date': 'Event end date cannot be before the start date'})

    def recalculate_totals(self):
        """Recompute and store section and quote totals from the current items"""
        sections = list(self.sections.prefetch_related('items'))
        for section in sections:
            totals = compute_section_totals(section.to_record())
            section.subtotal_cents = totals.subtotal_cents
            section.tax_cents = totals.tax_cents
            section.total_cents = totals.total_cents
            section.save(update_fields=['subtotal_cents', 'tax_cents', 'total_cents'])

        totals = compute_quote_totals(section.to_record() for section in sections)
        self.subtotal_cents = totals.subtotal_cents
        self.tax_cents = totals.tax_cents
        self.total_cents = totals.total_cents
        self.save(update_fields=['subtotal_cents', 'tax_cents', 'total_cents', 'updated_at'])
        return totals

    class Meta:
        db_table = 'quotes'
        ordering = ['-event_start_date', '-id']
        indexes = [
            models.Index(fields=['status', 'office'], name='idx_quote_status_office'),
        ]


class QuoteSection(models.Model):
    """Named group of lines on a quote, taxed independently"""
    quote = models.ForeignKey(Quote, on_delete=models.CASCADE, related_name='sections')
    position = models.PositiveIntegerField(default=0)
    name = models.CharField(max_length=200)
    tax_enabled = models.BooleanField(default=False)
    tax_rate = models.PositiveIntegerField(default=0, help_text='Whole percent, e.g. 8 for 8%')
    subtotal_cents = models.BigIntegerField(default=0)
    tax_cents = models.BigIntegerField(default=0)
    total_cents = models.BigIntegerField(default=0)

    def __str__(self):
        return f"{self.quote.reference_number} - {self.name}"

    def to_record(self):
        return Section(
            items=tuple(item.to_record() for item in self.items.all()),
            tax_enabled=self.tax_enabled,
            tax_rate=self.tax_rate,
        )

    class Meta:
        db_table = 'quote_sections'
        ordering = ['position', 'id']


class QuoteItem(models.Model):
    """A line on a quote: either a catalog item or a custom line"""
    section = models.ForeignKey(QuoteSection, on_delete=models.CASCADE, related_name='items')
    position = models.PositiveIntegerField(default=0)
    equipment = models.ForeignKey(CatalogItem, on_delete=models.PROTECT, null=True, blank=True, related_name='quote_items')
    quantity = models.PositiveIntegerField(default=1)
    price_per_day_cents = models.BigIntegerField(default=0)
    number_of_days = models.PositiveIntegerField(default=1)
    is_custom = models.BooleanField(default=False)
    description = models.TextField(blank=True)
    custom_name = models.CharField(max_length=200, blank=True)
    custom_category = models.CharField(max_length=100, blank=True)

    def __str__(self):
        return self.display_name

    @property
    def display_name(self):
        if self.is_custom:
            return self.custom_name
        return self.equipment.name if self.equipment_id else ''

    @property
    def line_total_cents(self):
        return self.price_per_day_cents * self.quantity * self.number_of_days

    def to_record(self):
        return LineItem(
            price_per_day_cents=self.price_per_day_cents,
            quantity=self.quantity,
            number_of_days=self.number_of_days,
        )

    def clean(self):
        if self.is_custom and not (self.custom_name or '').strip():
            raise ValidationError({'custom_name': 'Custom lines need a name'})
        if not self.is_custom and not self.equipment_id:
            raise ValidationError({'equipment': 'Catalog lines need an equipment item'})
        if self.quantity < 1:
            raise ValidationError({'quantity': 'Quantity must be at least 1'})
        if self.number_of_days < 1:
            raise ValidationError({'number_of_days': 'Number of days must be at least 1'})

    class Meta:
        db_table = 'quote_items'
        ordering = ['position', 'id']
