from django.db import models
from backend.catalog.models import CatalogItem
from backend.core.models import User
from backend.parties.models import Vendor
from backend.quotes.models import Quote


class Subrental(models.Model):
    """Equipment rented in from a vendor to cover a job"""

    class Status(models.TextChoices):
        REQUESTED = 'requested', 'Requested'
        CONFIRMED = 'confirmed', 'Confirmed'
        RECEIVED = 'received', 'Received'
        RETURNED = 'returned', 'Returned'

    quote = models.ForeignKey(Quote, on_delete=models.CASCADE, related_name='subrentals')
    vendor = models.ForeignKey(Vendor, on_delete=models.PROTECT, related_name='subrentals')
    item = models.ForeignKey(CatalogItem, on_delete=models.SET_NULL, null=True, blank=True, related_name='subrentals')
    description = models.CharField(max_length=255, blank=True)
    quantity = models.PositiveIntegerField(default=1)
    cost_cents = models.BigIntegerField(default=0)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.REQUESTED, db_index=True)
    notes = models.TextField(blank=True)
    created_by = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True, related_name='subrentals')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        label = self.item.name if self.item_id else self.description
        return f"{self.quote.reference_number} - {label} x{self.quantity}"

    class Meta:
        db_table = 'subrentals'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['quote', 'status'], name='idx_subrental_quote_status'),
        ]


class JobCost(models.Model):
    """Projected and actual vendor cost recorded against a confirmed job"""
    quote = models.ForeignKey(Quote, on_delete=models.CASCADE, related_name='costs')
    vendor = models.ForeignKey(Vendor, on_delete=models.PROTECT, null=True, blank=True, related_name='job_costs')
    vendor_category = models.CharField(max_length=20, choices=Vendor.Category.choices)
    projected_cost_cents = models.BigIntegerField(default=0)
    actual_cost_cents = models.BigIntegerField(default=0)
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.quote.reference_number} - {self.get_vendor_category_display()}"

    @property
    def variance_cents(self):
        return self.actual_cost_cents - self.projected_cost_cents

    class Meta:
        db_table = 'job_costs'
        ordering = ['quote', 'vendor_category', 'id']
