from django.db import models
from backend.catalog.models import CatalogItem
from backend.core.choices import OfficeLocation


class AssetUnit(models.Model):
    """One physical, individually tagged unit of a catalog item"""

    class Status(models.TextChoices):
        AVAILABLE = 'available', 'Available'
        RENTED = 'rented', 'Rented'
        MAINTENANCE = 'maintenance', 'Maintenance'

    item = models.ForeignKey(CatalogItem, on_delete=models.CASCADE, related_name='asset_units')
    asset_tag = models.CharField(max_length=100, unique=True, db_index=True)
    office_location = models.CharField(max_length=20, choices=OfficeLocation.choices, db_index=True)
    # Manual flag; never changed by quote approval or event dates
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.AVAILABLE, db_index=True)
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.asset_tag} ({self.item.name})"

    class Meta:
        db_table = 'asset_units'
        ordering = ['asset_tag']
        indexes = [
            models.Index(fields=['item', 'office_location', 'status'], name='idx_unit_item_office_status'),
        ]
