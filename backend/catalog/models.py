from django.db import models


class CatalogItem(models.Model):
    """Rentable equipment type (e.g. "LED Par Light"). Physical units live in inventory.AssetUnit."""

    class Category(models.TextChoices):
        LIGHTING = 'lighting', 'Lighting'
        AUDIO = 'audio', 'Audio'
        VIDEO = 'video', 'Video'
        CABLE = 'cable', 'Cable'
        DRAPE = 'drape', 'Drape'
        MISCELLANEOUS = 'miscellaneous', 'Miscellaneous'

    name = models.CharField(max_length=200, db_index=True)
    category = models.CharField(max_length=20, choices=Category.choices, db_index=True)
    price_per_day_cents = models.BigIntegerField(default=0)
    description = models.TextField(blank=True)
    photo = models.URLField(blank=True)
    is_active = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.name} ({self.get_category_display()})"

    def clean(self):
        from django.core.exceptions import ValidationError
        if self.price_per_day_cents is not None and self.price_per_day_cents < 0:
            raise ValidationError({'price_per_day_cents': 'Price per day cannot be negative'})

    class Meta:
        db_table = 'catalog_items'
        ordering = ['name']
