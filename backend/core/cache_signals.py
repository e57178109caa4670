"""
Cache invalidation signals
Automatically invalidate cache when data changes
"""
from django.db.models.signals import post_save, post_delete
from django.dispatch import receiver
import logging

from .cache_utils import invalidate_catalog_cache, invalidate_dashboard_cache

logger = logging.getLogger(__name__)

# Catalog list embeds per-item unit counts, so unit changes invalidate it too
CATALOG_MODELS = {'CatalogItem', 'AssetUnit'}
DASHBOARD_MODELS = {'CatalogItem', 'AssetUnit', 'Client', 'Venue', 'Quote', 'Booking'}


@receiver([post_save, post_delete])
def invalidate_catalog_cache_on_change(sender, instance, **kwargs):
    """Invalidate catalog list cache when catalog items or asset units change"""
    if sender.__name__ not in CATALOG_MODELS:
        return
    try:
        invalidate_catalog_cache()
    except Exception as e:
        logger.warning(f"Error invalidating catalog cache: {e}")


@receiver([post_save, post_delete])
def invalidate_dashboard_cache_on_change(sender, instance, **kwargs):
    """Invalidate dashboard cache when anything it counts changes"""
    if sender.__name__ not in DASHBOARD_MODELS:
        return
    try:
        invalidate_dashboard_cache()
    except Exception as e:
        logger.warning(f"Error invalidating dashboard cache: {e}")
