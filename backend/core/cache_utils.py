"""
Caching utilities for list and dashboard queries.

Keys are namespaced with a version counter so a whole namespace can be
invalidated with a single increment; this works the same on Redis and on
the local-memory backend used in development and tests.
"""
from django.core.cache import cache
import hashlib
import logging

logger = logging.getLogger(__name__)

# Cache TTLs (in seconds)
CATALOG_LIST_CACHE_TTL = 180  # 3 minutes
DASHBOARD_CACHE_TTL = 300  # 5 minutes
VERSION_KEY_TTL = None  # version counters never expire

CATALOG_NAMESPACE = 'catalog_list'
DASHBOARD_NAMESPACE = 'dashboard'


def _version_key(namespace):
    return f"cache_version:{namespace}"


def get_namespace_version(namespace):
    """Current version of a cache namespace (starts at 1)"""
    version = cache.get(_version_key(namespace))
    if version is None:
        cache.add(_version_key(namespace), 1, VERSION_KEY_TTL)
        version = cache.get(_version_key(namespace), 1)
    return version


def bump_namespace_version(namespace):
    """Invalidate every key of a namespace by moving to a new version"""
    key = _version_key(namespace)
    try:
        return cache.incr(key)
    except ValueError:
        # Counter missing (evicted or never created)
        cache.set(key, 2, VERSION_KEY_TTL)
        return 2


def make_cache_key(prefix, *args, **kwargs):
    """Generate a unique, versioned cache key from arguments"""
    key_data = f"{prefix}:{args}:{sorted(kwargs.items())}"
    # Hash it to keep key length reasonable
    key_hash = hashlib.md5(key_data.encode()).hexdigest()
    return f"{prefix}:v{get_namespace_version(prefix)}:{key_hash}"


def get_cached_catalog_list(filters_dict):
    """
    Get cached catalog item list for a set of filters
    Returns tuple: (cached_data, cache_key)
    """
    cache_key = make_cache_key(CATALOG_NAMESPACE, **filters_dict)
    cached_data = cache.get(cache_key)
    if cached_data is not None:
        logger.debug(f"Cache HIT for catalog list: {cache_key}")
    return cached_data, cache_key


def cache_catalog_list(cache_key, data, ttl=CATALOG_LIST_CACHE_TTL):
    """Cache catalog item list data"""
    cache.set(cache_key, data, ttl)
    logger.debug(f"Cached catalog list: {cache_key}")


def get_cached_dashboard():
    """Get cached dashboard summary. Returns tuple: (cached_data, cache_key)"""
    cache_key = make_cache_key(DASHBOARD_NAMESPACE)
    return cache.get(cache_key), cache_key


def cache_dashboard(cache_key, data, ttl=DASHBOARD_CACHE_TTL):
    """Cache dashboard summary"""
    cache.set(cache_key, data, ttl)
    logger.debug(f"Cached dashboard summary: {cache_key}")


def invalidate_catalog_cache():
    """Invalidate all catalog list cache entries"""
    bump_namespace_version(CATALOG_NAMESPACE)
    logger.info("Invalidated catalog cache")


def invalidate_dashboard_cache():
    """Invalidate dashboard summary cache"""
    bump_namespace_version(DASHBOARD_NAMESPACE)
    logger.info("Invalidated dashboard cache")
