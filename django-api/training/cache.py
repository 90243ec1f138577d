"""Per-tenant cache keys for catalog responses.

Keys embed a per-tenant version number; bumping the version makes every
catalog entry of that tenant unreachable at once.
"""

from django.conf import settings
from django.core.cache import cache

from training.domain.value_objects import TenantId


def _version_key(tenant_id: int) -> str:
    return f"training:{tenant_id}:catalog:version"


def catalog_key(tenant: TenantId, *parts: str) -> str:
    version = cache.get_or_set(_version_key(tenant.value), 1, timeout=None)
    return ":".join(["training", str(tenant.value), f"v{version}", *parts])


def get_catalog(key: str):
    return cache.get(key)


def set_catalog(key: str, data) -> None:
    cache.set(key, data, timeout=settings.CATALOG_CACHE_TIMEOUT)


def invalidate_catalog(tenant_id: int) -> None:
    try:
        cache.incr(_version_key(tenant_id))
    except ValueError:
        # No version yet, so nothing has been cached for this tenant.
        pass
