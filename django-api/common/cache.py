"""Read-through caching on top of Django's cache framework.

Keys are grouped into namespaces. Bumping a namespace version invalidates every
key built from it, which stands in for pattern deletes on backends that lack
them.
"""

import hashlib
import json
from collections.abc import Callable
from typing import Any, TypeVar

from django.core.cache import cache

T = TypeVar("T")


class TTL:
    """Cache lifetimes in seconds."""

    SHORT = 60
    MEDIUM = 300
    LONG = 1800
    VERY_LONG = 86400


def get_or_fetch(key: str, fetch: Callable[[], T], ttl: int = TTL.MEDIUM) -> T:
    """Return the cached value for ``key`` or compute, store and return it."""
    cached = cache.get(key)
    if cached is not None:
        return cached
    value = fetch()
    if value is not None:
        cache.set(key, value, ttl)
    return value


def namespace_version(namespace: str) -> int:
    version = cache.get(_version_key(namespace))
    if version is None:
        version = 1
        cache.set(_version_key(namespace), version, None)
    return version


def namespaced_key(namespace: str, params: Any = None) -> str:
    """Build a versioned key for ``namespace`` and an optional parameter set."""
    digest = "all"
    if params:
        raw = json.dumps(params, sort_keys=True, default=str)
        digest = hashlib.sha1(raw.encode()).hexdigest()[:16]
    return f"{namespace}:v{namespace_version(namespace)}:{digest}"


def invalidate_namespace(namespace: str) -> None:
    try:
        cache.incr(_version_key(namespace))
    except ValueError:
        cache.set(_version_key(namespace), 2, None)


def invalidate(*keys: str) -> None:
    cache.delete_many(keys)


def _version_key(namespace: str) -> str:
    return f"{namespace}:version"
