"""
Per-request cache options.
"""
from dataclasses import dataclass, field, replace
from typing import Any, Optional

import httpx

from .keys import CacheKeyBuilder, default_key_builder
from .types import CachePriority, CacheStore


CACHE_OPTIONS_EXTENSION = "cache_options"
"""Request extension key holding a per-request CacheOptions override."""

DEFAULT_EXPIRY_SECONDS: float = 300.0
"""Expiry used when neither max-age nor the options provide one."""


@dataclass(frozen=True)
class CacheOptions:
    """Cache options for a request."""

    is_cached: bool = True
    """Whether the interceptor handles the request at all. Default: True"""

    force_update: bool = False
    """Always go to the network, ignoring any cached entry. Default: False"""

    force_cache: bool = False
    """Serve a cached entry even when it is stale. Default: False"""

    return_cache_on_error: bool = True
    """Serve the cached entry when the transport fails. Default: True"""

    priority: CachePriority = CachePriority.NORMAL
    """Priority given to new entries. Default: normal"""

    expiry: Optional[float] = DEFAULT_EXPIRY_SECONDS
    """Seconds a new entry stays fresh when the response has no max-age. Default: 300"""

    key_builder: CacheKeyBuilder = field(default=default_key_builder, compare=False)
    """Cache key builder."""

    store: Optional[CacheStore] = field(default=None, compare=False)
    """Store overriding the interceptor's global store."""

    def copy_with(self, **changes: Any) -> "CacheOptions":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    def to_extensions(self) -> dict:
        """Extensions dict that attaches these options to a request."""
        return {CACHE_OPTIONS_EXTENSION: self}

    @classmethod
    def from_extensions(cls, request: httpx.Request) -> Optional["CacheOptions"]:
        """Read the options attached to a request, if any."""
        options = request.extensions.get(CACHE_OPTIONS_EXTENSION)
        if isinstance(options, cls):
            return options
        return None

    @property
    def expiry_seconds(self) -> float:
        """Configured expiry, falling back to the module default."""
        if self.expiry is None:
            return DEFAULT_EXPIRY_SECONDS
        return self.expiry


DEFAULT_CACHE_OPTIONS = CacheOptions()


def merge_cache_options(options: Optional[CacheOptions] = None) -> CacheOptions:
    """
    Resolve options against the defaults.

    Options replace the defaults as a whole; fields are never merged.
    """
    if options is None:
        return DEFAULT_CACHE_OPTIONS
    return options


def resolve_request_options(
    request: httpx.Request,
    default: CacheOptions,
    options: Optional[CacheOptions] = None,
) -> CacheOptions:
    """
    Resolve the effective options for a request.

    Precedence: explicit options, then the override attached to the request,
    then the default. The winner is used whole.
    """
    if options is not None:
        return options
    return CacheOptions.from_extensions(request) or default
