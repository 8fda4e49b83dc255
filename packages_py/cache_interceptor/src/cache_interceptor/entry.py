"""
Cache entry model and its conversions to and from httpx objects.
"""
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import httpx

from .types import CACHE_RESULT_EXTENSION, CachePriority, CacheResult


CACHE_ENTRY_EXTENSION = "cache_entry"
"""Request extension key holding the entry found for the request."""

# Headers describing the wire encoding of the original body. The stored body
# is already decoded, so synthesized responses must not carry them.
_WIRE_HEADERS = frozenset(["content-encoding", "content-length", "transfer-encoding"])


@dataclass
class CacheEntry:
    """A stored response snapshot."""

    key: str
    """Cache key, unique per store."""

    status_code: int
    """Response status code."""

    headers: Dict[str, List[str]] = field(default_factory=dict)
    """Response headers, lower-cased names to all their values."""

    body: bytes = b""
    """Decoded response body."""

    downloaded_at: float = 0.0
    """When the response was received (Unix timestamp)."""

    expiry: float = 0.0
    """When the entry stops being fresh (Unix timestamp)."""

    priority: CachePriority = CachePriority.NORMAL
    """Eviction priority."""

    @classmethod
    def from_response(
        cls,
        key: str,
        response: httpx.Response,
        expiry: float,
        priority: CachePriority = CachePriority.NORMAL,
        downloaded_at: Optional[float] = None,
    ) -> "CacheEntry":
        """Snapshot a response whose body has been read."""
        headers: Dict[str, List[str]] = {}
        for name, value in response.headers.multi_items():
            headers.setdefault(name.lower(), []).append(value)

        return cls(
            key=key,
            status_code=response.status_code,
            headers=headers,
            body=response.content,
            downloaded_at=time.time() if downloaded_at is None else downloaded_at,
            expiry=expiry,
            priority=priority,
        )

    @classmethod
    def from_request(
        cls,
        request: httpx.Request,
        key: Optional[str] = None,
    ) -> Optional["CacheEntry"]:
        """Entry attached to a request, if any; with a key, only an entry for that key."""
        entry = request.extensions.get(CACHE_ENTRY_EXTENSION)
        if not isinstance(entry, cls):
            return None
        if key is not None and entry.key != key:
            return None
        return entry

    @classmethod
    def from_error(
        cls,
        error: Exception,
        request: Optional[httpx.Request] = None,
        key: Optional[str] = None,
    ) -> Optional["CacheEntry"]:
        """Entry carried by a failed request, if any."""
        if request is None:
            try:
                request = error.request  # type: ignore[attr-defined]
            except (AttributeError, RuntimeError):
                # httpx raises RuntimeError when the error has no request yet
                return None
        return cls.from_request(request, key)

    def header(self, name: str) -> Optional[str]:
        """First value of a header, case-insensitively."""
        values = self.headers.get(name.lower())
        return values[0] if values else None

    @property
    def etag(self) -> Optional[str]:
        return self.header("etag")

    @property
    def last_modified(self) -> Optional[str]:
        return self.header("last-modified")

    def is_stale(self, now: Optional[float] = None) -> bool:
        """Whether the expiry is strictly in the past."""
        if now is None:
            now = time.time()
        return self.expiry < now

    def update_request(self, request: httpx.Request, include_validators: bool) -> None:
        """
        Attach this entry to an outgoing request.

        With include_validators, If-None-Match and If-Modified-Since are added
        from the stored ETag and Last-Modified, unless the caller already set
        them.
        """
        request.extensions[CACHE_ENTRY_EXTENSION] = self

        if not include_validators:
            return

        etag = self.etag
        if etag and "if-none-match" not in request.headers:
            request.headers["If-None-Match"] = etag

        last_modified = self.last_modified
        if last_modified and "if-modified-since" not in request.headers:
            request.headers["If-Modified-Since"] = last_modified

    def detach_request(self, request: httpx.Request) -> None:
        """
        Remove this entry and the validators it added from a request.

        Redirects reuse the extensions and headers of the original request,
        so an entry can arrive on a request for another key.
        """
        if request.extensions.get(CACHE_ENTRY_EXTENSION) is self:
            del request.extensions[CACHE_ENTRY_EXTENSION]

        etag = self.etag
        if etag and request.headers.get("if-none-match") == etag:
            del request.headers["if-none-match"]

        last_modified = self.last_modified
        if last_modified and request.headers.get("if-modified-since") == last_modified:
            del request.headers["if-modified-since"]

    def to_response(self, request: Optional[httpx.Request] = None) -> httpx.Response:
        """Build a response from this entry, marked as coming from the cache."""
        headers = [
            (name, value)
            for name, values in self.headers.items()
            if name not in _WIRE_HEADERS
            for value in values
        ]
        return httpx.Response(
            status_code=self.status_code,
            headers=headers,
            content=self.body,
            request=request,
            extensions={CACHE_RESULT_EXTENSION: CacheResult(is_from_cache=True)},
        )
