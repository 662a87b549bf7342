"""Pieces shared by every API resource: URLs, pagination and response parsing."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote, urlencode, urlsplit, urlunsplit

from ocean_client.errors import TransportError

ROOT_URL = "https://api.digitalocean.com/v2"
MAX_PER_PAGE = 200

_SEGMENT_SAFE = "!$&'()*+,;=:@"


def _append_segments(url: str, segments: Iterable[Any]) -> str:
    encoded = [quote(str(segment), safe=_SEGMENT_SAFE) for segment in segments]
    if not encoded:
        return url
    parts = urlsplit(url)
    path = "/".join([parts.path.rstrip("/"), *encoded])
    return urlunsplit(parts._replace(path=path))


def _append_query(url: str, key: str, value: Any) -> str:
    parts = urlsplit(url)
    pair = urlencode([(key, str(value))])
    query = f"{parts.query}&{pair}" if parts.query else pair
    return urlunsplit(parts._replace(query=query))


def endpoint(*segments: Any) -> str:
    """Return the API URL reached by appending ``segments`` to the root."""
    return _append_segments(ROOT_URL, segments)


def next_page(payload: Any) -> str | None:
    """Return the URL of the next page named in a list response, if any."""
    if not isinstance(payload, Mapping):
        raise TransportError("malformed response: expected a JSON object")
    links = payload.get("links") or {}
    pages = links.get("pages") or {}
    return pages.get("next") or None


def _identity(value: Any) -> Any:
    return value


def _field(payload: Any, key: str) -> Any:
    if not isinstance(payload, Mapping) or key not in payload:
        raise TransportError(f"malformed response: missing {key!r}")
    return payload[key]


@dataclass(frozen=True)
class Resource:
    """How a response body maps onto values.

    ``key`` names the field holding a single item, ``plural`` the field
    holding a page of items. A resource without a key yields ``None``.
    """

    key: str | None = None
    plural: str | None = None
    factory: Callable[[Any], Any] = _identity

    def parse_one(self, payload: Any) -> Any:
        """Build the single value held by a response body."""
        if self.key is None:
            return None
        return self.factory(_field(payload, self.key))

    def parse_list(self, payload: Any) -> list[Any]:
        """Build the values held by one page of a list response."""
        if self.plural is None:
            raise TypeError("this resource cannot be listed")
        items = _field(payload, self.plural)
        if not isinstance(items, list):
            raise TransportError(f"malformed response: {self.plural!r} is not a list")
        return [self.factory(item) for item in items]