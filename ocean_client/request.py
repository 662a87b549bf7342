"""Requests: immutable builders describing one API call."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field, replace
from typing import Any, TypeVar

from ocean_client.api.common import Resource, _append_query, _append_segments
from ocean_client.method import Method

R = TypeVar("R", bound="Request")

_CLIENT_CALLS = {
    Method.LIST: "list",
    Method.GET: "get",
    Method.CREATE: "post",
    Method.UPDATE: "put",
    Method.DELETE: "delete",
}


@dataclass(frozen=True)
class Request:
    """One API call: where it goes, how it is made and what it returns.

    Every builder method returns a new request and leaves this one alone.
    """

    url: str
    method: Method
    resource: Resource = field(default_factory=Resource)
    body: Any = None
    max_items: int | None = None

    def limit(self: R, limit: int | None) -> R:
        """Cap the number of items a list request may retrieve."""
        if self.method is not Method.LIST:
            raise TypeError("only list requests take a limit")
        if limit is not None and limit < 0:
            raise ValueError("limit must not be negative")
        return replace(self, max_items=limit)

    def with_segments(self: R, *segments: Any) -> R:
        """Append path segments to the URL."""
        return replace(self, url=_append_segments(self.url, segments))

    def with_query(self: R, key: str, value: Any) -> R:
        """Append one query parameter to the URL."""
        return replace(self, url=_append_query(self.url, key, value))

    def with_body(self: R, body: Any) -> R:
        """Replace the JSON body."""
        return replace(self, body=body)

    def with_body_field(self: R, key: str, value: Any) -> R:
        """Set one field of the JSON body, turning a missing body into an object."""
        body = copy.deepcopy(self.body) if isinstance(self.body, dict) else {}
        body[key] = value
        return replace(self, body=body)

    def retarget(self, cls: type[R], method: Method, resource: Resource) -> R:
        """Turn this request into another kind, keeping its URL and body."""
        return cls(url=self.url, method=method, resource=resource, body=self.body)

    def parse(self, payload: Any) -> Any:
        """Build this request's result from a decoded response body."""
        if self.method is Method.LIST:
            return self.resource.parse_list(payload)
        return self.resource.parse_one(payload)

    def execute(self, client: Any) -> Any:
        """Carry out the call with ``client`` and return its result."""
        return getattr(client, _CLIENT_CALLS[self.method])(self)