"""The kinds of API call a request can make."""

from __future__ import annotations

from enum import Enum


class Method(Enum):
    """Which execution path a request takes."""

    LIST = "list"
    GET = "get"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"

    def verb(self) -> str:
        """The HTTP verb used for this kind of call."""
        return _VERBS[self]


_VERBS = {
    Method.LIST: "GET",
    Method.GET: "GET",
    Method.CREATE: "POST",
    Method.UPDATE: "PUT",
    Method.DELETE: "DELETE",
}