"""Tags: labels applied to resources to organise them."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from ocean_client.api.common import Resource, endpoint
from ocean_client.errors import TransportError
from ocean_client.method import Method
from ocean_client.request import Request

TAG_SEGMENT = "tags"
RESOURCES_SEGMENT = "resources"


@dataclass(frozen=True)
class Tag:
    """A user-defined label together with statistics on what it labels."""

    name: str
    resources: Any

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Tag:
        """Build a tag from its JSON form."""
        try:
            return cls(name=str(data["name"]), resources=data["resources"])
        except (KeyError, TypeError) as exc:
            raise TransportError(f"malformed tag: {exc}") from exc

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form of this tag."""
        return {"name": self.name, "resources": self.resources}

    @staticmethod
    def create(name: str) -> Request:
        """Request that a new tag be created."""
        return Request(
            url=endpoint(TAG_SEGMENT),
            method=Method.CREATE,
            resource=_ONE_RESOURCE,
            body={"name": name},
        )

    @staticmethod
    def get(name: str) -> TagGetRequest:
        """Request one tag by its name."""
        return TagGetRequest(
            url=endpoint(TAG_SEGMENT, name),
            method=Method.GET,
            resource=_ONE_RESOURCE,
        )

    @staticmethod
    def list() -> Request:
        """Request every tag."""
        return Request(
            url=endpoint(TAG_SEGMENT),
            method=Method.LIST,
            resource=_LIST_RESOURCE,
        )

    @staticmethod
    def delete(name: str) -> Request:
        """Request the deletion of one tag."""
        return Request(url=endpoint(TAG_SEGMENT, name), method=Method.DELETE)


def _resource_body(resources: Iterable[tuple[Any, Any]]) -> dict[str, Any]:
    return {
        "resources": [
            {"resource_id": resource_id, "resource_type": kind}
            for resource_id, kind in resources
        ]
    }


class TagGetRequest(Request):
    """A request for a single tag, from which tagging calls can be built."""

    def add_resources(self, resources: Iterable[tuple[Any, Any]]) -> Request:
        """Tag resources given as ``(id, type)`` pairs."""
        request = self.with_segments(RESOURCES_SEGMENT).with_body(_resource_body(resources))
        return request.retarget(Request, Method.CREATE, Resource())

    def remove_resources(self, resources: Iterable[tuple[Any, Any]]) -> Request:
        """Untag resources given as ``(id, type)`` pairs."""
        request = self.with_segments(RESOURCES_SEGMENT).with_body(_resource_body(resources))
        return request.retarget(Request, Method.DELETE, Resource())


_LIST_RESOURCE = Resource(plural="tags", factory=Tag.from_dict)
_ONE_RESOURCE = Resource(key="tag", factory=Tag.from_dict)