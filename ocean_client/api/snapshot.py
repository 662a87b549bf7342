"""Snapshots: saved images of a Droplet or a volume."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from ocean_client.api.common import Resource, endpoint
from ocean_client.errors import TransportError
from ocean_client.method import Method
from ocean_client.request import Request

SNAPSHOT_SEGMENT = "snapshots"


def _parse_timestamp(value: Any) -> datetime:
    if not isinstance(value, str):
        raise TypeError(f"expected a timestamp string, got {value!r}")
    text = value[:-1] + "+00:00" if value.endswith(("Z", "z")) else value
    moment = datetime.fromisoformat(text)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def _format_timestamp(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


@dataclass(frozen=True)
class Snapshot:
    """A saved instance of a Droplet or a volume."""

    id: str
    name: str
    created_at: datetime
    regions: list[str] = field(default_factory=list)
    resource_id: str = ""
    resource_type: str = ""
    min_disk_size: int = 0
    size_gigabytes: float = 0.0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Snapshot:
        """Build a snapshot from its JSON form."""
        try:
            return cls(
                id=str(data["id"]),
                name=str(data["name"]),
                created_at=_parse_timestamp(data["created_at"]),
                regions=[str(region) for region in data["regions"]],
                resource_id=str(data["resource_id"]),
                resource_type=str(data["resource_type"]),
                min_disk_size=int(data["min_disk_size"]),
                size_gigabytes=float(data["size_gigabytes"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise TransportError(f"malformed snapshot: {exc}") from exc

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form of this snapshot."""
        return {
            "id": self.id,
            "name": self.name,
            "created_at": _format_timestamp(self.created_at),
            "regions": list(self.regions),
            "resource_id": self.resource_id,
            "resource_type": self.resource_type,
            "min_disk_size": self.min_disk_size,
            "size_gigabytes": self.size_gigabytes,
        }

    @staticmethod
    def list() -> Request:
        """Request every snapshot."""
        return Request(
            url=endpoint(SNAPSHOT_SEGMENT),
            method=Method.LIST,
            resource=_LIST_RESOURCE,
        )

    @staticmethod
    def droplets() -> Request:
        """Request every Droplet snapshot."""
        return Snapshot.list().with_query("resource_type", "droplet")

    @staticmethod
    def volumes() -> Request:
        """Request every volume snapshot."""
        return Snapshot.list().with_query("resource_type", "volume")

    @staticmethod
    def get(id: int) -> Request:
        """Request one snapshot by its identifier."""
        return Request(
            url=endpoint(SNAPSHOT_SEGMENT, id),
            method=Method.GET,
            resource=_ONE_RESOURCE,
        )

    @staticmethod
    def delete(id: int) -> Request:
        """Request the deletion of one snapshot."""
        return Request(url=endpoint(SNAPSHOT_SEGMENT, id), method=Method.DELETE)


_LIST_RESOURCE = Resource(plural="snapshots", factory=Snapshot.from_dict)
_ONE_RESOURCE = Resource(key="snapshot", factory=Snapshot.from_dict)