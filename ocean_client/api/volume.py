"""Block storage volumes: raw block devices that can be moved between Droplets."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from ocean_client.api.common import Resource, endpoint
from ocean_client.api.region import Region
from ocean_client.api.snapshot import Snapshot, _format_timestamp, _parse_timestamp
from ocean_client.errors import ApiError, TransportError
from ocean_client.method import Method
from ocean_client.request import Request

VOLUME_SEGMENT = "volumes"
SNAPSHOTS_SEGMENT = "snapshots"


@dataclass(frozen=True)
class Volume:
    """A block storage volume located in one region."""

    id: str
    region: Region
    name: str
    description: str
    size_gigabytes: float
    created_at: datetime
    droplet_ids: list[int] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Volume:
        """Build a volume from its JSON form."""
        try:
            return cls(
                id=str(data["id"]),
                region=Region.from_dict(data["region"]),
                droplet_ids=[int(droplet) for droplet in data["droplet_ids"]],
                name=str(data["name"]),
                description=str(data["description"]),
                size_gigabytes=float(data["size_gigabytes"]),
                created_at=_parse_timestamp(data["created_at"]),
            )
        except ApiError:
            raise
        except (KeyError, TypeError, ValueError) as exc:
            raise TransportError(f"malformed volume: {exc}") from exc

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form of this volume."""
        return {
            "id": self.id,
            "region": self.region.to_dict(),
            "droplet_ids": list(self.droplet_ids),
            "name": self.name,
            "description": self.description,
            "size_gigabytes": self.size_gigabytes,
            "created_at": _format_timestamp(self.created_at),
        }

    @staticmethod
    def list() -> VolumeListRequest:
        """Request every volume."""
        return VolumeListRequest(
            url=endpoint(VOLUME_SEGMENT),
            method=Method.LIST,
            resource=_LIST_RESOURCE,
        )

    @staticmethod
    def create(name: str, size_gigabytes: int) -> VolumeCreateRequest:
        """Request a new volume of the given size."""
        return VolumeCreateRequest(
            url=endpoint(VOLUME_SEGMENT),
            method=Method.CREATE,
            resource=_ONE_RESOURCE,
            body={"name": name, "size_gigabytes": size_gigabytes},
        )

    @staticmethod
    def get(id: str) -> VolumeGetRequest:
        """Request one volume by its identifier."""
        return VolumeGetRequest(
            url=endpoint(VOLUME_SEGMENT, id),
            method=Method.GET,
            resource=_ONE_RESOURCE,
        )

    @staticmethod
    def get_by_name(name: str, region: str) -> VolumeGetRequest:
        """Request one volume by its name and region."""
        return (
            VolumeGetRequest(
                url=endpoint(VOLUME_SEGMENT),
                method=Method.GET,
                resource=_ONE_RESOURCE,
            )
            .with_query("name", name)
            .with_query("region", region)
        )

    @staticmethod
    def delete(id: str) -> Request:
        """Request the deletion of one volume."""
        return Request(url=endpoint(VOLUME_SEGMENT, id), method=Method.DELETE)

    @staticmethod
    def delete_by_name(name: str, region: str) -> Request:
        """Request the deletion of one volume named within a region."""
        return (
            Request(url=endpoint(VOLUME_SEGMENT), method=Method.DELETE)
            .with_query("name", name)
            .with_query("region", region)
        )


class VolumeListRequest(Request):
    """A listing of volumes."""

    def region(self, region: str) -> VolumeListRequest:
        """Only list volumes in the given region."""
        return self.with_query("region", region)


class VolumeGetRequest(Request):
    """A request for one volume, from which snapshot calls can be built."""

    def snapshots(self) -> Request:
        """List the snapshots taken of this volume."""
        return self.with_segments(SNAPSHOTS_SEGMENT).retarget(
            Request, Method.LIST, _SNAPSHOT_LIST_RESOURCE
        )

    def snapshot(self, name: str) -> Request:
        """Take a snapshot of this volume under the given name."""
        request = self.with_segments(SNAPSHOTS_SEGMENT).with_body({"name": name})
        return request.retarget(Request, Method.CREATE, _SNAPSHOT_ONE_RESOURCE)


class VolumeCreateRequest(Request):
    """The creation of a volume."""

    def description(self, value: str) -> VolumeCreateRequest:
        """Set the free-form description."""
        return self.with_body_field("description", value)

    def region(self, value: str) -> VolumeCreateRequest:
        """Set the region slug; not to be combined with a snapshot id."""
        return self.with_body_field("region", value)

    def snapshot_id(self, value: str) -> VolumeCreateRequest:
        """Create the volume from a snapshot; not to be combined with a region."""
        return self.with_body_field("snapshot_id", value)


_LIST_RESOURCE = Resource(plural="volumes", factory=Volume.from_dict)
_ONE_RESOURCE = Resource(key="volume", factory=Volume.from_dict)
_SNAPSHOT_LIST_RESOURCE = Resource(plural="snapshots", factory=Snapshot.from_dict)
_SNAPSHOT_ONE_RESOURCE = Resource(key="snapshot", factory=Snapshot.from_dict)