"""Regions: the datacenters where Droplets can be deployed."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ocean_client.api.common import Resource, endpoint
from ocean_client.errors import TransportError
from ocean_client.method import Method
from ocean_client.request import Request

REGIONS_SEGMENT = "regions"


@dataclass(frozen=True)
class Region:
    """A datacenter in a geographic location."""

    name: str
    slug: str
    sizes: list[str] = field(default_factory=list)
    available: bool = False
    features: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Region:
        """Build a region from its JSON form."""
        try:
            return cls(
                name=str(data["name"]),
                slug=str(data["slug"]),
                sizes=[str(size) for size in data["sizes"]],
                available=bool(data["available"]),
                features=[str(feature) for feature in data["features"]],
            )
        except (KeyError, TypeError) as exc:
            raise TransportError(f"malformed region: {exc}") from exc

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form of this region."""
        return {
            "name": self.name,
            "slug": self.slug,
            "sizes": list(self.sizes),
            "available": self.available,
            "features": list(self.features),
        }

    @staticmethod
    def list() -> Request:
        """Request every region."""
        return Request(
            url=endpoint(REGIONS_SEGMENT),
            method=Method.LIST,
            resource=Resource(plural="regions", factory=Region.from_dict),
        )