"""Sizes: the hardware packages a Droplet can be created with."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ocean_client.api.common import Resource, endpoint
from ocean_client.errors import TransportError
from ocean_client.method import Method
from ocean_client.request import Request

SIZES_SEGMENT = "sizes"


@dataclass(frozen=True)
class Size:
    """A plan bundling RAM, virtual CPUs, disk, transfer and pricing."""

    slug: str
    available: bool
    transfer: float
    price_monthly: float
    price_hourly: float
    memory: int
    vcpus: int
    disk: int
    regions: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Size:
        """Build a size from its JSON form."""
        try:
            return cls(
                slug=str(data["slug"]),
                available=bool(data["available"]),
                transfer=float(data["transfer"]),
                price_monthly=float(data["price_monthly"]),
                price_hourly=float(data["price_hourly"]),
                memory=int(data["memory"]),
                vcpus=int(data["vcpus"]),
                disk=int(data["disk"]),
                regions=[str(region) for region in data["regions"]],
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise TransportError(f"malformed size: {exc}") from exc

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form of this size."""
        return {
            "slug": self.slug,
            "available": self.available,
            "transfer": self.transfer,
            "price_monthly": self.price_monthly,
            "price_hourly": self.price_hourly,
            "memory": self.memory,
            "vcpus": self.vcpus,
            "disk": self.disk,
            "regions": list(self.regions),
        }

    @staticmethod
    def list() -> Request:
        """Request every size."""
        return Request(
            url=endpoint(SIZES_SEGMENT),
            method=Method.LIST,
            resource=Resource(plural="sizes", factory=Size.from_dict),
        )