"""SSH keys: public keys that can be embedded into Droplets."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from ocean_client.api.common import Resource, endpoint
from ocean_client.errors import TransportError
from ocean_client.method import Method
from ocean_client.request import Request

ACCOUNT_SEGMENT = "account"
KEYS_SEGMENT = "keys"


@dataclass(frozen=True)
class SshKey:
    """A public key stored on the account."""

    id: int
    fingerprint: str
    public_key: str
    name: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SshKey:
        """Build a key from its JSON form."""
        try:
            return cls(
                id=int(data["id"]),
                fingerprint=str(data["fingerprint"]),
                public_key=str(data["public_key"]),
                name=str(data["name"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise TransportError(f"malformed ssh key: {exc}") from exc

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form of this key."""
        return {
            "id": self.id,
            "fingerprint": self.fingerprint,
            "public_key": self.public_key,
            "name": self.name,
        }

    @staticmethod
    def create(name: str, public_key: str) -> Request:
        """Request that a new key be added to the account."""
        return Request(
            url=endpoint(ACCOUNT_SEGMENT, KEYS_SEGMENT),
            method=Method.CREATE,
            resource=_ONE_RESOURCE,
            body={"name": name, "public_key": public_key},
        )

    @staticmethod
    def list() -> Request:
        """Request every key on the account."""
        return Request(
            url=endpoint(ACCOUNT_SEGMENT, KEYS_SEGMENT),
            method=Method.LIST,
            resource=_LIST_RESOURCE,
        )

    @staticmethod
    def get(id: Any) -> Request:
        """Request one key by its identifier or fingerprint."""
        return Request(
            url=endpoint(ACCOUNT_SEGMENT, KEYS_SEGMENT, id),
            method=Method.GET,
            resource=_ONE_RESOURCE,
        )

    @staticmethod
    def update(id: Any) -> SshKeyUpdateRequest:
        """Request a change to one key, identified by id or fingerprint."""
        return SshKeyUpdateRequest(
            url=endpoint(ACCOUNT_SEGMENT, KEYS_SEGMENT, id),
            method=Method.UPDATE,
            resource=_ONE_RESOURCE,
        )

    @staticmethod
    def delete(id: Any) -> Request:
        """Request the removal of one key, identified by id or fingerprint."""
        return Request(
            url=endpoint(ACCOUNT_SEGMENT, KEYS_SEGMENT, id),
            method=Method.DELETE,
        )


class SshKeyUpdateRequest(Request):
    """An update of an SSH key."""

    def name(self, value: str) -> SshKeyUpdateRequest:
        """Set the new display name of the key."""
        return self.with_body_field("name", value)


_LIST_RESOURCE = Resource(plural="ssh_keys", factory=SshKey.from_dict)
_ONE_RESOURCE = Resource(key="ssh_key", factory=SshKey.from_dict)