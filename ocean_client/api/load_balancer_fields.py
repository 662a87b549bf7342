"""Values nested inside a load balancer: forwarding rules, health checks, sticky sessions."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from typing import Any

from ocean_client.errors import TransportError


def _optional_str(value: Any) -> str | None:
    return None if value is None else str(value)


@dataclass(frozen=True)
class ForwardingRule:
    """How traffic is routed from the load balancer to its Droplets."""

    entry_protocol: str
    entry_port: int
    target_protocol: str
    target_port: int
    certificate_id: str | None = None
    tls_passthrough: bool = False

    @classmethod
    def from_tuple(cls, value: Sequence[Any]) -> ForwardingRule:
        """Build a rule from a 4-, 5- or 6-item tuple.

        The items are entry protocol, entry port, target protocol, target
        port, then optionally the certificate id and the TLS passthrough flag.
        """
        if isinstance(value, ForwardingRule):
            return value
        if len(value) not in (4, 5, 6):
            raise ValueError(f"a forwarding rule takes 4 to 6 items, got {len(value)}")
        entry_protocol, entry_port, target_protocol, target_port, *rest = value
        rule = cls(str(entry_protocol), int(entry_port), str(target_protocol), int(target_port))
        if rest:
            rule = rule.with_certificate_id(rest[0])
        if len(rest) > 1:
            rule = rule.with_tls_passthrough(rest[1])
        return rule

    def with_certificate_id(self, certificate_id: str | None) -> ForwardingRule:
        """Return this rule terminating TLS with the given certificate."""
        return replace(self, certificate_id=_optional_str(certificate_id))

    def with_tls_passthrough(self, tls_passthrough: bool) -> ForwardingRule:
        """Return this rule passing encrypted traffic through or not."""
        return replace(self, tls_passthrough=bool(tls_passthrough))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ForwardingRule:
        """Build a rule from its JSON form."""
        try:
            return cls(
                entry_protocol=str(data["entry_protocol"]),
                entry_port=int(data["entry_port"]),
                target_protocol=str(data["target_protocol"]),
                target_port=int(data["target_port"]),
                certificate_id=_optional_str(data.get("certificate_id")),
                tls_passthrough=bool(data["tls_passthrough"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise TransportError(f"malformed forwarding rule: {exc}") from exc

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form of this rule."""
        return {
            "entry_protocol": self.entry_protocol,
            "entry_port": self.entry_port,
            "target_protocol": self.target_protocol,
            "target_port": self.target_port,
            "certificate_id": self.certificate_id,
            "tls_passthrough": self.tls_passthrough,
        }


@dataclass(frozen=True)
class HealthCheck:
    """How the load balancer decides whether a Droplet should get traffic."""

    protocol: str
    port: int
    path: str
    check_interval_seconds: int
    response_timeout_seconds: int
    unhealthy_threshold: int
    healthy_threshold: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> HealthCheck:
        """Build health check settings from their JSON form."""
        try:
            return cls(
                protocol=str(data["protocol"]),
                port=int(data["port"]),
                path=str(data["path"]),
                check_interval_seconds=int(data["check_interval_seconds"]),
                response_timeout_seconds=int(data["response_timeout_seconds"]),
                unhealthy_threshold=int(data["unhealthy_threshold"]),
                healthy_threshold=int(data["healthy_threshold"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise TransportError(f"malformed health check: {exc}") from exc

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form of these settings."""
        return {
            "protocol": self.protocol,
            "port": self.port,
            "path": self.path,
            "check_interval_seconds": self.check_interval_seconds,
            "response_timeout_seconds": self.response_timeout_seconds,
            "unhealthy_threshold": self.unhealthy_threshold,
            "healthy_threshold": self.healthy_threshold,
        }


@dataclass(frozen=True)
class StickySessions:
    """Whether follow-up requests from a client go to the same Droplet.

    ``kind`` is the JSON field ``type``: "cookies" or "none".
    """

    kind: str
    cookie_name: str | None = None
    cookie_ttl_seconds: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> StickySessions:
        """Build sticky session settings from their JSON form."""
        try:
            return cls(
                kind=str(data["type"]),
                cookie_name=_optional_str(data.get("cookie_name")),
                cookie_ttl_seconds=_optional_str(data.get("cookie_ttl_seconds")),
            )
        except (KeyError, TypeError, AttributeError) as exc:
            raise TransportError(f"malformed sticky sessions: {exc}") from exc

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form of these settings."""
        return {
            "type": self.kind,
            "cookie_name": self.cookie_name,
            "cookie_ttl_seconds": self.cookie_ttl_seconds,
        }