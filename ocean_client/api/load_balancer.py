"""Load balancers: distribute traffic across several Droplets."""

from __future__ import annotations

import ipaddress
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, TypeVar, Union

from ocean_client.api.common import Resource, endpoint
from ocean_client.api.load_balancer_fields import ForwardingRule, HealthCheck, StickySessions
from ocean_client.api.region import Region
from ocean_client.api.snapshot import _format_timestamp, _parse_timestamp
from ocean_client.errors import ApiError, TransportError
from ocean_client.method import Method
from ocean_client.request import Request

LOAD_BALANCERS_SEGMENT = "load_balancers"
DROPLETS_SEGMENT = "droplets"
FORWARDING_RULES_SEGMENT = "forwarding_rules"

IpAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]
RuleLike = Union[ForwardingRule, tuple]

B = TypeVar("B", bound=Request)


@dataclass(frozen=True)
class LoadBalancer:
    """A load balancer and the rules by which it routes traffic."""

    id: str
    name: str
    ip: IpAddress
    algorithm: str
    status: str
    created_at: datetime
    forwarding_rules: list[ForwardingRule]
    health_check: HealthCheck
    sticky_sessions: StickySessions
    region: Region
    tag: str
    droplet_ids: list[int] = field(default_factory=list)
    redirect_http_to_https: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> LoadBalancer:
        """Build a load balancer from its JSON form."""
        try:
            return cls(
                id=str(data["id"]),
                name=str(data["name"]),
                ip=ipaddress.ip_address(data["ip"]),
                algorithm=str(data["algorithm"]),
                status=str(data["status"]),
                created_at=_parse_timestamp(data["created_at"]),
                forwarding_rules=[
                    ForwardingRule.from_dict(rule) for rule in data["forwarding_rules"]
                ],
                health_check=HealthCheck.from_dict(data["health_check"]),
                sticky_sessions=StickySessions.from_dict(data["sticky_sessions"]),
                region=Region.from_dict(data["region"]),
                tag=str(data["tag"]),
                droplet_ids=[int(droplet) for droplet in data["droplet_ids"]],
                redirect_http_to_https=bool(data["redirect_http_to_https"]),
            )
        except ApiError:
            raise
        except (KeyError, TypeError, ValueError) as exc:
            raise TransportError(f"malformed load balancer: {exc}") from exc

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form of this load balancer."""
        return {
            "id": self.id,
            "name": self.name,
            "ip": str(self.ip),
            "algorithm": self.algorithm,
            "status": self.status,
            "created_at": _format_timestamp(self.created_at),
            "forwarding_rules": [rule.to_dict() for rule in self.forwarding_rules],
            "health_check": self.health_check.to_dict(),
            "sticky_sessions": self.sticky_sessions.to_dict(),
            "region": self.region.to_dict(),
            "tag": self.tag,
            "droplet_ids": list(self.droplet_ids),
            "redirect_http_to_https": self.redirect_http_to_https,
        }

    @staticmethod
    def create(name: str, region: str) -> LoadBalancerCreateRequest:
        """Request a new load balancer; add at least one forwarding rule to it."""
        return LoadBalancerCreateRequest(
            url=endpoint(LOAD_BALANCERS_SEGMENT),
            method=Method.CREATE,
            resource=_ONE_RESOURCE,
            body={"name": name, "region": region, "forwarding_rules": []},
        )

    @staticmethod
    def get(id: str) -> LoadBalancerGetRequest:
        """Request one load balancer by its identifier."""
        return LoadBalancerGetRequest(
            url=endpoint(LOAD_BALANCERS_SEGMENT, id),
            method=Method.GET,
            resource=_ONE_RESOURCE,
        )

    @staticmethod
    def list() -> Request:
        """Request every load balancer."""
        return Request(
            url=endpoint(LOAD_BALANCERS_SEGMENT),
            method=Method.LIST,
            resource=_LIST_RESOURCE,
        )

    @staticmethod
    def update(id: str) -> LoadBalancerUpdateRequest:
        """Request a change to a load balancer; omitted attributes are reset."""
        return LoadBalancerUpdateRequest(
            url=endpoint(LOAD_BALANCERS_SEGMENT, id),
            method=Method.UPDATE,
            resource=_ONE_RESOURCE,
        )

    @staticmethod
    def delete(id: str) -> Request:
        """Request the deletion of one load balancer."""
        return Request(url=endpoint(LOAD_BALANCERS_SEGMENT, id), method=Method.DELETE)


def _with_rules(request: B, rules: Iterable[RuleLike]) -> B:
    body = request.body if isinstance(request.body, dict) else {}
    existing = body.get("forwarding_rules")
    current = list(existing) if isinstance(existing, list) else []
    current.extend(ForwardingRule.from_tuple(rule).to_dict() for rule in rules)
    return request.with_body_field("forwarding_rules", current)


class LoadBalancerCreateRequest(Request):
    """The creation of a load balancer."""

    def algorithm(self: B, value: str) -> B:
        """Set the algorithm: "round_robin" (the default) or "least_connections"."""
        return self.with_body_field("algorithm", value)

    def forwarding_rule(self: B, rule: RuleLike) -> B:
        """Add a forwarding rule, given as a rule or as a 4- to 6-item tuple."""
        return _with_rules(self, [rule])

    def health_check(
        self: B,
        protocol: str,
        port: int,
        path: str | None = None,
        check_interval_seconds: int | None = None,
        response_timeout_seconds: int | None = None,
        unhealthy_threshold: int | None = None,
        healthy_threshold: int | None = None,
    ) -> B:
        """Set the health check; settings left as ``None`` are not sent."""
        check: dict[str, Any] = {"protocol": protocol, "port": port}
        optional = {
            "path": path,
            "check_interval_seconds": check_interval_seconds,
            "response_timeout_seconds": response_timeout_seconds,
            "unhealthy_threshold": unhealthy_threshold,
            "healthy_threshold": healthy_threshold,
        }
        check.update((key, value) for key, value in optional.items() if value is not None)
        return self.with_body_field("health_check", check)

    def sticky_sessions(
        self: B,
        kind: str,
        cookie_name: str | None = None,
        cookie_ttl_seconds: int | None = None,
    ) -> B:
        """Set sticky sessions: ``kind`` is "cookies" or "none"."""
        sessions: dict[str, Any] = {"type": kind}
        if cookie_name is not None:
            sessions["cookie_name"] = cookie_name
        if cookie_ttl_seconds is not None:
            sessions["cookie_ttl_seconds"] = cookie_ttl_seconds
        return self.with_body_field("sticky_sessions", sessions)

    def redirect_http_to_https(self: B, setting: bool) -> B:
        """Redirect HTTP on port 80 to HTTPS on port 443 or not."""
        return self.with_body_field("redirect_http_to_https", bool(setting))

    def droplets(self: B, ids: Iterable[int]) -> B:
        """Assign Droplets by id; not to be combined with a tag."""
        return self.with_body_field("droplet_ids", [int(droplet) for droplet in ids])

    def tag(self: B, tag: str) -> B:
        """Assign the Droplets carrying a tag; not to be combined with ids."""
        return self.with_body_field("tag", tag)


class LoadBalancerUpdateRequest(Request):
    """The update of a load balancer; it takes the same settings as a creation."""

    algorithm = LoadBalancerCreateRequest.algorithm
    forwarding_rule = LoadBalancerCreateRequest.forwarding_rule
    health_check = LoadBalancerCreateRequest.health_check
    sticky_sessions = LoadBalancerCreateRequest.sticky_sessions
    redirect_http_to_https = LoadBalancerCreateRequest.redirect_http_to_https
    droplets = LoadBalancerCreateRequest.droplets
    tag = LoadBalancerCreateRequest.tag

    def name(self, value: str) -> LoadBalancerUpdateRequest:
        """Set the human-readable name."""
        return self.with_body_field("name", value)

    def region(self, value: str) -> LoadBalancerUpdateRequest:
        """Set the region slug."""
        return self.with_body_field("region", value)


class LoadBalancerGetRequest(Request):
    """A request for one load balancer, from which membership calls can be built."""

    def _droplet_call(self, ids: Iterable[int], method: Method) -> Request:
        request = self.with_segments(DROPLETS_SEGMENT).with_body(
            {"droplet_ids": [int(droplet) for droplet in ids]}
        )
        return request.retarget(Request, method, Resource())

    def _rule_call(self, rules: Iterable[RuleLike], method: Method) -> Request:
        request = _with_rules(self.with_segments(FORWARDING_RULES_SEGMENT), rules)
        return request.retarget(Request, method, Resource())

    def add_droplets(self, ids: Iterable[int]) -> Request:
        """Add Droplets, by id, to the load balancer."""
        return self._droplet_call(ids, Method.CREATE)

    def remove_droplets(self, ids: Iterable[int]) -> Request:
        """Remove Droplets, by id, from the load balancer."""
        return self._droplet_call(ids, Method.DELETE)

    def add_forwarding_rules(self, rules: Iterable[RuleLike]) -> Request:
        """Add forwarding rules to the load balancer."""
        return self._rule_call(rules, Method.CREATE)

    def remove_forwarding_rules(self, rules: Iterable[RuleLike]) -> Request:
        """Remove forwarding rules from the load balancer."""
        return self._rule_call(rules, Method.DELETE)


_LIST_RESOURCE = Resource(plural="load_balancers", factory=LoadBalancer.from_dict)
_ONE_RESOURCE = Resource(key="load_balancer", factory=LoadBalancer.from_dict)