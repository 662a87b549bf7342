import pytest

from ocean_client.api.load_balancer_fields import ForwardingRule, HealthCheck, StickySessions
from ocean_client.errors import TransportError

HEALTH = {
    "protocol": "http",
    "port": 80,
    "path": "/",
    "check_interval_seconds": 10,
    "response_timeout_seconds": 5,
    "unhealthy_threshold": 3,
    "healthy_threshold": 5,
}


def test_four_tuple_uses_defaults():
    rule = ForwardingRule.from_tuple(("http", 80, "http", 8080))
    assert rule == ForwardingRule("http", 80, "http", 8080)
    assert rule.certificate_id is None
    assert rule.tls_passthrough is False


def test_five_tuple_sets_certificate():
    rule = ForwardingRule.from_tuple(("https", 443, "http", 80, "cert-1"))
    assert rule.certificate_id == "cert-1"
    assert rule.tls_passthrough is False


def test_six_tuple_sets_passthrough():
    rule = ForwardingRule.from_tuple(("https", 443, "https", 443, None, True))
    assert rule.certificate_id is None
    assert rule.tls_passthrough is True


@pytest.mark.parametrize("value", [("http", 80, "http"), ("http", 80, "http", 80, None, True, 1)])
def test_bad_tuple_length(value):
    with pytest.raises(ValueError):
        ForwardingRule.from_tuple(value)


def test_builders_return_new_rule():
    base = ForwardingRule("http", 80, "http", 80)
    changed = base.with_certificate_id("cert-1").with_tls_passthrough(True)
    assert changed.certificate_id == "cert-1"
    assert changed.tls_passthrough is True
    assert base.certificate_id is None
    assert base.tls_passthrough is False


def test_rule_to_dict_keeps_null_certificate():
    data = ForwardingRule("tcp", 22, "tcp", 2222).to_dict()
    assert data["certificate_id"] is None
    assert data["entry_port"] == 22
    assert data["target_port"] == 2222


def test_rule_round_trip():
    rule = ForwardingRule("https", 443, "http", 80, "cert-1", True)
    assert ForwardingRule.from_dict(rule.to_dict()) == rule


def test_rule_missing_field():
    with pytest.raises(TransportError):
        ForwardingRule.from_dict({"entry_protocol": "http"})


def test_health_check_round_trip():
    check = HealthCheck.from_dict(HEALTH)
    assert check.path == "/"
    assert check.to_dict() == HEALTH


def test_health_check_missing_field():
    data = dict(HEALTH)
    del data["path"]
    with pytest.raises(TransportError):
        HealthCheck.from_dict(data)


def test_sticky_sessions_uses_type_key():
    sessions = StickySessions.from_dict({"type": "none"})
    assert sessions.kind == "none"
    assert sessions.cookie_name is None
    assert sessions.to_dict() == {"type": "none", "cookie_name": None, "cookie_ttl_seconds": None}


def test_sticky_sessions_round_trip():
    sessions = StickySessions("cookies", "lb", "300")
    assert StickySessions.from_dict(sessions.to_dict()) == sessions


def test_sticky_sessions_missing_type():
    with pytest.raises(TransportError):
        StickySessions.from_dict({"cookie_name": "lb"})