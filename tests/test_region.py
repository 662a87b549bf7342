import pytest
import responses
from responses import matchers

from ocean_client.api.region import Region
from ocean_client.client import DigitalOcean
from ocean_client.errors import TransportError
from ocean_client.method import Method

SAMPLE = {
    "name": "New York 3",
    "slug": "nyc3",
    "sizes": ["s-1vcpu-1gb", "s-2vcpu-2gb"],
    "available": True,
    "features": ["backups", "ipv6"],
}


def test_list_request_points_at_regions():
    request = Region.list()
    assert request.url == "https://api.digitalocean.com/v2/regions"
    assert request.method is Method.LIST


def test_from_dict_reads_fields():
    region = Region.from_dict(SAMPLE)
    assert region.slug == "nyc3"
    assert region.sizes == ["s-1vcpu-1gb", "s-2vcpu-2gb"]
    assert region.available is True


def test_round_trip():
    assert Region.from_dict(SAMPLE).to_dict() == SAMPLE


def test_missing_field_is_transport_error():
    broken = {key: value for key, value in SAMPLE.items() if key != "slug"}
    with pytest.raises(TransportError):
        Region.from_dict(broken)


def test_list_parses_page():
    payload = {"regions": [SAMPLE, SAMPLE], "links": {}, "meta": {"total": 2}}
    assert Region.list().parse(payload) == [Region.from_dict(SAMPLE)] * 2


def test_list_limit_keeps_target():
    request = Region.list().limit(5)
    assert request.max_items == 5
    assert request.url == Region.list().url


def test_execute_against_client():
    url = "https://api.digitalocean.com/v2/regions"
    with responses.RequestsMock(assert_all_requests_are_fired=False) as mocked:
        mocked.add(
            responses.GET,
            url,
            json={"regions": [SAMPLE], "links": {"pages": {}}, "meta": {"total": 1}},
            match=[matchers.query_param_matcher({"per_page": "200"})],
        )
        regions = Region.list().execute(DigitalOcean("token"))
    assert regions == [Region.from_dict(SAMPLE)]