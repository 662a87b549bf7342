import json

import pytest
import requests
import responses
from responses import matchers

from ocean_client.api.common import Resource
from ocean_client.client import DigitalOcean
from ocean_client.errors import NotFound, TransportError, UnexpectedStatus, UnprocessableEntity
from ocean_client.method import Method
from ocean_client.request import Request

BASE = "https://api.digitalocean.com/v2/things"


@pytest.fixture
def mocked():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


@pytest.fixture
def client():
    return DigitalOcean("token")


def _one(method, url=BASE, body=None):
    return Request(url=url, method=method, resource=Resource(key="thing", plural="things"), body=body)


def _many():
    return Request(url=BASE, method=Method.LIST, resource=Resource(key="thing", plural="things"))


def test_execute_get_returns_parsed_value(mocked, client):
    mocked.add(responses.GET, BASE + "/7", json={"thing": {"id": 7}}, status=200)
    assert client.execute(_one(Method.GET, BASE + "/7")) == {"id": 7}


def test_get_sends_bearer_token(mocked, client):
    mocked.add(responses.GET, BASE + "/7", json={"thing": 1}, status=200)
    client.get(_one(Method.GET, BASE + "/7"))
    assert mocked.calls[0].request.headers["Authorization"] == "Bearer token"


def test_get_not_found(mocked, client):
    mocked.add(responses.GET, BASE + "/7", json={}, status=404)
    with pytest.raises(NotFound):
        client.get(_one(Method.GET, BASE + "/7"))


def test_get_unexpected_status(mocked, client):
    mocked.add(responses.GET, BASE + "/7", json={}, status=401)
    with pytest.raises(UnexpectedStatus) as info:
        client.get(_one(Method.GET, BASE + "/7"))
    assert info.value.status == 401


def test_get_invalid_json_is_transport_error(mocked, client):
    mocked.add(responses.GET, BASE + "/7", body="not json", status=200)
    with pytest.raises(TransportError):
        client.get(_one(Method.GET, BASE + "/7"))


def test_connection_failure_is_transport_error(mocked, client):
    mocked.add(responses.GET, BASE + "/7", body=requests.ConnectionError("down"))
    with pytest.raises(TransportError):
        client.get(_one(Method.GET, BASE + "/7"))


def test_list_requests_max_page_size(mocked, client):
    mocked.add(
        responses.GET,
        BASE,
        json={"things": [1, 2], "links": {}, "meta": {"total": 2}},
        match=[matchers.query_param_matcher({"per_page": "200"})],
    )
    assert client.list(_many()) == [1, 2]
    assert len(mocked.calls) == 1


def test_list_follows_pages(mocked, client):
    mocked.add(
        responses.GET,
        BASE,
        json={"things": [1], "links": {"pages": {"next": BASE + "?page=2"}}, "meta": {"total": 2}},
        match=[matchers.query_param_matcher({"per_page": "200"})],
    )
    mocked.add(
        responses.GET,
        BASE,
        json={"things": [2], "links": {"pages": {}}, "meta": {"total": 2}},
        match=[matchers.query_param_matcher({"page": "2"})],
    )
    assert client.execute(_many()) == [1, 2]
    assert len(mocked.calls) == 2


def test_list_limit_sets_page_size_and_stops(mocked, client):
    mocked.add(
        responses.GET,
        BASE,
        json={"things": [1, 2], "links": {"pages": {"next": BASE + "?page=2"}}, "meta": {"total": 9}},
        match=[matchers.query_param_matcher({"per_page": "3"})],
    )
    mocked.add(
        responses.GET,
        BASE,
        json={"things": [3], "links": {"pages": {"next": BASE + "?page=3"}}, "meta": {"total": 9}},
        match=[matchers.query_param_matcher({"page": "2", "per_page": "1"})],
    )
    assert client.list(_many().limit(3)) == [1, 2, 3]
    assert len(mocked.calls) == 2


def test_list_not_found(mocked, client):
    mocked.add(responses.GET, BASE, json={}, status=404)
    with pytest.raises(NotFound):
        client.list(_many())


def test_post_sends_body_and_accepts_created(mocked, client):
    mocked.add(responses.POST, BASE, json={"thing": {"name": "a"}}, status=201)
    result = client.execute(_one(Method.CREATE, body={"name": "a"}))
    assert result == {"name": "a"}
    assert json.loads(mocked.calls[0].request.body) == {"name": "a"}


def test_post_accepts_accepted(mocked, client):
    mocked.add(responses.POST, BASE, json={"thing": 5}, status=202)
    assert client.post(_one(Method.CREATE, body={})) == 5


def test_post_without_result_ignores_empty_body(mocked, client):
    mocked.add(responses.POST, BASE, body="", status=202)
    request = Request(url=BASE, method=Method.CREATE, body={"x": 1})
    assert client.post(request) is None


def test_post_unprocessable(mocked, client):
    detail = {"id": "unprocessable_entity", "message": "taken"}
    mocked.add(responses.POST, BASE, json=detail, status=422)
    with pytest.raises(UnprocessableEntity) as info:
        client.post(_one(Method.CREATE, body={}))
    assert info.value.detail == detail


def test_post_unexpected_status(mocked, client):
    mocked.add(responses.POST, BASE, json={}, status=200)
    with pytest.raises(UnexpectedStatus) as info:
        client.post(_one(Method.CREATE, body={}))
    assert info.value.status == 200


def test_put_ok(mocked, client):
    mocked.add(responses.PUT, BASE + "/7", json={"thing": {"name": "b"}}, status=200)
    result = client.execute(_one(Method.UPDATE, BASE + "/7", body={"name": "b"}))
    assert result == {"name": "b"}
    assert json.loads(mocked.calls[0].request.body) == {"name": "b"}


def test_put_created_is_unexpected(mocked, client):
    mocked.add(responses.PUT, BASE + "/7", json={}, status=201)
    with pytest.raises(UnexpectedStatus):
        client.put(_one(Method.UPDATE, BASE + "/7", body={}))


def test_delete_no_content(mocked, client):
    mocked.add(responses.DELETE, BASE + "/7", status=204)
    assert client.execute(Request(url=BASE + "/7", method=Method.DELETE)) is None
    assert mocked.calls[0].request.method == "DELETE"


def test_delete_not_found_is_unexpected_status(mocked, client):
    mocked.add(responses.DELETE, BASE + "/7", status=404)
    with pytest.raises(UnexpectedStatus) as info:
        client.delete(Request(url=BASE + "/7", method=Method.DELETE))
    assert info.value.status == 404