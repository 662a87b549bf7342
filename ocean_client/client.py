"""The client that carries out requests against the API."""

from __future__ import annotations

import json
import logging
from typing import Any

import requests

from ocean_client.api.common import MAX_PER_PAGE, _append_query, next_page
from ocean_client.errors import NotFound, TransportError, UnexpectedStatus, UnprocessableEntity
from ocean_client.request import Request

log = logging.getLogger(__name__)

_NO_BODY = object()


class DigitalOcean:
    """A client holding an API token and the HTTP session used to send calls."""

    def __init__(self, token: str, session: requests.Session | None = None) -> None:
        self.token = str(token)
        self._session = session if session is not None else requests.Session()
        log.info("Created.")

    def execute(self, request: Request) -> Any:
        """Carry out ``request`` and return its result."""
        return request.execute(self)

    def get(self, request: Request) -> Any:
        """Fetch a single value."""
        log.info("GET %s", request.url)
        response = self._fetch("GET", request.url)
        self._expect_found(response)
        return request.parse(self._decode(response))

    def list(self, request: Request) -> list[Any]:
        """Fetch every page of a list, stopping early once the limit is reached."""
        log.info("LIST %s", request.url)
        limit = request.max_items
        per_page = limit if limit is not None and limit < MAX_PER_PAGE else MAX_PER_PAGE
        url = _append_query(request.url, "per_page", per_page)
        items: list[Any] = []
        while True:
            response = self._fetch("GET", url)
            self._expect_found(response)
            payload = self._decode(response)
            following = next_page(payload)
            items.extend(request.parse(payload))
            if following is None:
                break
            url = following
            if limit is not None:
                if len(items) >= limit:
                    break
                remaining = limit - len(items)
                if remaining < MAX_PER_PAGE:
                    url = _append_query(url, "per_page", remaining)
            log.info("Fetching next page...")
        return items

    def post(self, request: Request) -> Any:
        """Create something; accepts both immediate and deferred success."""
        log.info("POST %s", request.url)
        response = self._fetch("POST", request.url, request.body)
        if response.status_code not in (201, 202):
            self._raise_for_write(response)
        return request.parse(self._decode_optional(response))

    def put(self, request: Request) -> Any:
        """Update something."""
        log.info("PUT %s", request.url)
        response = self._fetch("PUT", request.url, request.body)
        if response.status_code != 200:
            self._raise_for_write(response)
        return request.parse(self._decode_optional(response))

    def delete(self, request: Request) -> None:
        """Delete something; the API answers with no content."""
        log.info("DELETE %s", request.url)
        response = self._fetch("DELETE", request.url)
        if response.status_code != 204:
            raise UnexpectedStatus(response.status_code)

    def _fetch(self, verb: str, url: str, body: Any = _NO_BODY) -> requests.Response:
        headers = {"Authorization": f"Bearer {self.token}"}
        kwargs: dict[str, Any] = {}
        if body is not _NO_BODY:
            headers["Content-Type"] = "application/json"
            kwargs["data"] = json.dumps(body)
        try:
            response = self._session.request(verb, url, headers=headers, **kwargs)
        except requests.RequestException as exc:
            raise TransportError(str(exc)) from exc
        log.info("Response status: %s", response.status_code)
        return response

    @staticmethod
    def _expect_found(response: requests.Response) -> None:
        if response.status_code == 404:
            raise NotFound()
        if response.status_code != 200:
            raise UnexpectedStatus(response.status_code)

    def _raise_for_write(self, response: requests.Response) -> None:
        if response.status_code == 422:
            raise UnprocessableEntity(self._decode(response))
        raise UnexpectedStatus(response.status_code)

    @staticmethod
    def _decode(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(f"invalid JSON in response: {exc}") from exc

    def _decode_optional(self, response: requests.Response) -> Any:
        if not response.content:
            return None
        return self._decode(response)