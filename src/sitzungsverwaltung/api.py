"""HTTP client for the topmanager API."""

from __future__ import annotations

import logging
from typing import Any

import requests

from sitzungsverwaltung.errors import DecodeError, TransportError
from sitzungsverwaltung.models import Resource, ResourceKind, decode, decode_list


API_PREFIX = "api/topmanager/"

_LIST_PATHS = {
    ResourceKind.SESSION: "sitzungen/",
    ResourceKind.AGENDA_ITEM: "sitzung/{scope}/tops/",
    ResourceKind.MOTION: "tops/{scope}/anträge/",
}

_ONE_PATHS = {
    ResourceKind.SESSION: "sitzung/{id}/",
    ResourceKind.AGENDA_ITEM: "tops/{id}/",
    ResourceKind.MOTION: "antrag/{id}/",
}

_CREATE_PATHS = {
    ResourceKind.SESSION: "sitzung/",
    ResourceKind.AGENDA_ITEM: "sitzung/{scope}/top/",
    ResourceKind.MOTION: "top/{scope}/antrag/",
}

_WRITE_PATHS = {
    ResourceKind.SESSION: "sitzung/",
    ResourceKind.AGENDA_ITEM: "top/",
    ResourceKind.MOTION: "antrag/",
}


class TopManagerApi:
    """Remote access to sessions, agenda items and motions.

    Reads are anonymous. Mutating calls attach the bearer token as the
    ``access_token`` cookie.
    """

    def __init__(self, base_url: str, *, token: str | None = None, timeout: float = 10.0) -> None:
        if not base_url.endswith("/"):
            base_url += "/"
        self.base_url = base_url
        self.token = token
        self.timeout = timeout
        self.sess = requests.Session()
        self.logger = logging.getLogger("api")

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def fetch_list(self, kind: ResourceKind, scope: str | None = None) -> list[Resource]:
        """List resources of kind, scoped to the parent id where kind has a parent."""
        path = _LIST_PATHS[kind].format(scope=self._scope(kind, scope))
        return decode_list(kind, self._request("GET", path))

    def fetch_one(self, kind: ResourceKind, resource_id: str) -> Resource:
        path = _ONE_PATHS[kind].format(id=resource_id)
        return decode(kind, self._request("GET", path))

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def create(self, kind: ResourceKind, scope: str | None, fields: dict[str, str]) -> Any:
        path = _CREATE_PATHS[kind].format(scope=self._scope(kind, scope))
        return self._request("PUT", path, body=fields, auth=True)

    def patch(
        self,
        kind: ResourceKind,
        resource_id: str,
        fields: dict[str, str],
        scope: str | None = None,
    ) -> Any:
        body: dict[str, Any] = {"id": resource_id}
        if kind is ResourceKind.AGENDA_ITEM:
            body["sitzung_id"] = self._scope(kind, scope)
        body.update(fields)
        return self._request("PATCH", _WRITE_PATHS[kind], body=body, auth=True)

    def delete(self, kind: ResourceKind, resource_id: str) -> Any:
        if kind is ResourceKind.MOTION:
            return self._request("DELETE", f"antrag/{resource_id}/", auth=True)
        return self._request("DELETE", _WRITE_PATHS[kind], body={"id": resource_id}, auth=True)

    # -------------------------------------------------------------------------
    # Transport
    # -------------------------------------------------------------------------

    def _scope(self, kind: ResourceKind, scope: str | None) -> str:
        if kind.parent is None:
            return ""
        if not scope:
            raise ValueError(f"{kind.value} requires a {kind.parent.value} scope")
        return scope

    def _request(
        self,
        method: str,
        path: str,
        *,
        body: dict[str, Any] | None = None,
        auth: bool = False,
    ) -> Any:
        url = self.base_url + API_PREFIX + path
        cookies = {"access_token": self.token} if auth and self.token else None

        self.logger.debug(f"{method} {url} {repr(body)[:64] if body else ''}")

        try:
            r = self.sess.request(method, url, json=body, cookies=cookies, timeout=self.timeout)
            r.raise_for_status()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            raise TransportError(f"{method} {path} failed with HTTP {status}", status) from e
        except requests.RequestException as e:
            raise TransportError(f"{method} {path} failed: {e}") from e

        if not r.content:
            return None
        try:
            return r.json()
        except ValueError as e:
            raise DecodeError(f"{method} {path} returned invalid JSON") from e
