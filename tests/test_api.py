"""Tests for TopManagerApi: endpoint mapping, cookies and error translation."""

import json
from typing import Any
from unittest.mock import MagicMock, patch

import pytest
import requests

from sitzungsverwaltung.api import TopManagerApi
from sitzungsverwaltung.errors import DecodeError, TransportError
from sitzungsverwaltung.models import ResourceKind

BASE = "http://localhost:8080/api/topmanager/"


@pytest.fixture
def api_with_mock_session() -> tuple[TopManagerApi, MagicMock]:
    """Create a TopManagerApi with a mocked requests.Session."""
    with patch("sitzungsverwaltung.api.requests.Session") as mock_session_cls:
        mock_session = MagicMock()
        mock_session_cls.return_value = mock_session
        api = TopManagerApi("http://localhost:8080", token="tok", timeout=5)
    mock_session.request.return_value = _make_response(None)
    return api, mock_session


def _make_response(data: Any) -> MagicMock:
    """Create a mock HTTP response with given JSON data."""
    response = MagicMock()
    response.json.return_value = data
    response.content = b"" if data is None else json.dumps(data).encode()
    return response


def _request_args(mock_session: MagicMock) -> tuple[str, str, dict[str, Any]]:
    args, kwargs = mock_session.request.call_args
    return args[0], args[1], kwargs


def test_fetch_sessions(api_with_mock_session) -> None:
    api, mock_session = api_with_mock_session
    mock_session.request.return_value = _make_response(
        [{"id": "a", "name": "Plenum", "datum": "2024-05-01T18:00:00"}]
    )

    sessions = api.fetch_list(ResourceKind.SESSION)

    method, url, kwargs = _request_args(mock_session)
    assert method == "GET"
    assert url == BASE + "sitzungen/"
    assert kwargs["cookies"] is None
    assert kwargs["timeout"] == 5
    assert sessions[0].name == "Plenum"


@pytest.mark.parametrize(
    ("kind", "scope", "path"),
    [
        (ResourceKind.AGENDA_ITEM, "s1", "sitzung/s1/tops/"),
        (ResourceKind.MOTION, "t1", "tops/t1/anträge/"),
    ],
)
def test_fetch_list_scoped_paths(api_with_mock_session, kind, scope, path) -> None:
    api, mock_session = api_with_mock_session
    mock_session.request.return_value = _make_response([])

    assert api.fetch_list(kind, scope) == []
    assert _request_args(mock_session)[1] == BASE + path


def test_fetch_list_requires_scope_for_children(api_with_mock_session) -> None:
    api, _ = api_with_mock_session
    with pytest.raises(ValueError):
        api.fetch_list(ResourceKind.AGENDA_ITEM)


@pytest.mark.parametrize(
    ("kind", "path", "payload"),
    [
        (ResourceKind.SESSION, "sitzung/a/", {"id": "a", "name": "n", "datum": "2024-05-01T18:00:00"}),
        (ResourceKind.AGENDA_ITEM, "tops/a/", {"id": "a", "name": "n", "inhalt": "", "weight": 0}),
        (ResourceKind.MOTION, "antrag/a/", {"id": "a", "titel": "t", "begründung": "", "antragstext": ""}),
    ],
)
def test_fetch_one_paths(api_with_mock_session, kind, path, payload) -> None:
    api, mock_session = api_with_mock_session
    mock_session.request.return_value = _make_response(payload)

    resource = api.fetch_one(kind, "a")

    assert _request_args(mock_session)[1] == BASE + path
    assert resource.id == "a"


@pytest.mark.parametrize(
    ("kind", "scope", "path"),
    [
        (ResourceKind.SESSION, None, "sitzung/"),
        (ResourceKind.AGENDA_ITEM, "s1", "sitzung/s1/top/"),
        (ResourceKind.MOTION, "t1", "top/t1/antrag/"),
    ],
)
def test_create_uses_put_with_cookie(api_with_mock_session, kind, scope, path) -> None:
    api, mock_session = api_with_mock_session

    api.create(kind, scope, {"name": "x"})

    method, url, kwargs = _request_args(mock_session)
    assert method == "PUT"
    assert url == BASE + path
    assert kwargs["json"] == {"name": "x"}
    assert kwargs["cookies"] == {"access_token": "tok"}


def test_patch_agenda_item_includes_session_id(api_with_mock_session) -> None:
    api, mock_session = api_with_mock_session

    api.patch(ResourceKind.AGENDA_ITEM, "x", {"inhalt": "new"}, scope="a")

    method, url, kwargs = _request_args(mock_session)
    assert method == "PATCH"
    assert url == BASE + "top/"
    assert kwargs["json"] == {"id": "x", "sitzung_id": "a", "inhalt": "new"}


def test_patch_session_body(api_with_mock_session) -> None:
    api, mock_session = api_with_mock_session

    api.patch(ResourceKind.SESSION, "a", {"name": "n"})

    _, url, kwargs = _request_args(mock_session)
    assert url == BASE + "sitzung/"
    assert kwargs["json"] == {"id": "a", "name": "n"}


def test_delete_paths(api_with_mock_session) -> None:
    api, mock_session = api_with_mock_session

    api.delete(ResourceKind.SESSION, "a")
    method, url, kwargs = _request_args(mock_session)
    assert (method, url, kwargs["json"]) == ("DELETE", BASE + "sitzung/", {"id": "a"})

    api.delete(ResourceKind.AGENDA_ITEM, "x")
    assert _request_args(mock_session)[1] == BASE + "top/"

    api.delete(ResourceKind.MOTION, "m")
    method, url, kwargs = _request_args(mock_session)
    assert url == BASE + "antrag/m/"
    assert kwargs["json"] is None
    assert kwargs["cookies"] == {"access_token": "tok"}


def test_http_error_becomes_transport_error(api_with_mock_session) -> None:
    api, mock_session = api_with_mock_session
    response = MagicMock(status_code=403)
    mock_session.request.return_value.raise_for_status.side_effect = requests.HTTPError(
        response=response
    )

    with pytest.raises(TransportError) as excinfo:
        api.delete(ResourceKind.SESSION, "a")
    assert excinfo.value.status_code == 403


def test_connection_error_becomes_transport_error(api_with_mock_session) -> None:
    api, mock_session = api_with_mock_session
    mock_session.request.side_effect = requests.ConnectionError("refused")

    with pytest.raises(TransportError, match="refused"):
        api.fetch_list(ResourceKind.SESSION)


def test_invalid_json_becomes_decode_error(api_with_mock_session) -> None:
    api, mock_session = api_with_mock_session
    response = _make_response([])
    response.json.side_effect = ValueError("bad json")
    mock_session.request.return_value = response

    with pytest.raises(DecodeError):
        api.fetch_list(ResourceKind.SESSION)


def test_unexpected_shape_becomes_decode_error(api_with_mock_session) -> None:
    api, mock_session = api_with_mock_session
    mock_session.request.return_value = _make_response([{"id": "a"}])

    with pytest.raises(DecodeError):
        api.fetch_list(ResourceKind.SESSION)
