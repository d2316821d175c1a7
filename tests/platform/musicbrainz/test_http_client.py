"""Tests for the gated ``requests`` adapter."""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest
import requests
from pytest_mock import MockerFixture

from soundsocial.platform.musicbrainz.http_client import MusicBrainzHTTPClient
from soundsocial.platform.musicbrainz.rate_limit import RateLimiter
from soundsocial.shared.errors import RemoteUnavailableError

URL = "https://musicbrainz.example/ws/2/artist"


def _response(mocker: MockerFixture, status: int, body: Any = None, *, bad_json: bool = False) -> MagicMock:
    response = mocker.MagicMock()
    response.status_code = status
    response.headers = {"Content-Type": "application/json"}
    if bad_json:
        response.json.side_effect = ValueError("Expecting value")
    else:
        response.json.return_value = body
    return response


def _client(mocker: MockerFixture, session: MagicMock) -> tuple[MusicBrainzHTTPClient, MagicMock]:
    limiter = mocker.MagicMock(spec=RateLimiter)
    limiter.respect.return_value = 0.0
    client = MusicBrainzHTTPClient(
        user_agent="SoundSocial/0.1.0 (ops@example.com)",
        rate_limiter=limiter,
        timeout_seconds=5.0,
        session=session,
    )
    return client, limiter


def test_get_json_sends_headers_params_and_timeout(mocker: MockerFixture) -> None:
    session = mocker.MagicMock(spec=requests.Session)
    session.get.return_value = _response(mocker, 200, {"artists": []})
    client, limiter = _client(mocker, session)

    result = client.get_json(URL, {"query": "nirvana", "fmt": "json"})

    assert result.status == 200
    assert result.data == {"artists": []}
    limiter.respect.assert_called_once_with()
    session.get.assert_called_once_with(
        URL,
        params={"query": "nirvana", "fmt": "json"},
        headers={"Accept": "application/json", "User-Agent": "SoundSocial/0.1.0 (ops@example.com)"},
        timeout=5.0,
    )


def test_not_found_returns_empty_result(mocker: MockerFixture) -> None:
    session = mocker.MagicMock(spec=requests.Session)
    session.get.return_value = _response(mocker, 404)
    client, _ = _client(mocker, session)

    result = client.get_json(URL, {})

    assert result.not_found
    assert result.data is None


@pytest.mark.parametrize("status", [400, 429, 500, 503])
def test_error_status_raises_remote_unavailable(mocker: MockerFixture, status: int) -> None:
    session = mocker.MagicMock(spec=requests.Session)
    session.get.return_value = _response(mocker, status, {"error": "nope"})
    client, _ = _client(mocker, session)

    with pytest.raises(RemoteUnavailableError, match=str(status)):
        _ = client.get_json(URL, {})


def test_timeout_raises_remote_unavailable(mocker: MockerFixture) -> None:
    session = mocker.MagicMock(spec=requests.Session)
    session.get.side_effect = requests.Timeout("read timed out")
    client, _ = _client(mocker, session)

    with pytest.raises(RemoteUnavailableError, match="timed out"):
        _ = client.get_json(URL, {})


def test_connection_error_raises_remote_unavailable(mocker: MockerFixture) -> None:
    session = mocker.MagicMock(spec=requests.Session)
    session.get.side_effect = requests.ConnectionError("refused")
    client, _ = _client(mocker, session)

    with pytest.raises(RemoteUnavailableError):
        _ = client.get_json(URL, {})


def test_unparseable_body_raises_remote_unavailable(mocker: MockerFixture) -> None:
    session = mocker.MagicMock(spec=requests.Session)
    session.get.return_value = _response(mocker, 200, bad_json=True)
    client, _ = _client(mocker, session)

    with pytest.raises(RemoteUnavailableError, match="not valid JSON"):
        _ = client.get_json(URL, {})


def test_non_object_body_raises_remote_unavailable(mocker: MockerFixture) -> None:
    session = mocker.MagicMock(spec=requests.Session)
    session.get.return_value = _response(mocker, 200, ["not", "an", "object"])
    client, _ = _client(mocker, session)

    with pytest.raises(RemoteUnavailableError):
        _ = client.get_json(URL, {})


def test_every_request_passes_the_gate(mocker: MockerFixture) -> None:
    session = mocker.MagicMock(spec=requests.Session)
    session.get.return_value = _response(mocker, 404)
    client, limiter = _client(mocker, session)

    for _ in range(3):
        _ = client.get_json(URL, {})

    assert limiter.respect.call_count == 3


def test_close_closes_session(mocker: MockerFixture) -> None:
    session = mocker.MagicMock(spec=requests.Session)
    client, _ = _client(mocker, session)

    client.close()

    session.close.assert_called_once_with()
