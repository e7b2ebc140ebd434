"""Unit tests for the blocking client's status checks and overall deadline."""

import time

import httpx
import pytest

from atcoder_testcases.domain.exceptions import TransportError, UnexpectedStatusError
from atcoder_testcases.infrastructure import CookieStorage
from atcoder_testcases.infrastructure.http_client import build_clients
from tests.conftest import RecordingShell

PAGE = "https://atcoder.jp/contests/abc100"


def blocking_client(tmp_path, handler, timeout: float = 5.0):
    shell = RecordingShell()
    client, _ = build_clients(
        CookieStorage(tmp_path / "cookies.jsonl"),
        shell,
        user_agent="test",
        timeout=timeout,
        transport=httpx.MockTransport(handler),
    )
    return client, shell


def test_body_and_headers_are_kept(tmp_path):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(302, headers={"Location": "/login"}, text="moved")

    client, shell = blocking_client(tmp_path, handler)

    response = client.get(PAGE, passing=(302,))

    assert response.status_code == 302
    assert response.headers["Location"] == "/login"
    assert response.text == "moved"
    assert response.request.url == PAGE
    assert shell.messages[0] == f"GET {PAGE}"


def test_unexpected_status(tmp_path):
    client, _ = blocking_client(tmp_path, lambda request: httpx.Response(500))

    with pytest.raises(UnexpectedStatusError) as exc_info:
        client.get(PAGE)

    assert exc_info.value.actual == 500


def test_trickling_body_hits_overall_deadline(tmp_path):
    def trickle():
        for _ in range(20):
            time.sleep(0.05)
            yield b"<p>"

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=trickle())

    client, shell = blocking_client(tmp_path, handler, timeout=0.2)

    with pytest.raises(TransportError) as exc_info:
        client.get(PAGE)

    assert exc_info.value.url == PAGE
    assert "timed out" in str(exc_info.value)
    assert shell.messages == [f"GET {PAGE}"]
