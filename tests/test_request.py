"""Tests for tern.http.request and tern.http.headers."""

from typing import Any

import pytest

from tern.errors import DecodeError
from tern.http.headers import Headers
from tern.http.request import Request


def _request(
    *,
    method: str = "GET",
    path: str = "/",
    query_string: bytes = b"",
    headers: list[tuple[bytes, bytes]] | None = None,
    chunks: list[bytes] | None = None,
) -> Request:
    messages = [
        {"type": "http.request", "body": chunk, "more_body": i < len(chunks or []) - 1}
        for i, chunk in enumerate(chunks or [b""])
    ]

    async def receive() -> dict[str, Any]:
        if messages:
            return messages.pop(0)
        return {"type": "http.disconnect"}

    scope = {
        "type": "http",
        "method": method,
        "path": path,
        "query_string": query_string,
        "headers": headers or [],
        "http_version": "1.1",
        "server": ("localhost", 8000),
        "client": ("127.0.0.1", 5000),
    }
    return Request.from_asgi(scope, receive)


class TestHeaders:
    def test_case_insensitive(self) -> None:
        headers = Headers(((b"Content-Type", b"text/html"),))
        assert headers["content-type"] == "text/html"
        assert "CONTENT-TYPE" in headers

    def test_multiple_values(self) -> None:
        headers = Headers(((b"accept", b"a"), (b"Accept", b"b")))
        assert headers["accept"] == "a"
        assert headers.get_list("accept") == ["a", "b"]
        assert len(headers) == 1

    def test_get_default(self) -> None:
        assert Headers().get("missing", "x") == "x"


class TestRequest:
    def test_metadata(self) -> None:
        request = _request(method="POST", path="/users", query_string=b"a=1")
        assert request.method == "POST"
        assert request.path == "/users"
        assert request.url == "/users?a=1"
        assert request.client == ("127.0.0.1", 5000)

    def test_content_headers(self) -> None:
        request = _request(headers=[(b"content-type", b"application/json"), (b"content-length", b"12")])
        assert request.content_type == "application/json"
        assert request.content_length == 12

    def test_bad_content_length(self) -> None:
        assert _request(headers=[(b"content-length", b"lots")]).content_length is None

    async def test_body_joins_chunks(self) -> None:
        request = _request(chunks=[b"hello ", b"world"])
        assert await request.body() == b"hello world"
        # Cached after the first read
        assert await request.body() == b"hello world"

    async def test_body_limit(self) -> None:
        request = _request(chunks=[b"abc", b"def"])
        with pytest.raises(DecodeError, match="exceeds 4 bytes"):
            await request.body(limit=4)

    async def test_json_and_text(self) -> None:
        request = _request(chunks=[b'{"a": 1}'])
        assert await request.json() == {"a": 1}
        assert await request.text() == '{"a": 1}'

    async def test_stream_stops_on_disconnect(self) -> None:
        async def receive() -> dict[str, Any]:
            return {"type": "http.disconnect"}

        request = Request.from_asgi({"type": "http", "method": "POST", "path": "/"}, receive)
        assert await request.body() == b""
