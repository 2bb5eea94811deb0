"""ASGI response sending — translates tern responses to ASGI messages.

Handles single-body responses and chunked streaming responses. A
streaming response stops as soon as the client disconnects.
"""

import asyncio
import contextlib
import logging
from collections.abc import AsyncIterator, Awaitable, Callable, Iterator

from tern._internal.asgi import Receive, Send
from tern.http.response import Response, StreamingResponse

logger = logging.getLogger("tern.server")


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


def _encode_headers(content_type: str, headers: tuple[tuple[str, str], ...]) -> list[tuple[bytes, bytes]]:
    raw: list[tuple[bytes, bytes]] = [(b"content-type", content_type.encode("latin-1"))]
    raw.extend((name.lower().encode("latin-1"), value.encode("latin-1")) for name, value in headers)
    return raw


def _encode_chunk(chunk: str | bytes) -> bytes:
    return chunk.encode("utf-8") if isinstance(chunk, str) else chunk


async def send_response(response: Response, send: Send) -> None:
    """Translate a Response into ASGI send() calls."""
    body = response.body_bytes if _body_allowed(response.status) else b""
    raw_headers = _encode_headers(response.content_type, response.headers)
    raw_headers.append((b"content-length", str(len(body)).encode("latin-1")))

    await send({"type": "http.response.start", "status": response.status, "headers": raw_headers})
    await send({"type": "http.response.body", "body": body})


async def _wait_for_disconnect(receive: Receive) -> None:
    while True:
        message = await receive()
        if message.get("type") == "http.disconnect":
            return


async def _close_chunks(chunks: Iterator[str | bytes] | AsyncIterator[str | bytes]) -> None:
    """Close a chunk generator so its ``finally`` blocks run now."""
    aclose = getattr(chunks, "aclose", None)
    if aclose is not None:
        await aclose()
        return
    close = getattr(chunks, "close", None)
    if close is not None:
        close()


async def send_streaming_response(
    response: StreamingResponse,
    send: Send,
    receive: Receive,
    *,
    on_disconnect: Callable[[], Awaitable[None]] | None = None,
) -> None:
    """Send a streaming response, one ASGI body message per chunk.

    Runs the chunk producer alongside a disconnect monitor; whichever
    finishes first cancels the other. *on_disconnect* is awaited as soon
    as the client goes away, before the producer is cancelled, so
    producers blocked on request-scoped resources can wind down. The
    chunk iterator is always closed before returning. A producer error
    is logged and ends the body; it cannot become a 500 once headers
    are sent.
    """
    raw_headers = _encode_headers(response.content_type, response.headers)
    await send({"type": "http.response.start", "status": response.status, "headers": raw_headers})

    async def produce() -> None:
        if isinstance(response.chunks, AsyncIterator):
            async for chunk in response.chunks:
                if chunk:
                    await send({"type": "http.response.body", "body": _encode_chunk(chunk), "more_body": True})
        else:
            for chunk in response.chunks:
                if chunk:
                    await send({"type": "http.response.body", "body": _encode_chunk(chunk), "more_body": True})

    producer = asyncio.create_task(produce())
    monitor = asyncio.create_task(_wait_for_disconnect(receive))
    try:
        await asyncio.wait({producer, monitor}, return_when=asyncio.FIRST_COMPLETED)
        if on_disconnect is not None and monitor.done() and not producer.done():
            await on_disconnect()
    finally:
        for task in (producer, monitor):
            if not task.done():
                task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await task
        await _close_chunks(response.chunks)

    if monitor.done() and not monitor.cancelled():
        logger.debug("client disconnected mid-stream")
        return

    # Headers are already out; a failure can only end the stream early
    exc = producer.exception()
    if exc is not None:
        logger.error("stream failed mid-response", exc_info=exc)
    await send({"type": "http.response.body", "body": b"", "more_body": False})
