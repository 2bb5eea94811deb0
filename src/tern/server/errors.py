"""Error handling for the request pipeline.

Maps HTTPError exceptions and unexpected failures to Response objects,
using registered error handlers or plain defaults. Internal details
never reach the response body unless debug is on.
"""

import inspect
import logging
import traceback
from collections.abc import Callable
from typing import Any

from tern._internal.types import ErrorHandler
from tern.errors import DecodeError, HTTPError
from tern.http.request import Request
from tern.http.response import AnyResponse, Response
from tern.server.results import to_response

logger = logging.getLogger("tern.server")

# Default error bodies echo request data, so they are never sent as HTML
PLAIN_TEXT = "text/plain; charset=utf-8"


async def call_error_handler(
    handler: Callable[..., Any],
    request: Request,
    exc: Exception,
) -> AnyResponse:
    """Invoke a user-registered error handler.

    Error handlers may accept zero, one (request), or two (request, exc)
    args, and may be sync or async.
    """
    params = list(inspect.signature(handler).parameters.values())

    if len(params) >= 2:
        result = handler(request, exc)
    elif len(params) == 1:
        result = handler(request)
    else:
        result = handler()

    if inspect.isawaitable(result):
        result = await result
    return to_response(result)


async def handle_http_error(
    exc: HTTPError,
    request: Request,
    error_handlers: dict[int | type, ErrorHandler],
) -> AnyResponse:
    """Map an HTTPError to a response using registered error handlers."""
    logger.debug("%d %s %s — %s", exc.status, request.method, request.path, exc.detail)

    handler = error_handlers.get(type(exc)) or error_handlers.get(exc.status)
    if handler is not None:
        response = await call_error_handler(handler, request, exc)
        # Keep the error status unless the handler chose its own
        if response.status == 200:
            response = response.with_status(exc.status)
        return response

    resp = Response(
        body=exc.detail or f"Error {exc.status}",
        status=exc.status,
        content_type=PLAIN_TEXT,
        headers=(("X-Content-Type-Options", "nosniff"),),
    )
    for name, value in exc.headers:
        resp = resp.with_header(name, value)
    return resp


async def handle_internal_error(
    exc: Exception,
    request: Request,
    error_handlers: dict[int | type, ErrorHandler],
    debug: bool,
) -> AnyResponse:
    """Handle unexpected exceptions as 500 errors."""
    if isinstance(exc, DecodeError):
        logger.warning("500 %s %s — could not decode request", request.method, request.path, exc_info=exc)
    else:
        logger.error("500 %s %s", request.method, request.path, exc_info=exc)

    handler = error_handlers.get(type(exc)) or error_handlers.get(500)
    if handler is not None:
        try:
            return await call_error_handler(handler, request, exc)
        except Exception:
            logger.exception("error handler for 500 %s %s failed", request.method, request.path)

    if debug:
        body = "".join(traceback.format_exception(exc))
        return Response(body=body, status=500, content_type=PLAIN_TEXT)

    return Response(body="Internal Server Error", status=500, content_type=PLAIN_TEXT)
