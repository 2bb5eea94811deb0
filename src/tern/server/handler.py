"""ASGI request pipeline.

The only component that touches raw ASGI for HTTP requests. Each
request goes through:

1. resolve   — first matching route, or 404
2. decode    — query string, plus body for POST/PUT/PATCH/DELETE
3. intercept — global interceptors, then the route's own
4. handle    — the route handler, or the one an interceptor substituted
5. redirect  — the route's ``redirect_to`` when the handler returned None

Every failure is turned into a response here; nothing escapes to the
server. Request-scoped resources are released once the response is
sent, or as soon as a streaming client disconnects.
"""

import inspect
import logging
from collections.abc import Sequence
from contextlib import AsyncExitStack
from typing import Any

from tern._internal.asgi import Receive, Scope, Send
from tern._internal.invoke import invoke
from tern._internal.types import ErrorHandler, Handler
from tern.config import RouterConfig
from tern.context import RequestContext
from tern.errors import HTTPError, NotFound
from tern.http.body import BODY_METHODS, decode_body
from tern.http.query import parse_query
from tern.http.request import Request
from tern.http.response import AnyResponse, Redirect, StreamingResponse
from tern.interceptors.chain import run_chain
from tern.interceptors.outcome import Interceptor
from tern.routing.router import Router
from tern.server.errors import handle_http_error, handle_internal_error
from tern.server.results import to_response
from tern.server.sender import send_response, send_streaming_response
from tern.templating.renderer import TemplateRenderer

logger = logging.getLogger("tern.server")


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    router: Router,
    interceptors: tuple[Interceptor, ...],
    error_handlers: dict[int | type, ErrorHandler],
    renderer: TemplateRenderer | None,
    config: RouterConfig,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)
    resources = AsyncExitStack()
    try:
        response = await _respond(
            request,
            resources,
            router=router,
            interceptors=interceptors,
            error_handlers=error_handlers,
            renderer=renderer,
            config=config,
        )
        if isinstance(response, StreamingResponse):
            await send_streaming_response(
                response,
                send,
                receive,
                on_disconnect=lambda: _release(resources, request),
            )
        else:
            await send_response(response, send)
    except Exception:
        logger.exception("failed sending response for %s %s", request.method, request.path)
    finally:
        await _release(resources, request)


async def _respond(
    request: Request,
    resources: AsyncExitStack,
    *,
    router: Router,
    interceptors: Sequence[Interceptor],
    error_handlers: dict[int | type, ErrorHandler],
    renderer: TemplateRenderer | None,
    config: RouterConfig,
) -> AnyResponse:
    """Run resolve → decode → intercept → handle → redirect."""
    try:
        match = router.match(request.method, request.path)
        if match is None:
            raise NotFound(f"No route matches {request.method} {request.path!r}")

        ctx = RequestContext(
            request=request,
            route=match.route,
            params=match.params,
            renderer=renderer,
            resources=resources,
        )
        ctx.query = parse_query(request.query.raw)
        if request.method in BODY_METHODS:
            raw = await request.body(limit=config.max_content_length)
            ctx.body = decode_body(raw, request.content_type)

        chain = await run_chain((*interceptors, *match.route.interceptors), ctx, match.route.handler)
        if chain.halted:
            return to_response(chain.response)

        result = await invoke(chain.handler, **build_handler_kwargs(chain.handler, ctx))
        if result is None and match.route.redirect_to is not None:
            return Redirect(match.route.redirect_to, config.redirect_status).to_response()
        return to_response(result)

    except HTTPError as exc:
        try:
            return await handle_http_error(exc, request, error_handlers)
        except Exception as inner:
            return await handle_internal_error(inner, request, error_handlers, config.debug)
    except Exception as exc:
        return await handle_internal_error(exc, request, error_handlers, config.debug)


async def _release(resources: AsyncExitStack, request: Request) -> None:
    try:
        await resources.aclose()
    except Exception:
        logger.exception("releasing resources for %s %s failed", request.method, request.path)


def build_handler_kwargs(handler: Handler, ctx: RequestContext) -> dict[str, Any]:
    """Inspect the handler signature and build kwargs from the context.

    Resolution order:
    1. ``request`` parameter (by name or ``Request`` annotation)
    2. ``ctx`` parameter (by name or ``RequestContext`` annotation)
    3. ``params``, ``query``, ``body`` by name
    4. Path parameters by name, converted to the annotated type if possible
    """
    sig = inspect.signature(handler, eval_str=True)
    kwargs: dict[str, Any] = {}

    for name, param in sig.parameters.items():
        if name == "request" or param.annotation is Request:
            kwargs[name] = ctx.request
        elif name == "ctx" or param.annotation is RequestContext:
            kwargs[name] = ctx
        elif name == "params":
            kwargs[name] = ctx.params
        elif name == "query":
            kwargs[name] = ctx.query
        elif name == "body":
            kwargs[name] = ctx.body
        elif name in ctx.params:
            value = ctx.params[name]
            if param.annotation is not inspect.Parameter.empty:
                try:
                    kwargs[name] = param.annotation(value)
                except (ValueError, TypeError):
                    kwargs[name] = value
            else:
                kwargs[name] = value

    return kwargs
