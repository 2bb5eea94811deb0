"""Live-reload interceptor: stream a rendered template over SSE.

On ``GET <page>`` the interceptor halts the chain with a
``text/event-stream`` response. The first event carries the rendered
template; another is sent each time the template file changes on disk::

    data: {"html": "<h1>Hello</h1>"}

Every other request continues down the chain untouched.

The file watcher belongs to the request: its stop event is registered
on ``ctx.resources`` and the event generator is closed by the sender,
so the watcher shuts down when the client disconnects, when the stream
ends, or when sending fails.
"""

from __future__ import annotations

import json as json_module
import logging
from collections.abc import AsyncIterator, Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any

import anyio
from watchfiles import Change, awatch

from tern.errors import ConfigurationError, RenderError
from tern.http.response import StreamingResponse
from tern.interceptors.outcome import CONTINUE, Halt, Outcome

if TYPE_CHECKING:
    from tern.context import RequestContext
    from tern.templating.renderer import TemplateRenderer

logger = logging.getLogger("tern.interceptors")

SSE_HEADERS = (
    ("Cache-Control", "no-cache"),
    ("Connection", "keep-alive"),
    ("X-Accel-Buffering", "no"),
)


def sse_frame(payload: Mapping[str, Any]) -> str:
    """Encode *payload* as a single SSE ``data:`` frame."""
    return f"data: {json_module.dumps(payload)}\n\n"


class LiveReload:
    """Serve *template* as a live-updating SSE stream at *page*.

    Usage::

        app.add_interceptor(LiveReload(
            "live-reload",
            page="/live",
            template="home.html",
            context={"title": "Home"},
        ))
    """

    __slots__ = ("_renderer", "context", "force_polling", "name", "page", "template")

    def __init__(
        self,
        name: str,
        *,
        page: str,
        template: str,
        context: Mapping[str, Any] | None = None,
        renderer: TemplateRenderer | None = None,
        force_polling: bool | None = None,
    ) -> None:
        self.name = name
        self.page = page
        self.template = template
        self.context = dict(context or {})
        self.force_polling = force_polling
        self._renderer = renderer

    async def __call__(self, ctx: RequestContext) -> Outcome:
        if ctx.method != "GET" or ctx.path != self.page:
            return CONTINUE

        renderer = self._renderer or ctx.renderer
        if renderer is None:
            msg = f"{self.name}: live reload needs a template renderer."
            raise ConfigurationError(msg)

        stop = anyio.Event()
        ctx.resources.callback(self._close_watcher, stop)

        stream = self._events(renderer, stop)
        return Halt(
            StreamingResponse(
                stream,
                content_type="text/event-stream",
                headers=SSE_HEADERS,
            )
        )

    def _close_watcher(self, stop: anyio.Event) -> None:
        if not stop.is_set():
            logger.info("%s: closing file watcher for %s", self.name, self.template)
            stop.set()

    async def _render_frame(self, renderer: TemplateRenderer) -> str:
        try:
            html = await renderer.render_async(self.template, self.context)
        except RenderError:
            logger.exception("%s: error rendering %s", self.name, self.template)
            return sse_frame({"error": "Failed to render template"})
        return sse_frame({"html": html})

    async def _events(self, renderer: TemplateRenderer, stop: anyio.Event) -> AsyncIterator[str]:
        yield await self._render_frame(renderer)

        target = renderer.path_of(self.template).resolve()

        def only_target(change: Change, path: str) -> bool:
            return change != Change.deleted and Path(path).resolve() == target

        async for _changes in awatch(
            target.parent,
            watch_filter=only_target,
            stop_event=stop,
            recursive=False,
            force_polling=self.force_polling,
        ):
            logger.info("%s: template changed: %s", self.name, target.name)
            yield await self._render_frame(renderer)
