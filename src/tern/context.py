"""Per-request context handed to interceptors and handlers.

Created by the pipeline after the route resolves and the query and
body are decoded; discarded once the response is finalized.

Request-scoped resources (file watchers, connections) are pushed onto
``ctx.resources``, an ``AsyncExitStack`` the pipeline closes after the
response is sent — whether the request completed, the client
disconnected, or something raised::

    watcher = await ctx.resources.enter_async_context(open_watcher())
    ctx.resources.push_async_callback(client.aclose)
"""

from __future__ import annotations

from collections.abc import Mapping
from contextlib import AsyncExitStack
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from tern._internal.types import QueryDict
from tern.errors import ConfigurationError
from tern.http.request import Request
from tern.http.response import Redirect, Response

if TYPE_CHECKING:
    from tern.routing.route import Route
    from tern.templating.renderer import TemplateRenderer


@dataclass(slots=True)
class RequestContext:
    """Everything known about one in-flight request."""

    request: Request
    route: Route
    params: dict[str, str]
    query: QueryDict = field(default_factory=dict)
    body: dict[str, Any] = field(default_factory=dict)
    renderer: TemplateRenderer | None = field(default=None, repr=False)
    resources: AsyncExitStack = field(default_factory=AsyncExitStack, repr=False)

    @property
    def method(self) -> str:
        return self.request.method

    @property
    def path(self) -> str:
        return self.request.path

    async def render(
        self,
        template: str,
        context: Mapping[str, Any] | None = None,
        *,
        status: int = 200,
    ) -> Response:
        """Render *template* into an HTML response.

        Raises ``RenderError`` on failure; the pipeline turns it into a 500.
        """
        if self.renderer is None:
            msg = "Template rendering requires a renderer. Is template_dir configured?"
            raise ConfigurationError(msg)
        html = await self.renderer.render_async(template, context)
        return Response(body=html, status=status)

    def redirect(self, url: str, status: int = 302) -> Response:
        """Build a redirect response to *url*."""
        return Redirect(url, status).to_response()
