"""Ordered route table with first-match-wins dispatch.

Routes are registered during setup and scanned linearly in
registration order. The first route whose pattern accepts the path and
whose method set contains the method wins, so overlapping patterns
must be registered most-specific first.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

from tern._internal.types import Handler
from tern.errors import RegistrationError
from tern.routing.pattern import compile_pattern
from tern.routing.route import Route, RouteMatch

if TYPE_CHECKING:
    from tern.interceptors.outcome import Interceptor

logger = logging.getLogger("tern.routing")


def normalize_methods(methods: str | Iterable[str]) -> frozenset[str]:
    """Accept one method or several; reject an empty set."""
    if isinstance(methods, str):
        methods = (methods,)
    result = frozenset(methods)
    if not result:
        msg = "A route needs at least one HTTP method."
        raise RegistrationError(msg)
    return result


class Router:
    """Append-only route table.

    Usage::

        router = Router()
        router.register("GET", "/users/:id", show_user)
        router.compile()
        match = router.match("GET", "/users/42")
        match.params  # {"id": "42"}
    """

    __slots__ = ("_compiled", "_routes")

    def __init__(self) -> None:
        self._routes: list[Route] = []
        self._compiled = False

    def register(
        self,
        methods: str | Iterable[str],
        path: str,
        handler: Handler,
        interceptors: Sequence[Interceptor] = (),
        redirect_to: str | None = None,
        *,
        name: str | None = None,
    ) -> Route:
        """Compile *path* and append a new route.

        Raises ``RegistrationError`` if the template is invalid.
        """
        route = Route(
            methods=normalize_methods(methods),
            pattern=compile_pattern(path),
            handler=handler,
            interceptors=tuple(interceptors),
            redirect_to=redirect_to,
            name=name,
        )
        self.add(route)
        return route

    def add(self, route: Route) -> None:
        """Append a prebuilt route. Must be called before compile()."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)
        self._routes.append(route)
        logger.debug("registered %s %s", ",".join(sorted(route.methods)), route.path)

    @property
    def routes(self) -> tuple[Route, ...]:
        """All registered routes, in registration order."""
        return tuple(self._routes)

    def __len__(self) -> int:
        return len(self._routes)

    def compile(self) -> None:
        """Freeze the table. No more routes can be added."""
        self._compiled = True

    def match(self, method: str, path: str) -> RouteMatch | None:
        """Resolve *method* and *path* to a route and its parameters.

        Returns ``None`` when no route accepts both.
        """
        for route in self._routes:
            if method not in route.methods:
                continue
            params = route.pattern.match(path)
            if params is not None:
                return RouteMatch(route=route, params=params)
        return None
