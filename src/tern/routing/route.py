"""Route and RouteMatch frozen dataclasses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from tern._internal.types import Handler
from tern.routing.pattern import CompiledPattern

if TYPE_CHECKING:
    from tern.interceptors.outcome import Interceptor


@dataclass(frozen=True, slots=True)
class Route:
    """A compiled route.

    Created once at registration and never mutated. ``interceptors``
    run after the app's global interceptors, in the order given.
    """

    methods: frozenset[str]
    pattern: CompiledPattern
    handler: Handler
    interceptors: tuple[Interceptor, ...] = ()
    redirect_to: str | None = None
    name: str | None = None

    @property
    def path(self) -> str:
        """The path template this route was registered with."""
        return self.pattern.template

    @property
    def param_names(self) -> tuple[str, ...]:
        return self.pattern.param_names


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful dispatch."""

    route: Route
    params: dict[str, str]
