"""Interceptor definitions and the outcomes they return.

An interceptor is a named action that inspects a ``RequestContext``
and returns exactly one of::

    Continue()             # go on to the next interceptor / the handler
    Halt(response)         # stop here and send *response*
    Override(handler)      # run *handler* instead of the route's handler

Actions may be ``def`` or ``async def``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeAlias

from tern._internal.invoke import invoke
from tern._internal.types import Handler

if TYPE_CHECKING:
    from tern.context import RequestContext
    from tern.http.response import AnyResponse


@dataclass(frozen=True, slots=True)
class Continue:
    """Proceed to the next interceptor, or to the handler."""


@dataclass(frozen=True, slots=True)
class Halt:
    """Stop the chain. *response* is sent as-is; the handler never runs."""

    response: AnyResponse


@dataclass(frozen=True, slots=True)
class Override:
    """Replace the terminal handler for this request only.

    Interceptors after this one still run before *handler* does.
    """

    handler: Handler


Outcome: TypeAlias = Continue | Halt | Override

CONTINUE = Continue()

Action: TypeAlias = Callable[["RequestContext"], Any]


@dataclass(frozen=True, slots=True)
class Interceptor:
    """A named unit of pre-handler logic.

    ``name`` identifies the interceptor in logs and in ``tern routes``.
    """

    name: str
    action: Action

    async def __call__(self, ctx: RequestContext) -> Outcome:
        return await invoke(self.action, ctx)


def as_interceptor(value: Interceptor | Callable[..., Any]) -> Interceptor:
    """Wrap a bare callable, naming it after the function."""
    if isinstance(value, Interceptor):
        return value
    if not callable(value):
        msg = f"Interceptor must be callable, got {type(value).__name__}"
        raise TypeError(msg)
    name = getattr(value, "name", None) or getattr(value, "__name__", type(value).__name__)
    return Interceptor(name=name, action=value)


def interceptor(name: str | None = None) -> Callable[[Action], Interceptor]:
    """Decorator form::

        @interceptor("auth")
        def require_token(ctx):
            if "authorization" not in ctx.request.headers:
                return Halt(Response("Unauthorized", status=401))
            return CONTINUE
    """

    def decorator(func: Action) -> Interceptor:
        return Interceptor(name=name or func.__name__, action=func)

    return decorator
