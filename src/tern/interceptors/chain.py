"""Sequential interceptor execution.

Global interceptors run first, then the route's own, each awaited to
completion before the next starts. A ``Halt`` ends the chain at once;
an ``Override`` swaps the terminal handler but lets the rest of the
chain run.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from tern._internal.types import Handler
from tern.errors import InterceptorError
from tern.interceptors.outcome import Continue, Halt, Interceptor, Override

if TYPE_CHECKING:
    from tern.context import RequestContext
    from tern.http.response import AnyResponse

logger = logging.getLogger("tern.interceptors")


@dataclass(frozen=True, slots=True)
class ChainResult:
    """How the chain ended.

    ``response`` is set when an interceptor halted; otherwise ``handler``
    is the handler to call (the route's own, or the last override).
    """

    handler: Handler
    response: AnyResponse | None = None
    halted_by: str | None = None

    @property
    def halted(self) -> bool:
        return self.halted_by is not None


async def run_chain(
    interceptors: Iterable[Interceptor],
    ctx: RequestContext,
    handler: Handler,
) -> ChainResult:
    """Run *interceptors* in order against *ctx*.

    Raises ``InterceptorError`` if an interceptor returns anything other
    than ``Continue``, ``Halt``, or ``Override``. Exceptions raised by an
    interceptor propagate unchanged.
    """
    for current in interceptors:
        outcome = await current(ctx)
        match outcome:
            case Continue():
                continue
            case Halt(response=response) if response is not None:
                logger.debug("%s halted %s %s", current.name, ctx.method, ctx.path)
                return ChainResult(handler=handler, response=response, halted_by=current.name)
            case Override(handler=replacement):
                logger.debug("%s overrode the handler for %s %s", current.name, ctx.method, ctx.path)
                handler = replacement
            case _:
                msg = (
                    f"Interceptor {current.name!r} returned {outcome!r}; "
                    "expected Continue(), Halt(response) with a response, or Override(handler)."
                )
                raise InterceptorError(msg)
    return ChainResult(handler=handler)
