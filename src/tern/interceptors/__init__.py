"""Interceptors — named pre-handler plugins with explicit outcomes.

An interceptor action takes a ``RequestContext`` and returns one of
``Continue()``, ``Halt(response)``, or ``Override(handler)``.

Built-in interceptors:
    LiveReload -- stream a template over SSE, resending it on file change
"""

from tern.interceptors.chain import ChainResult, run_chain
from tern.interceptors.live_reload import LiveReload
from tern.interceptors.outcome import (
    CONTINUE,
    Continue,
    Halt,
    Interceptor,
    Outcome,
    Override,
    as_interceptor,
    interceptor,
)

__all__ = [
    "CONTINUE",
    "ChainResult",
    "Continue",
    "Halt",
    "Interceptor",
    "LiveReload",
    "Outcome",
    "Override",
    "as_interceptor",
    "interceptor",
    "run_chain",
]
