"""Call sync or async callables uniformly.

Handlers, interceptor actions, and error handlers may each be ``def``
or ``async def``. Everything that calls user code goes through
``invoke()`` so the awaitable check lives in one place::

    outcome = await invoke(interceptor.action, ctx)
"""

import inspect
from typing import Any


async def invoke(func: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *func* and await the result when it is awaitable."""
    result = func(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
