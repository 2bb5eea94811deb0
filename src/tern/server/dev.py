"""Serve an App with uvicorn.

uvicorn accepts the live ASGI callable directly. Reload needs an
import string instead, so it is only enabled when *app_path* is given.
"""

from typing import Any


def run_server(
    app: Any,
    host: str,
    port: int,
    *,
    log_level: str = "info",
    reload: bool = False,
    app_path: str | None = None,
) -> None:
    """Start uvicorn with *app* and block until it exits.

    Args:
        app: ASGI callable (tern App instance).
        host: Bind host address.
        port: Bind port number.
        log_level: uvicorn log level (``"debug"``, ``"info"``, ...).
        reload: Restart on source changes. Requires *app_path*.
        app_path: ``"module:attribute"`` import string for the app.
    """
    import uvicorn

    target: Any = app_path if (reload and app_path) else app
    uvicorn.run(
        target,
        host=host,
        port=port,
        log_level=log_level,
        reload=bool(reload and app_path),
    )
