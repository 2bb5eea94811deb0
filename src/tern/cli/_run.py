"""``tern run`` — serve an app with uvicorn."""

import argparse

from tern.cli._resolve import load_or_exit
from tern.server.dev import run_server


def run_app(args: argparse.Namespace) -> None:
    """Resolve ``args.app`` and serve it; CLI flags override app config."""
    app = load_or_exit(args.app)
    run_server(
        app,
        args.host or app.config.host,
        args.port or app.config.port,
        log_level=app.config.log_level,
        reload=args.reload,
        app_path=args.app,
    )
