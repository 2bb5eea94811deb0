"""Tern CLI — route listing, match verification, and a dev server.

Entry point registered as ``tern`` in ``pyproject.toml``::

    [project.scripts]
    tern = "tern.cli:main"
"""

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``tern`` command."""
    parser = argparse.ArgumentParser(
        prog="tern",
        description="Tern — ordered ASGI routing with interceptor chains.",
    )
    parser.add_argument(
        "--log-level",
        default="warning",
        choices=["debug", "info", "warning", "error"],
        help="Logging level for tern's own loggers",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- tern routes ------------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered routes")
    routes_parser.add_argument("app", help="Import string (e.g. myapp:app)")

    # -- tern verify ------------------------------------------------------
    verify_parser = subparsers.add_parser("verify", help="Check route matching against a case file")
    verify_parser.add_argument("app", help="Import string (e.g. myapp:app)")
    verify_parser.add_argument("cases", help="JSON file with a list of match cases")
    verify_parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 if any case fails",
    )

    # -- tern run ---------------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Serve the app with uvicorn")
    run_parser.add_argument("app", help="Import string (e.g. myapp:app)")
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    run_parser.add_argument("--reload", action="store_true", help="Restart on code changes")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    if args.command == "routes":
        from tern.cli._routes import run_routes

        run_routes(args)
    elif args.command == "verify":
        from tern.cli._verify import run_verify

        run_verify(args)
    elif args.command == "run":
        from tern.cli._run import run_app

        run_app(args)
