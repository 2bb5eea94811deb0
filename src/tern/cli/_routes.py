"""``tern routes`` — list registered routes in dispatch order."""

import argparse

from tern.cli._resolve import load_or_exit


def run_routes(args: argparse.Namespace) -> None:
    """Print METHOD, PATH, HANDLER, and INTERCEPTORS for each route.

    Routes are listed in registration order, which is the order the
    router tries them.
    """
    app = load_or_exit(args.app)
    routes = app.router.routes
    if not routes:
        print("No routes registered.")
        return

    global_names = [i.name for i in app.interceptors]
    rows: list[tuple[str, str, str, str]] = []
    for route in routes:
        handler_name = getattr(route.handler, "__name__", str(route.handler))
        if route.name:
            handler_name = f"{handler_name} ({route.name})"
        if route.redirect_to:
            handler_name = f"{handler_name} -> {route.redirect_to}"
        names = ", ".join([*global_names, *(i.name for i in route.interceptors)]) or "-"
        rows.append((", ".join(sorted(route.methods)), route.path, handler_name, names))

    headers = ("METHOD", "PATH", "HANDLER", "INTERCEPTORS")
    widths = [max(len(headers[i]), *(len(r[i]) for r in rows)) for i in range(3)]
    fmt = f"{{:<{widths[0]}}}  {{:<{widths[1]}}}  {{:<{widths[2]}}}  {{}}"
    print(fmt.format(*headers))
    print("-" * min(sum(widths) + 6 + len(headers[3]), 80))
    for row in rows:
        print(fmt.format(*row))
