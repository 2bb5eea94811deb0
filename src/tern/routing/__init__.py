"""Routing — path template compilation and an ordered route table.

Routes are registered during setup and scanned in registration order;
the first route accepting both method and path wins.
"""

from tern.routing.pattern import CompiledPattern, compile_pattern
from tern.routing.route import Route, RouteMatch
from tern.routing.router import Router

__all__ = [
    "CompiledPattern",
    "Route",
    "RouteMatch",
    "Router",
    "compile_pattern",
]
