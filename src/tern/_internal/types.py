"""Shared type aliases used across tern modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Route handler: any callable, arguments injected by name
Handler: TypeAlias = Callable[..., Any]

# Error handler: takes (), (request) or (request, exc)
ErrorHandler: TypeAlias = Callable[..., Any]

# Decoded query string: repeated names collapse to a list
QueryDict: TypeAlias = dict[str, str | list[str]]
