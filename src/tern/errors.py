"""Tern exception hierarchy.

Shared across Router, App, pipeline, and interceptors so every module
raises and catches the same types.
"""

from dataclasses import dataclass


class TernError(Exception):
    """Base for all tern-specific errors."""


class ConfigurationError(TernError):
    """Raised when app configuration is invalid.

    Typically surfaces during setup, before the app serves requests.
    """


class RegistrationError(ConfigurationError):
    """Raised when a route cannot be registered (bad path template).

    Always raised from ``register()``, never while serving a request.
    """


class DecodeError(TernError):
    """Raised when a request body or query string cannot be decoded."""


class RenderError(TernError):
    """Raised when a template cannot be read or rendered."""

    def __init__(self, template: str, detail: str = "") -> None:
        self.template = template
        self.detail = detail
        msg = f"Failed to render template: {template}"
        if detail:
            msg = f"{msg} ({detail})"
        super().__init__(msg)


class InterceptorError(TernError):
    """Raised when an interceptor returns something other than an Outcome."""


@dataclass(frozen=True, slots=True)
class HTTPError(TernError):
    """An error that maps directly to an HTTP status code.

    Raised by the app or by handlers. The pipeline catches these and
    dispatches to the matching ``@app.error()`` handler.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """404 — no route matched the request method and path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)
