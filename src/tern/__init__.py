"""Tern — ordered ASGI routing with interceptor chains.

Maps ``(method, path)`` to the first matching route, captures ``:name``
path parameters, and runs global then route-local interceptors before
the handler.

Basic usage::

    from tern import CONTINUE, App, Halt, Response

    app = App()

    @app.interceptor("auth")
    def require_token(ctx):
        if "authorization" not in ctx.request.headers:
            return Halt(Response("Unauthorized", status=401))
        return CONTINUE

    @app.route("/users/:id")
    def show_user(id: str):
        return f"User {id}"

    app.run()
"""

__version__ = "0.1.0"
__all__ = [
    "CONTINUE",
    "App",
    "Continue",
    "DecodeError",
    "HTTPError",
    "Halt",
    "Interceptor",
    "LiveReload",
    "MatchCase",
    "NotFound",
    "Override",
    "Redirect",
    "RegistrationError",
    "RenderError",
    "Request",
    "RequestContext",
    "Response",
    "RouterConfig",
    "StreamingResponse",
    "TemplateRenderer",
    "TernError",
    "interceptor",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import tern`` fast while providing a clean top-level API.
    """
    if name == "App":
        from tern.app import App

        return App

    if name == "RouterConfig":
        from tern.config import RouterConfig

        return RouterConfig

    if name == "Request":
        from tern.http.request import Request

        return Request

    if name in ("Response", "Redirect", "StreamingResponse"):
        from tern.http import response as _resp

        return getattr(_resp, name)

    if name == "RequestContext":
        from tern.context import RequestContext

        return RequestContext

    if name in ("CONTINUE", "Continue", "Halt", "Interceptor", "Override", "interceptor"):
        from tern.interceptors import outcome as _outcome

        return getattr(_outcome, name)

    if name == "LiveReload":
        from tern.interceptors.live_reload import LiveReload

        return LiveReload

    if name == "TemplateRenderer":
        from tern.templating.renderer import TemplateRenderer

        return TemplateRenderer

    if name == "MatchCase":
        from tern.verify import MatchCase

        return MatchCase

    if name in ("TernError", "DecodeError", "HTTPError", "NotFound", "RegistrationError", "RenderError"):
        from tern import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
