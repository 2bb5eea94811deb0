"""Tern application class.

Mutable during setup (route registration, interceptors, error handlers).
Frozen at runtime when app.run() or __call__() is first invoked.
"""

import logging
import threading
from collections.abc import Callable, Iterable, Sequence
from typing import Any, TypeAlias

from tern._internal.asgi import Receive, Scope, Send
from tern._internal.types import ErrorHandler, Handler
from tern.config import RouterConfig
from tern.interceptors.outcome import Interceptor, as_interceptor
from tern.routing.route import Route
from tern.routing.router import Router
from tern.server.handler import handle_request
from tern.templating.renderer import TemplateRenderer
from tern.verify import MatchCase, format_report, run_cases, summarize

logger = logging.getLogger("tern.app")

InterceptorLike: TypeAlias = Interceptor | Callable[..., Any]


class App:
    """The tern application.

    Each App owns its route table, global interceptors, error handlers,
    and template renderer; nothing is shared between instances.

    Usage::

        app = App()

        @app.route("/users/:id")
        async def show_user(id: str):
            return f"user {id}"

        app.register("POST", "/users", create_user, redirect_to="/users")

    Thread safety:
        Setup is single-threaded. The freeze transition uses a Lock +
        double-check so exactly one thread compiles the app even if
        several server workers call ``__call__()`` on first request.
    """

    __slots__ = (
        "_error_handlers",
        "_freeze_lock",
        "_frozen",
        "_interceptor_list",
        "_interceptors",
        "_renderer",
        "_router",
        "_self_test",
        "config",
    )

    def __init__(
        self,
        config: RouterConfig | None = None,
        *,
        renderer: TemplateRenderer | None = None,
        self_test: Sequence[MatchCase] = (),
    ) -> None:
        self.config: RouterConfig = config or RouterConfig()
        self._router = Router()
        self._interceptor_list: list[Interceptor] = []
        self._error_handlers: dict[int | type, ErrorHandler] = {}
        self._renderer: TemplateRenderer = renderer or TemplateRenderer.from_config(self.config)
        self._self_test: tuple[MatchCase, ...] = tuple(self_test)
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

        # Set by _freeze()
        self._interceptors: tuple[Interceptor, ...] = ()

    # -- Route registration --

    def register(
        self,
        methods: str | Iterable[str],
        path: str,
        handler: Handler,
        interceptors: Sequence[InterceptorLike] = (),
        redirect_to: str | None = None,
        *,
        name: str | None = None,
    ) -> Route:
        """Register *handler* for *methods* on *path*.

        Args:
            methods: One HTTP method or several, e.g. ``"GET"`` or
                ``["GET", "HEAD"]``.
            path: Path template; ``:name`` segments capture parameters.
            handler: Sync or async callable; arguments are injected by name.
            interceptors: Route-local interceptors, run after the global ones.
            redirect_to: URL to redirect to when the handler returns ``None``.
            name: Optional route name, shown by ``tern routes``.

        Raises:
            RegistrationError: If *path* is not a valid template.
        """
        self._check_not_frozen()
        return self._router.register(
            methods,
            path,
            handler,
            [as_interceptor(i) for i in interceptors],
            redirect_to,
            name=name,
        )

    def route(
        self,
        path: str,
        *,
        methods: str | Iterable[str] = "GET",
        interceptors: Sequence[InterceptorLike] = (),
        redirect_to: str | None = None,
        name: str | None = None,
    ) -> Callable[[Handler], Handler]:
        """Register a route handler via decorator. Defaults to ``GET``."""

        def decorator(func: Handler) -> Handler:
            self.register(methods, path, func, interceptors, redirect_to, name=name)
            return func

        return decorator

    # -- Interceptors and error handlers --

    def add_interceptor(self, interceptor: InterceptorLike) -> Interceptor:
        """Add a global interceptor. Runs before every route's own."""
        self._check_not_frozen()
        wrapped = as_interceptor(interceptor)
        self._interceptor_list.append(wrapped)
        return wrapped

    def interceptor(self, name: str | None = None) -> Callable[[Callable[..., Any]], Interceptor]:
        """Register a global interceptor via decorator."""

        def decorator(func: Callable[..., Any]) -> Interceptor:
            return self.add_interceptor(Interceptor(name=name or func.__name__, action=func))

        return decorator

    def error(self, code_or_exception: int | type) -> Callable[[ErrorHandler], ErrorHandler]:
        """Register an error handler for a status code or exception type."""

        def decorator(func: ErrorHandler) -> ErrorHandler:
            self._check_not_frozen()
            self._error_handlers[code_or_exception] = func
            return func

        return decorator

    # -- Introspection --

    @property
    def router(self) -> Router:
        return self._router

    @property
    def renderer(self) -> TemplateRenderer:
        return self._renderer

    @property
    def interceptors(self) -> tuple[Interceptor, ...]:
        """Global interceptors, in registration order."""
        return tuple(self._interceptor_list)

    # -- Server --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Start a uvicorn server for this app."""
        from tern.server.dev import run_server

        self._ensure_frozen()
        run_server(
            self,
            host or self.config.host,
            port or self.config.port,
            log_level=self.config.log_level,
        )

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        self._ensure_frozen()
        await handle_request(
            scope,
            receive,
            send,
            router=self._router,
            interceptors=self._interceptors,
            error_handlers=self._error_handlers,
            renderer=self._renderer,
            config=self.config,
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Freeze at startup so registration errors stop the server early."""
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                try:
                    self._ensure_frozen()
                except Exception as exc:
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile the app into its frozen runtime state.

        MUST only be called while holding _freeze_lock.
        """
        self._router.compile()
        self._interceptors = tuple(self._interceptor_list)
        self._frozen = True
        logger.debug(
            "frozen with %d routes and %d global interceptors",
            len(self._router),
            len(self._interceptors),
        )

        if self._self_test:
            results = run_cases(self._router, self._self_test)
            summary = summarize(results)
            level = logging.INFO if summary.ok else logging.WARNING
            logger.log(level, "route self-test\n%s", format_report(results))

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register routes, interceptors, and error handlers before calling app.run()."
            )
            raise RuntimeError(msg)
