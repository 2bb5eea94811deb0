"""Tests for tern.interceptors — outcomes and sequential chain execution."""

from typing import Any

import pytest

from tern.context import RequestContext
from tern.errors import InterceptorError
from tern.http.request import Request
from tern.http.response import Response
from tern.interceptors import (
    CONTINUE,
    Continue,
    Halt,
    Interceptor,
    Override,
    as_interceptor,
    interceptor,
    run_chain,
)
from tern.routing.router import Router


async def _receive() -> dict[str, Any]:
    return {"type": "http.request", "body": b"", "more_body": False}


def _handler() -> str:
    return "route"


def _replacement() -> str:
    return "replacement"


def _ctx(path: str = "/") -> RequestContext:
    scope = {"type": "http", "method": "GET", "path": path, "headers": [], "query_string": b""}
    route = Router().register("GET", path, _handler)
    return RequestContext(request=Request.from_asgi(scope, _receive), route=route, params={})


def _recording(name: str, log: list[str], outcome: Any = CONTINUE) -> Interceptor:
    def action(ctx: RequestContext) -> Any:
        log.append(name)
        return outcome

    return Interceptor(name, action)


class TestOutcomes:
    def test_continue_singleton_is_continue(self) -> None:
        assert isinstance(CONTINUE, Continue)
        assert CONTINUE == Continue()

    def test_outcomes_are_immutable(self) -> None:
        halt = Halt(Response("x"))
        with pytest.raises(AttributeError):
            halt.response = Response("y")  # type: ignore[misc]


class TestAsInterceptor:
    def test_wraps_function_with_its_name(self) -> None:
        def auth(ctx):
            return CONTINUE

        wrapped = as_interceptor(auth)
        assert wrapped.name == "auth"
        assert wrapped.action is auth

    def test_passes_interceptor_through(self) -> None:
        existing = Interceptor("x", lambda ctx: CONTINUE)
        assert as_interceptor(existing) is existing

    def test_rejects_non_callable(self) -> None:
        with pytest.raises(TypeError, match="callable"):
            as_interceptor("auth")  # type: ignore[arg-type]

    def test_decorator_names(self) -> None:
        @interceptor("auth")
        def check(ctx):
            return CONTINUE

        assert isinstance(check, Interceptor)
        assert check.name == "auth"

    def test_decorator_defaults_to_function_name(self) -> None:
        @interceptor()
        def logging_step(ctx):
            return CONTINUE

        assert logging_step.name == "logging_step"


class TestRunChain:
    async def test_empty_chain_keeps_handler(self) -> None:
        result = await run_chain([], _ctx(), _handler)
        assert result.handler is _handler
        assert not result.halted
        assert result.response is None

    async def test_runs_in_order(self) -> None:
        log: list[str] = []
        chain = [_recording("a", log), _recording("b", log), _recording("c", log)]
        result = await run_chain(chain, _ctx(), _handler)
        assert log == ["a", "b", "c"]
        assert result.handler is _handler

    async def test_halt_stops_chain(self) -> None:
        log: list[str] = []
        halt = Halt(Response("stop", status=403))
        chain = [_recording("a", log), _recording("b", log, halt), _recording("c", log)]
        result = await run_chain(chain, _ctx(), _handler)
        assert log == ["a", "b"]
        assert result.halted
        assert result.halted_by == "b"
        assert result.response is halt.response

    async def test_override_replaces_handler_and_chain_continues(self) -> None:
        log: list[str] = []
        chain = [_recording("a", log, Override(_replacement)), _recording("b", log)]
        result = await run_chain(chain, _ctx(), _handler)
        assert log == ["a", "b"]
        assert result.handler is _replacement
        assert not result.halted

    async def test_last_override_wins(self) -> None:
        def third() -> str:
            return "third"

        log: list[str] = []
        chain = [
            _recording("a", log, Override(_replacement)),
            _recording("b", log, Override(third)),
        ]
        result = await run_chain(chain, _ctx(), _handler)
        assert result.handler is third

    async def test_halt_after_override_wins(self) -> None:
        log: list[str] = []
        response = Response("no")
        chain = [_recording("a", log, Override(_replacement)), _recording("b", log, Halt(response))]
        result = await run_chain(chain, _ctx(), _handler)
        assert result.halted
        assert result.response is response

    async def test_async_interceptor(self) -> None:
        async def check(ctx: RequestContext):
            return Halt(Response("async"))

        result = await run_chain([as_interceptor(check)], _ctx(), _handler)
        assert result.halted
        assert result.response == Response("async")

    async def test_interceptor_sees_context(self) -> None:
        seen: list[str] = []

        def check(ctx: RequestContext):
            seen.append(ctx.path)
            return CONTINUE

        await run_chain([as_interceptor(check)], _ctx("/users"), _handler)
        assert seen == ["/users"]

    async def test_non_outcome_raises(self) -> None:
        chain = [Interceptor("bad", lambda ctx: None)]
        with pytest.raises(InterceptorError, match="'bad'"):
            await run_chain(chain, _ctx(), _handler)

    async def test_halt_without_response_raises(self) -> None:
        chain = [Interceptor("empty", lambda ctx: Halt(None))]  # type: ignore[arg-type]
        with pytest.raises(InterceptorError):
            await run_chain(chain, _ctx(), _handler)

    async def test_interceptor_exception_propagates(self) -> None:
        def boom(ctx):
            raise ValueError("boom")

        with pytest.raises(ValueError, match="boom"):
            await run_chain([as_interceptor(boom)], _ctx(), _handler)
