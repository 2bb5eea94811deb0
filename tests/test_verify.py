"""Tests for tern.verify — declarative route match checks."""

import json
from pathlib import Path

import pytest

from tern.errors import ConfigurationError
from tern.routing.route import RouteMatch
from tern.routing.router import Router
from tern.verify import MatchCase, format_report, load_cases, run_cases, summarize


def _home() -> str:
    return "home"


def _user(id: str) -> str:
    return id


@pytest.fixture
def router() -> Router:
    router = Router()
    router.register("GET", "/", _home)
    router.register("GET", "/users/:id", _user)
    router.compile()
    return router


class TestRunCases:
    def test_root_matches(self, router: Router) -> None:
        (result,) = run_cases(router, [MatchCase("root", "GET", "/", expect_match=True)])
        assert result.passed

    def test_method_without_route_expected_no_match(self, router: Router) -> None:
        (result,) = run_cases(router, [MatchCase("post root", "POST", "/", expect_match=False)])
        assert result.passed

    def test_expected_params(self, router: Router) -> None:
        case = MatchCase("user", "GET", "/users/1", expected_params={"id": "1"}, expect_match=True)
        (result,) = run_cases(router, [case])
        assert result.passed
        assert result.message is None

    def test_missing_expected_no_match(self, router: Router) -> None:
        (result,) = run_cases(router, [MatchCase("missing", "GET", "/missing", expect_match=False)])
        assert result.passed

    def test_unexpected_miss_fails(self, router: Router) -> None:
        (result,) = run_cases(router, [MatchCase("missing", "GET", "/missing")])
        assert not result.passed
        assert result.message is not None
        assert result.message.startswith("Route match failed for /missing")

    def test_unexpected_match_fails(self, router: Router) -> None:
        (result,) = run_cases(router, [MatchCase("root", "GET", "/", expect_match=False)])
        assert not result.passed

    def test_param_mismatch(self, router: Router) -> None:
        case = MatchCase("user", "GET", "/users/2", expected_params={"id": "1"})
        (result,) = run_cases(router, [case])
        assert not result.passed
        assert result.message == 'Parameter mismatch. Expected: {"id": "1"}, Got: {"id": "2"}'

    def test_extra_produced_params_ignored(self) -> None:
        router = Router()
        router.register("GET", "/users/:user_id/posts/:post_id", _home)
        case = MatchCase("post", "GET", "/users/1/posts/2", expected_params={"post_id": "2"})
        (result,) = run_cases(router, [case])
        assert result.passed

    def test_matcher_exception_becomes_failure(self) -> None:
        class ExplodingRouter(Router):
            def match(self, method: str, path: str) -> RouteMatch | None:
                raise RuntimeError("kaboom")

        (result,) = run_cases(ExplodingRouter(), [MatchCase("boom", "GET", "/")])
        assert not result.passed
        assert result.message == "Test error: kaboom"

    def test_idempotent(self, router: Router) -> None:
        cases = [
            MatchCase("root", "GET", "/"),
            MatchCase("user", "GET", "/users/9", expected_params={"id": "9"}),
            MatchCase("bad", "GET", "/nope"),
        ]
        assert format_report(run_cases(router, cases)) == format_report(run_cases(router, cases))


class TestSummary:
    def test_counts(self, router: Router) -> None:
        results = run_cases(
            router,
            [MatchCase("root", "GET", "/"), MatchCase("bad", "GET", "/nope")],
        )
        summary = summarize(results)
        assert (summary.total, summary.passed, summary.failed) == (2, 1, 1)
        assert not summary.ok

    def test_empty_is_ok(self) -> None:
        summary = summarize([])
        assert summary.total == 0
        assert summary.ok

    def test_report_lines(self, router: Router) -> None:
        report = format_report(
            run_cases(router, [MatchCase("root", "GET", "/"), MatchCase("bad", "GET", "/nope")])
        )
        assert "PASS  root" in report
        assert "FAIL  bad" in report
        assert report.endswith("Summary:\nTotal: 2\nPassed: 1\nFailed: 1")


class TestMatchCaseFromDict:
    def test_camel_case_keys(self) -> None:
        case = MatchCase.from_dict(
            {
                "name": "user",
                "method": "GET",
                "path": "/users/1",
                "expectedParams": {"id": "1"},
                "expectedMatch": True,
            }
        )
        assert case.expected_params == {"id": "1"}
        assert case.expect_match is True

    def test_snake_case_keys(self) -> None:
        case = MatchCase.from_dict({"name": "x", "method": "GET", "path": "/x", "expect_match": False})
        assert case.expect_match is False
        assert case.expected_params is None

    def test_missing_key(self) -> None:
        with pytest.raises(ConfigurationError, match="'path'"):
            MatchCase.from_dict({"name": "x", "method": "GET"})

    @pytest.mark.parametrize("value", ["false", 0, None])
    def test_non_bool_expectation_rejected(self, value) -> None:
        with pytest.raises(ConfigurationError, match="expect_match must be true or false"):
            MatchCase.from_dict({"name": "x", "method": "GET", "path": "/x", "expectedMatch": value})


class TestLoadCases:
    def test_loads_list(self, tmp_path: Path) -> None:
        path = tmp_path / "cases.json"
        path.write_text(json.dumps([{"name": "root", "method": "GET", "path": "/"}]))
        assert load_cases(path) == [MatchCase("root", "GET", "/")]

    def test_rejects_non_list(self, tmp_path: Path) -> None:
        path = tmp_path / "cases.json"
        path.write_text("{}")
        with pytest.raises(ConfigurationError):
            load_cases(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError):
            load_cases(tmp_path / "nope.json")
