"""Match verification — declarative dispatch checks.

Replays ``MatchCase`` records against a ``Router`` and reports which
ones resolved as expected. Only the router is exercised: interceptors,
handlers, and the request pipeline never run.

Usage::

    cases = [
        MatchCase("user detail", "GET", "/users/123", expected_params={"id": "123"}),
        MatchCase("unknown path", "GET", "/nonexistent", expect_match=False),
    ]
    results = run_cases(app.router, cases)
    print(format_report(results))
"""

import json as json_module
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from tern.errors import ConfigurationError
from tern.routing.router import Router


@dataclass(frozen=True, slots=True)
class MatchCase:
    """One expectation about how the router resolves a request."""

    name: str
    method: str
    path: str
    expected_params: Mapping[str, str] | None = None
    expect_match: bool = True

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MatchCase":
        """Build a case from a JSON-style mapping.

        Accepts ``expected_params``/``expectedParams`` and
        ``expect_match``/``expectedMatch`` spellings.
        """
        try:
            name = data["name"]
            method = data["method"]
            path = data["path"]
        except KeyError as exc:
            msg = f"Match case is missing required key {exc.args[0]!r}: {dict(data)!r}"
            raise ConfigurationError(msg) from exc
        params = data.get("expected_params", data.get("expectedParams"))
        expect = data.get("expect_match", data.get("expectedMatch", True))
        if not isinstance(expect, bool):
            msg = f"Match case {name!r}: expect_match must be true or false, got {expect!r}"
            raise ConfigurationError(msg)
        return cls(
            name=name,
            method=method,
            path=path,
            expected_params=dict(params) if params is not None else None,
            expect_match=expect,
        )


@dataclass(frozen=True, slots=True)
class CaseResult:
    """Outcome of one ``MatchCase``."""

    name: str
    passed: bool
    message: str | None = None


@dataclass(frozen=True, slots=True)
class VerifySummary:
    total: int
    passed: int
    failed: int
    results: tuple[CaseResult, ...] = field(default=(), repr=False)

    @property
    def ok(self) -> bool:
        return self.failed == 0


def check_case(router: Router, case: MatchCase) -> CaseResult:
    """Run a single case. Never raises; errors become failed results."""
    try:
        match = router.match(case.method, case.path)
    except Exception as exc:
        return CaseResult(case.name, passed=False, message=f"Test error: {exc}")

    if (match is not None) != case.expect_match:
        if case.expect_match:
            detail = f"expected {case.method} {case.path} to match a route, but nothing matched"
        else:
            detail = f"expected no match, but {case.method} {case.path} matched {match.route.path!r}"
        return CaseResult(case.name, passed=False, message=f"Route match failed for {case.path}: {detail}")

    if match is not None and case.expected_params:
        mismatched = {
            key: value
            for key, value in case.expected_params.items()
            if match.params.get(key) != value
        }
        if mismatched:
            expected = json_module.dumps(dict(case.expected_params))
            got = json_module.dumps(match.params)
            return CaseResult(
                case.name,
                passed=False,
                message=f"Parameter mismatch. Expected: {expected}, Got: {got}",
            )

    return CaseResult(case.name, passed=True)


def run_cases(router: Router, cases: Iterable[MatchCase]) -> list[CaseResult]:
    """Run every case in order and collect the results."""
    return [check_case(router, case) for case in cases]


def summarize(results: Sequence[CaseResult]) -> VerifySummary:
    passed = sum(1 for r in results if r.passed)
    return VerifySummary(
        total=len(results),
        passed=passed,
        failed=len(results) - passed,
        results=tuple(results),
    )


def format_report(results: Sequence[CaseResult]) -> str:
    """Human-readable pass/fail report ending with a summary block."""
    lines = ["Router match results:", "-" * 22]
    for result in results:
        if result.passed:
            lines.append(f"PASS  {result.name}")
        else:
            lines.append(f"FAIL  {result.name}")
            lines.append(f"      {result.message or 'Unknown failure'}")

    summary = summarize(results)
    lines.extend(
        [
            "",
            "Summary:",
            f"Total: {summary.total}",
            f"Passed: {summary.passed}",
            f"Failed: {summary.failed}",
        ]
    )
    return "\n".join(lines)


def load_cases(path: str | Path) -> list[MatchCase]:
    """Load cases from a JSON file holding a list of case objects."""
    try:
        data = json_module.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json_module.JSONDecodeError) as exc:
        msg = f"Cannot read match cases from {path}: {exc}"
        raise ConfigurationError(msg) from exc
    if not isinstance(data, list):
        msg = f"{path}: expected a JSON list of match cases"
        raise ConfigurationError(msg)
    return [MatchCase.from_dict(item) for item in data]
