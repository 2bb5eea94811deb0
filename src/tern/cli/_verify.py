"""``tern verify`` — replay match cases against an app's router.

The case file is a JSON list::

    [
        {"name": "User detail", "method": "GET", "path": "/users/123",
         "expected_params": {"id": "123"}, "expect_match": true},
        {"name": "Unknown", "method": "GET", "path": "/nope", "expect_match": false}
    ]

The report is informational: the exit status is 0 regardless of
failures unless ``--strict`` is given.
"""

import argparse
import sys

from tern.cli._resolve import load_or_exit
from tern.errors import ConfigurationError
from tern.verify import format_report, load_cases, run_cases, summarize


def run_verify(args: argparse.Namespace) -> None:
    app = load_or_exit(args.app)
    try:
        cases = load_cases(args.cases)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    results = run_cases(app.router, cases)
    print(format_report(results))

    if args.strict and not summarize(results).ok:
        raise SystemExit(1)
