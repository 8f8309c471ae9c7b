"""Compare the output of two builds of the tool over a list of test cases."""

from __future__ import annotations

import argparse
import os
import subprocess
import sys

from probekit.testutils import run_httpx_binary_and_get_results

SUCCESS = "\x1b[32m[\u2713]\x1b[0m"
FAILED = "\x1b[31m[\u2718]\x1b[0m"


class FunctionalTestError(Exception):
    """A test case could not be run or its outputs differ."""


def _format_lines(lines: list[str]) -> str:
    return "[" + " ".join(lines) + "]"


def _run(target: str, binary: str, debug: bool, args: list[str], label: str) -> list[str]:
    try:
        return run_httpx_binary_and_get_results(target, binary, debug, args)
    except (OSError, subprocess.CalledProcessError) as exc:
        raise FunctionalTestError(f"could not run {label} test: {exc}") from exc


def run_individual_test_case(testcase: str, main_binary: str, dev_binary: str, debug: bool) -> None:
    """Run one ``target <sep> args...`` case against both binaries.

    Raises ``FunctionalTestError`` when a run fails or the line counts differ.
    """
    parts = testcase.split()
    target = ""
    args: list[str] = []
    if len(parts) > 1:
        target = parts[0]
        args = parts[2:]
    main_output = _run(target, main_binary, debug, args, "main")
    dev_output = _run(target, dev_binary, debug, args, "dev")
    if len(main_output) != len(dev_output):
        raise FunctionalTestError(
            f"{_format_lines(main_output)} main is not equal to {_format_lines(dev_output)} dev"
        )


def run_functional_tests(testcases: str, main_binary: str, dev_binary: str, debug: bool) -> bool:
    """Run every non-blank line of ``testcases``; return whether all passed."""
    with open(testcases, encoding="utf-8") as handle:
        cases = [line.strip() for line in handle]
    passed = True
    for text in filter(None, cases):
        try:
            run_individual_test_case(text, main_binary, dev_binary, debug)
        except FunctionalTestError as exc:
            passed = False
            print(f'{FAILED} Test "{text}" failed: {exc}', file=sys.stderr)
        else:
            print(f'{SUCCESS} Test "{text}" passed!')
    return passed


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Compare two builds over functional test cases.")
    parser.add_argument("-main", dest="main_binary", default="", help="main branch binary")
    parser.add_argument("-dev", dest="dev_binary", default="", help="dev branch binary")
    parser.add_argument("-testcases", default="", help="file of test cases")
    options = parser.parse_args(argv)
    debug = os.environ.get("DEBUG") == "true"
    try:
        passed = run_functional_tests(
            options.testcases, options.main_binary, options.dev_binary, debug
        )
    except OSError as exc:
        print(f"Could not run functional tests: could not open test cases: {exc}", file=sys.stderr)
        return 1
    return 0 if passed else 1


if __name__ == "__main__":
    sys.exit(main())