#!/usr/bin/env python3

"""
Test framework used by every Sentinel test module.

Each module builds a ``TestSuite``, runs its test functions through
``run_test`` (which prints what is tested, how, and what is expected) and
reports a summary with ``finish_suite``. The same test functions are plain
``test_*`` functions, so pytest collects them too.
"""

# === CORE INFRASTRUCTURE ===
import logging

logger = logging.getLogger(__name__)

# === STANDARD LIBRARY IMPORTS ===
import re
import time
import traceback
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any, Optional

__all__ = [
    "Colors",
    "Icons",
    "MockLogger",
    "TestSuite",
    "assert_raises",
    "has_ansi_codes",
    "strip_ansi_codes",
    "suppress_logging",
]


class Colors:
    """ANSI color codes for terminal output."""

    RED = '\033[91m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    BLUE = '\033[94m'
    CYAN = '\033[96m'
    GRAY = '\033[90m'
    BOLD = '\033[1m'
    END = '\033[0m'
    RESET = END

    @staticmethod
    def colorize(text: str, color_code: str) -> str:
        return f"{color_code}{text}{Colors.END}"

    @staticmethod
    def red(text: str) -> str:
        return Colors.colorize(text, Colors.RED)

    @staticmethod
    def yellow(text: str) -> str:
        return Colors.colorize(text, Colors.YELLOW)


_ANSI_ESCAPE = re.compile(r'\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])')


def has_ansi_codes(text: Any) -> bool:
    return '\033[' in str(text)


def strip_ansi_codes(text: str) -> str:
    return _ANSI_ESCAPE.sub('', text)


class Icons:
    PASS = "✅"
    FAIL = "❌"
    WARNING = "⚠️"
    INFO = "i"
    GEAR = "⚙️"
    ROCKET = "🚀"
    CLOCK = "⏰"
    MAGNIFY = "🔍"


class TestSuite:
    """Standardized test suite with consistent formatting and reporting."""

    __test__ = False  # not a pytest test class

    def __init__(self, suite_name: str, module_name: str) -> None:
        self.suite_name = suite_name
        self.module_name = module_name
        self.start_time: Optional[float] = None
        self.tests_run = 0
        self.tests_passed = 0
        self.tests_failed = 0
        self.test_results: list[dict[str, Any]] = []

    def start_suite(self) -> None:
        self.start_time = time.time()
        print(f"\n{Colors.BOLD}{Colors.CYAN}{'=' * 60}{Colors.RESET}")
        print(f"{Colors.BOLD}{Colors.CYAN}{Icons.ROCKET} Testing: {self.suite_name}{Colors.RESET}")
        print(f"{Colors.GRAY}Module: {self.module_name}{Colors.RESET}")
        print(f"{Colors.CYAN}{'=' * 60}{Colors.RESET}\n")

    def run_test(
        self,
        test_name: str,
        test_func: Callable[[], Any],
        test_summary: str = "",
        functions_tested: str = "",
        method_description: str = "",
        expected_outcome: str = "",
    ) -> bool:
        """
        Run a single test with standardized output and error handling.

        Args:
            test_name: Name/title of the test
            test_func: Test function to execute
            test_summary: Summary of what is being tested
            functions_tested: Names of the functions being tested
            method_description: How the functions are being tested
            expected_outcome: Expected outcome if functions work correctly

        Returns:
            True if test passed, False if failed
        """
        self.tests_run += 1
        test_start = time.time()

        print(f"{Colors.BLUE}{Icons.GEAR} Test {self.tests_run}: {test_name}{Colors.RESET}")
        for label, value in (
            ("Test", test_summary),
            ("Functions tested", functions_tested),
            ("Method", method_description),
            ("Expected outcome", expected_outcome),
        ):
            if value:
                print(f"{label}: {value}")

        try:
            test_func()
        except AssertionError as e:
            traceback.print_exc()
            return self._record(test_name, "FAILED", test_start, expected_outcome, f"Assertion failed: {e!s}", str(e))
        except Exception as e:
            error = f"{type(e).__name__}: {e!s}"
            return self._record(test_name, "ERROR", test_start, expected_outcome, f"Exception occurred: {error}", error)
        return self._record(
            test_name, "PASSED", test_start, expected_outcome, "Test executed successfully with all assertions passing"
        )

    def _record(
        self,
        test_name: str,
        status: str,
        test_start: float,
        expected_outcome: str,
        actual_outcome: str,
        error: Optional[str] = None,
    ) -> bool:
        duration = time.time() - test_start
        passed = status == "PASSED"
        print(f"Actual outcome: {actual_outcome}")
        print(f"Duration: {duration:.3f}s")
        if passed:
            print(f"Conclusion: {Colors.GREEN}{Icons.PASS} PASSED{Colors.RESET}\n")
            self.tests_passed += 1
        else:
            print(f"Conclusion: {Colors.RED}{Icons.FAIL} FAILED{Colors.RESET}\n")
            self.tests_failed += 1

        result: dict[str, Any] = {
            "name": test_name,
            "status": status,
            "duration": duration,
            "expected": expected_outcome,
            "outcome": actual_outcome,
        }
        if error is not None:
            result["error"] = error
        self.test_results.append(result)
        return passed

    def finish_suite(self) -> bool:
        """Print the summary; True when every test passed."""
        total_duration = time.time() - self.start_time if self.start_time else 0

        print(f"\n{Colors.CYAN}{'=' * 60}{Colors.RESET}")
        print(f"{Colors.BOLD}{Colors.CYAN}{Icons.MAGNIFY} Test Summary: {self.suite_name}{Colors.RESET}")
        print(f"{Colors.CYAN}{'=' * 60}{Colors.RESET}")

        if self.tests_failed == 0:
            status_color, status_icon, status_text = Colors.GREEN, Icons.PASS, "ALL TESTS PASSED"
        else:
            status_color, status_icon, status_text = Colors.RED, Icons.FAIL, "SOME TESTS FAILED"

        print(f"{status_color}{Icons.CLOCK} Duration: {total_duration:.3f}s{Colors.RESET}")
        print(f"{status_color}{status_icon} Status: {status_text}{Colors.RESET}")
        print(f"{Colors.GREEN}{Icons.PASS} Passed: {self.tests_passed}{Colors.RESET}")
        print(f"{Colors.RED}{Icons.FAIL} Failed: {self.tests_failed}{Colors.RESET}")

        failed_tests = [r for r in self.test_results if r["status"] in {"FAILED", "ERROR"}]
        if failed_tests:
            print(f"\n{Colors.YELLOW}{Icons.INFO} Failed Test Details:{Colors.RESET}")
            for test in failed_tests:
                print(f"  {Colors.RED}• {test['name']}{Colors.RESET}")
                if "error" in test:
                    print(f"    {Colors.GRAY}{test['error']}{Colors.RESET}")
                if test.get("expected"):
                    print(f"    {Colors.GRAY}Expected: {test['expected']}{Colors.RESET}")

        print(f"{Colors.CYAN}{'=' * 60}{Colors.RESET}\n")
        return self.tests_failed == 0


@contextmanager
def suppress_logging() -> Iterator[None]:
    """Context manager to suppress logging during tests."""
    logging.disable(logging.CRITICAL)
    try:
        yield
    finally:
        logging.disable(logging.NOTSET)


def assert_raises(exc_type: type[BaseException], func: Callable[..., Any], *args: Any, **kwargs: Any) -> BaseException:
    """Call ``func`` and return the ``exc_type`` it raised; fail if it raised nothing."""
    try:
        func(*args, **kwargs)
    except exc_type as e:
        return e
    raise AssertionError(f"{getattr(func, '__name__', func)} did not raise {exc_type.__name__}")


class MockLogger:
    """Stand-in logger that records messages per level."""

    def __init__(self) -> None:
        self.lines: list[str] = []
        self.messages: dict[str, list[str]] = {level: [] for level in ("debug", "info", "warning", "error", "critical")}

    def _log(self, level: str, msg: str) -> None:
        self.lines.append(msg)
        self.messages[level].append(msg)

    def debug(self, msg: str, *_args: Any, **_kwargs: Any) -> None:
        self._log("debug", msg)

    def info(self, msg: str, *_args: Any, **_kwargs: Any) -> None:
        self._log("info", msg)

    def warning(self, msg: str, *_args: Any, **_kwargs: Any) -> None:
        self._log("warning", msg)

    def error(self, msg: str, *_args: Any, **_kwargs: Any) -> None:
        self._log("error", msg)

    def critical(self, msg: str, *_args: Any, **_kwargs: Any) -> None:
        self._log("critical", msg)

    def get_messages(self, level: Optional[str] = None) -> list[str]:
        """Get messages by level, or all messages if level is None"""
        if level:
            return self.messages.get(level, [])
        return self.lines
