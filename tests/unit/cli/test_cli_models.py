"""Unit tests for cli.models module."""

from src.cli.models import CheckSummary, ExitCode, PageCheck
from src.models.canonical_page import CanonicalNode
from src.models.roundtrip_result import RoundtripResult


def _check(passed: bool) -> PageCheck:
    node = CanonicalNode(id="r", type="stack")
    return PageCheck("p", "P", RoundtripResult(passed=passed, original=node, roundtripped=node))


class TestExitCode:
    """Test cases for ExitCode."""

    def test_values(self):
        """Exit codes are stable integers."""
        assert ExitCode.SUCCESS == 0
        assert ExitCode.GENERAL_ERROR == 1
        assert ExitCode.ROUNDTRIP_FAILURES == 2


class TestCheckSummary:
    """Test cases for CheckSummary."""

    def test_empty_summary_succeeds(self):
        """No pages means nothing failed."""
        assert CheckSummary().exit_code == ExitCode.SUCCESS

    def test_counts_and_exit_code(self):
        """A single failure turns the exit code to ROUNDTRIP_FAILURES."""
        summary = CheckSummary(checks=[_check(True), _check(False), _check(True)])

        assert summary.passed_count == 2
        assert len(summary.failed) == 1
        assert summary.exit_code == ExitCode.ROUNDTRIP_FAILURES
