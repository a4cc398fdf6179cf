"""Data models for CLI operations.

All models use dataclasses, following the patterns established in
src/document_store/models.py.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import List

from src.models.roundtrip_result import RoundtripResult


class ExitCode(IntEnum):
    """Exit codes for CLI operations.

    - SUCCESS (0): Operation completed successfully
    - GENERAL_ERROR (1): General error (config issues, unreadable project file)
    - ROUNDTRIP_FAILURES (2): At least one page failed the round-trip check

    Example:
        >>> exit_code = ExitCode.SUCCESS
        >>> sys.exit(exit_code)
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    ROUNDTRIP_FAILURES = 2


@dataclass
class PageCheck:
    """Round-trip outcome for one page of a project.

    Attributes:
        page_id: Page id
        label: Page label, for display
        result: RoundtripResult of the page's content tree
    """
    page_id: str
    label: str
    result: RoundtripResult

    @property
    def passed(self) -> bool:
        return self.result.passed


@dataclass
class CheckSummary:
    """Aggregate outcome of the ``check`` command.

    Attributes:
        checks: One PageCheck per page, in project order

    Example:
        >>> summary = CheckSummary(checks=[...])
        >>> summary.exit_code
        <ExitCode.SUCCESS: 0>
    """
    checks: List[PageCheck] = field(default_factory=list)

    @property
    def passed_count(self) -> int:
        return sum(1 for check in self.checks if check.passed)

    @property
    def failed(self) -> List[PageCheck]:
        return [check for check in self.checks if not check.passed]

    @property
    def exit_code(self) -> ExitCode:
        return ExitCode.ROUNDTRIP_FAILURES if self.failed else ExitCode.SUCCESS
