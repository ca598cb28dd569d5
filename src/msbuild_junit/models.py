"""
Data models for the MSBuild JUnit logger.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List


class Severity(Enum):
    """Classification of a build diagnostic."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


# Ordering of failure details inside a testcase; never used for classification.
SEVERITY_ORDER: Dict[Severity, int] = {
    Severity.INFO: 0,
    Severity.WARNING: 1,
    Severity.ERROR: 2,
}


@dataclass(frozen=True)
class Message:
    """One normalized build event.

    For ``INFO`` records ``file`` holds the raw compiler message (a bare
    source file name) and ``line``/``column`` are left at zero.
    """

    project_file: str
    description: str
    severity: Severity
    file: str
    code: str = ""
    line: int = 0
    column: int = 0


@dataclass
class TestCase:
    """All messages of one project that share a ``file`` value."""

    name: str
    details: List[Message] = field(default_factory=list)


@dataclass
class ProjectSummary:
    """Counts and testcases for one project."""

    name: str
    tests: int
    failures: int
    errors: int
    testcases: List[TestCase] = field(default_factory=list)


@dataclass
class ReportSummary:
    """Root-level counts plus the per-project breakdown."""

    tests: int
    failures: int
    errors: int
    projects: List[ProjectSummary] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """Return True if the build produced no warnings or errors."""
        return self.failures == 0 and self.errors == 0
