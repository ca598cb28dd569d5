"""
Aggregation of build messages into a JUnit-shaped summary.
"""

from collections import OrderedDict
from typing import Dict, List, Sequence, Set, Tuple

from .models import SEVERITY_ORDER, Message, ProjectSummary, ReportSummary, Severity, TestCase


def _count_tests(messages: Sequence[Message]) -> int:
    return sum(1 for m in messages if m.severity == Severity.INFO)


def _count_distinct_files(messages: Sequence[Message], severity: Severity) -> int:
    """Count distinct (project, file) pairs that raised ``severity``."""
    pairs: Set[Tuple[str, str]] = {
        (m.project_file, m.file) for m in messages if m.severity == severity
    }
    return len(pairs)


def _build_testcases(messages: Sequence[Message]) -> List[TestCase]:
    """Group one project's messages by file, sorted by file name."""
    by_file: Dict[str, List[Message]] = {}
    for m in messages:
        by_file.setdefault(m.file, []).append(m)

    testcases = []
    for name in sorted(by_file):
        details = [m for m in by_file[name] if m.severity != Severity.INFO]
        # Stable sort: same-severity details keep arrival order
        details.sort(key=lambda m: SEVERITY_ORDER[m.severity])
        testcases.append(TestCase(name=name, details=details))
    return testcases


def aggregate_messages(messages: Sequence[Message]) -> ReportSummary:
    """
    Aggregate build messages into a report summary.

    ``tests`` counts compiled-unit (INFO) messages. ``failures`` and
    ``errors`` count distinct files raising warnings and errors, so repeated
    diagnostics on one file are counted once.

    Args:
        messages: The complete message collection, in arrival order

    Returns:
        ReportSummary with root counts and projects in first-seen order
    """
    by_project: "OrderedDict[str, List[Message]]" = OrderedDict()
    for m in messages:
        by_project.setdefault(m.project_file, []).append(m)

    projects = [
        ProjectSummary(
            name=name,
            tests=_count_tests(project_messages),
            failures=_count_distinct_files(project_messages, Severity.WARNING),
            errors=_count_distinct_files(project_messages, Severity.ERROR),
            testcases=_build_testcases(project_messages),
        )
        for name, project_messages in by_project.items()
    ]

    return ReportSummary(
        tests=_count_tests(messages),
        failures=_count_distinct_files(messages, Severity.WARNING),
        errors=_count_distinct_files(messages, Severity.ERROR),
        projects=projects,
    )
