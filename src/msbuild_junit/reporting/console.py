"""
Console reporter for build results.
"""

import os
import sys

from ..models import ReportSummary, Severity
from .base import ReportGenerator


def _supports_color() -> bool:
    """Return True if the output stream likely supports ANSI colours."""
    # Explicit opt-in / opt-out via environment variable
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("FORCE_COLOR"):
        return True
    # Non-TTY output (e.g. piped to a file) should not use colour
    if not hasattr(sys.stdout, "isatty") or not sys.stdout.isatty():
        return False
    return True


class ConsoleReporter(ReportGenerator):
    """Generate a colored per-project summary of a build."""

    def __init__(self) -> None:
        color = _supports_color()
        self.GREEN = "\033[92m" if color else ""
        self.RED = "\033[91m" if color else ""
        self.YELLOW = "\033[93m" if color else ""
        self.RESET = "\033[0m" if color else ""
        self.BOLD = "\033[1m" if color else ""

    def generate(self, summary: ReportSummary) -> str:
        """Generate console report."""
        lines = []

        lines.append(f"\n{self.BOLD}Build Results{self.RESET}")
        lines.append("=" * 60)

        lines.append(f"\n{self.BOLD}Summary:{self.RESET}")
        lines.append(f"  Compiled Units: {summary.tests}")
        lines.append(f"  {self.YELLOW}Files With Warnings: {summary.failures}{self.RESET}")
        lines.append(f"  {self.RED}Files With Errors: {summary.errors}{self.RESET}")
        lines.append(f"  Projects: {len(summary.projects)}")

        if summary.success:
            lines.append(f"\n{self.GREEN}{self.BOLD}✓ BUILD CLEAN{self.RESET}")
        else:
            lines.append(f"\n{self.RED}{self.BOLD}✗ BUILD HAS DIAGNOSTICS{self.RESET}")

        for project in summary.projects:
            lines.append(
                f"\n{self.BOLD}{project.name or '(unknown project)'}{self.RESET}: "
                f"{project.tests} compiled, {project.failures} warned, {project.errors} errored"
            )
            for case in project.testcases:
                for message in case.details:
                    if message.severity == Severity.ERROR:
                        symbol = f"{self.RED}✗{self.RESET}"
                    else:
                        symbol = f"{self.YELLOW}!{self.RESET}"
                    lines.append(
                        f"  {symbol} {case.name}({message.line},{message.column}): "
                        f"{message.code}: {message.description}"
                    )

        lines.append("")  # Empty line at end
        return "\n".join(lines)
