"""
Base class for report generators.
"""

from abc import ABC, abstractmethod

from ..models import ReportSummary


class ReportGenerator(ABC):
    """Base class for generating build reports."""

    @abstractmethod
    def generate(self, summary: ReportSummary) -> str:
        """
        Generate a report from an aggregated build summary.

        Args:
            summary: ReportSummary produced by aggregate_messages

        Returns:
            Report as a string
        """
        pass
