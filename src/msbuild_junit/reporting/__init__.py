"""
Reporting modules for the MSBuild JUnit logger.
"""

from .base import ReportGenerator
from .console import ConsoleReporter
from .junit import JUnitReporter

__all__ = ["ReportGenerator", "ConsoleReporter", "JUnitReporter"]
