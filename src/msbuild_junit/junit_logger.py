"""
JUnit logger that collects build events and writes the report at shutdown.
"""

import logging
from pathlib import Path
from typing import Optional

from .collector import BuildEventHandler, EventCollector
from .config import ConfigurationError, LoggerConfig, load_config, parse_parameters, validate_config
from .exceptions import ReportWriteError
from .models import ReportSummary
from .reporting import JUnitReporter
from .results import aggregate_messages

logger = logging.getLogger(__name__)


class JunitLogger(BuildEventHandler):
    """
    Build logger that turns diagnostics into a JUnit XML report.

    Events are forwarded to an EventCollector. ``shutdown`` aggregates the
    collected messages and writes the report exactly once.
    """

    def __init__(self, config: LoggerConfig):
        """
        Initialize the logger.

        Args:
            config: Logger configuration; ``output`` is required

        Raises:
            ConfigurationError: If no output path is configured or the
                configuration is otherwise invalid
        """
        if not config.output:
            raise ConfigurationError("Log file was not set.")
        errors = validate_config(config)
        if errors:
            raise ConfigurationError("; ".join(errors))
        self.config = config
        self.collector = EventCollector(config.compiled_extensions)
        self._summary: Optional[ReportSummary] = None

    @classmethod
    def from_parameters(
        cls, parameters: Optional[str], config_file: Optional[str] = None
    ) -> "JunitLogger":
        """Create a logger from a host parameter string such as ``"report.xml"``."""
        parse_parameters(parameters)
        return cls(load_config(config_file, parameters=parameters))

    @property
    def output_path(self) -> Path:
        return Path(self.config.output)

    def info_raised(self, message: str, project_file: Optional[str]) -> None:
        self.collector.info_raised(message, project_file)

    def warning_raised(self, message, code, file, project_file, line, column) -> None:
        self.collector.warning_raised(message, code, file, project_file, line, column)

    def error_raised(self, message, code, file, project_file, line, column) -> None:
        self.collector.error_raised(message, code, file, project_file, line, column)

    def shutdown(self) -> ReportSummary:
        """
        Close intake, aggregate the messages and write the JUnit report.

        Returns:
            The aggregated ReportSummary

        Raises:
            ReportWriteError: If the report file cannot be written
        """
        if self._summary is not None:
            logger.warning("Logger already shut down; report not rewritten")
            return self._summary

        messages = self.collector.seal()
        summary = aggregate_messages(messages)
        report = JUnitReporter(indent=self.config.indent).generate(summary)

        logger.info("Write to junit xml file: %s", self.output_path)
        try:
            self.output_path.parent.mkdir(parents=True, exist_ok=True)
            self.output_path.write_text(report, encoding="utf-8")
        except OSError as e:
            raise ReportWriteError(str(self.output_path), e)

        logger.info(
            "Report written: %d tests, %d failures, %d errors across %d projects",
            summary.tests,
            summary.failures,
            summary.errors,
            len(summary.projects),
        )
        self._summary = summary
        return summary
