"""
Custom exceptions for the MSBuild JUnit logger.
"""


class BuildLoggerError(Exception):
    """Base exception for MSBuild JUnit logger errors."""

    pass


class ReportWriteError(BuildLoggerError):
    """Raised when the JUnit report cannot be written."""

    def __init__(self, path: str, original_error: Exception):
        self.path = path
        self.original_error = original_error
        super().__init__(f"Failed to write JUnit report to {path}: {original_error}")


class BuildLogReadError(BuildLoggerError):
    """Raised when a saved build log cannot be read."""

    def __init__(self, path: str, original_error: Exception):
        self.path = path
        self.original_error = original_error
        super().__init__(f"Failed to read build log {path}: {original_error}")


class IntakeClosedError(BuildLoggerError):
    """Raised when an event arrives after the message collection was sealed."""

    def __init__(self, event_kind: str):
        self.event_kind = event_kind
        super().__init__(f"Cannot accept {event_kind} event: intake is already closed")
