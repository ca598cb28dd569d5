"""Tests for custom exceptions."""

from src.msbuild_junit.exceptions import (
    BuildLoggerError,
    BuildLogReadError,
    IntakeClosedError,
    ReportWriteError,
)


class TestBuildLoggerError:
    """Tests for base exception."""

    def test_is_exception(self):
        assert issubclass(BuildLoggerError, Exception)

    def test_message(self):
        err = BuildLoggerError("logger error")
        assert str(err) == "logger error"


class TestReportWriteError:
    """Tests for report write error."""

    def test_inherits_from_base(self):
        assert issubclass(ReportWriteError, BuildLoggerError)

    def test_attributes(self):
        orig = PermissionError("denied")
        err = ReportWriteError("/ro/report.xml", orig)
        assert err.path == "/ro/report.xml"
        assert err.original_error is orig
        assert "/ro/report.xml" in str(err)
        assert "denied" in str(err)


class TestBuildLogReadError:
    """Tests for build log read error."""

    def test_inherits_from_base(self):
        assert issubclass(BuildLogReadError, BuildLoggerError)

    def test_attributes(self):
        orig = FileNotFoundError("missing")
        err = BuildLogReadError("build.log", orig)
        assert err.path == "build.log"
        assert err.original_error is orig
        assert "build.log" in str(err)


class TestIntakeClosedError:
    """Tests for intake closed error."""

    def test_inherits_from_base(self):
        assert issubclass(IntakeClosedError, BuildLoggerError)

    def test_attributes(self):
        err = IntakeClosedError("warning")
        assert err.event_kind == "warning"
        assert "warning" in str(err)
