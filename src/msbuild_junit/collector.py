"""
Build event intake.
"""

import logging
import re
import threading
from abc import ABC, abstractmethod
from pathlib import PureWindowsPath
from typing import Iterable, List, Optional, Pattern, Tuple

from .config import DEFAULT_COMPILED_EXTENSIONS, ConfigurationError
from .exceptions import IntakeClosedError
from .models import Message, Severity

logger = logging.getLogger(__name__)


class BuildEventHandler(ABC):
    """Receiver for the three kinds of events raised by a build host."""

    @abstractmethod
    def info_raised(self, message: str, project_file: Optional[str]) -> None:
        """
        Handle an informational message.

        Args:
            message: Raw message text
            project_file: Path of the project that raised the message
        """
        pass

    @abstractmethod
    def warning_raised(
        self,
        message: str,
        code: Optional[str],
        file: Optional[str],
        project_file: Optional[str],
        line: Optional[int],
        column: Optional[int],
    ) -> None:
        """Handle a warning diagnostic."""
        pass

    @abstractmethod
    def error_raised(
        self,
        message: str,
        code: Optional[str],
        file: Optional[str],
        project_file: Optional[str],
        line: Optional[int],
        column: Optional[int],
    ) -> None:
        """Handle an error diagnostic."""
        pass


def compiled_unit_pattern(extensions: Optional[Iterable[str]] = None) -> Pattern[str]:
    """
    Build the pattern matching a bare source file name, e.g. ``main.cpp``.

    Raises:
        ConfigurationError: If ``extensions`` is empty
    """
    exts = list(extensions) if extensions is not None else DEFAULT_COMPILED_EXTENSIONS
    if not exts:
        raise ConfigurationError("compiled_extensions must list at least one extension")
    alternatives = "|".join(re.escape(ext) for ext in exts)
    return re.compile(rf"\w+\.(?:{alternatives})", re.IGNORECASE)


def project_name(project_file: Optional[str]) -> str:
    """Return the project path's file name without its extension."""
    if not project_file:
        return ""
    return PureWindowsPath(project_file).stem


def file_name(path: Optional[str]) -> str:
    """Return the file name part of a path, or "" if there is none."""
    if not path:
        return ""
    return PureWindowsPath(path).name


def _position(value: Optional[int]) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


class EventCollector(BuildEventHandler):
    """
    Normalizes build events into Messages and keeps them in arrival order.

    Intake may be called from several threads. Once ``seal`` has been called
    the collection is frozen and further events raise IntakeClosedError.
    """

    def __init__(self, compiled_extensions: Optional[Iterable[str]] = None):
        self._pattern = compiled_unit_pattern(compiled_extensions)
        self._messages: List[Message] = []
        self._lock = threading.Lock()
        self._sealed: Optional[Tuple[Message, ...]] = None

    def _append(self, message: Message, event_kind: str) -> None:
        with self._lock:
            if self._sealed is not None:
                raise IntakeClosedError(event_kind)
            self._messages.append(message)

    def info_raised(self, message: str, project_file: Optional[str]) -> None:
        """Record a compiled-unit message; any other info text is dropped."""
        text = message or ""
        if not self._pattern.fullmatch(text):
            logger.debug("Ignoring info message: %r", text)
            return
        self._append(
            Message(
                project_file=project_name(project_file),
                description=text,
                severity=Severity.INFO,
                file=text,
            ),
            "info",
        )

    def warning_raised(
        self,
        message: str,
        code: Optional[str],
        file: Optional[str],
        project_file: Optional[str],
        line: Optional[int],
        column: Optional[int],
    ) -> None:
        self._append(
            self._diagnostic(Severity.WARNING, message, code, file, project_file, line, column),
            "warning",
        )

    def error_raised(
        self,
        message: str,
        code: Optional[str],
        file: Optional[str],
        project_file: Optional[str],
        line: Optional[int],
        column: Optional[int],
    ) -> None:
        self._append(
            self._diagnostic(Severity.ERROR, message, code, file, project_file, line, column),
            "error",
        )

    @staticmethod
    def _diagnostic(
        severity: Severity,
        message: str,
        code: Optional[str],
        file: Optional[str],
        project_file: Optional[str],
        line: Optional[int],
        column: Optional[int],
    ) -> Message:
        return Message(
            project_file=project_name(project_file),
            description=message or "",
            severity=severity,
            file=file_name(file),
            code=code or "",
            line=_position(line),
            column=_position(column),
        )

    @property
    def messages(self) -> Tuple[Message, ...]:
        """Snapshot of the messages recorded so far."""
        with self._lock:
            if self._sealed is not None:
                return self._sealed
            return tuple(self._messages)

    @property
    def sealed(self) -> bool:
        with self._lock:
            return self._sealed is not None

    def seal(self) -> Tuple[Message, ...]:
        """
        Close intake and return the final, immutable message collection.

        Calling seal more than once returns the same collection.
        """
        with self._lock:
            if self._sealed is None:
                self._sealed = tuple(self._messages)
                logger.debug("Intake closed with %d messages", len(self._sealed))
            return self._sealed

    def __len__(self) -> int:
        with self._lock:
            return len(self._messages)
