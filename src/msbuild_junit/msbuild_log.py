"""
Replay of saved MSBuild console output as build events.

MSBuild prefixes each line with the id of the project context that produced
it (``2>``); continuation lines without a prefix belong to the last context
seen. Diagnostics look like::

    2>C:\\src\\App\\main.cpp(4,2): error C2065: 'x': undeclared identifier [C:\\src\\App\\App.vcxproj]
    2>LINK : fatal error LNK1104: cannot open file 'dep.lib' [C:\\src\\App\\App.vcxproj]

Compiler file echoes (``main.cpp``) are offered to the handler as info
events; the handler decides whether they are compiled units.
"""

import logging
import re
import sys
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from .collector import BuildEventHandler
from .exceptions import BuildLogReadError

logger = logging.getLogger(__name__)

_NODE_PREFIX = re.compile(r"^\s*(?:(?P<node>\d+)(?::\d+)?>)?(?P<body>.*)$")

_PROJECT_BUILDING = re.compile(
    r'^Project "[^"]+"(?: \(\d+(?::\d+)?\))? is building "(?P<project>[^"]+)" \((?P<node>\d+)(?::\d+)?\)'
)
_PROJECT_ON_NODE = re.compile(r'^Project "(?P<project>[^"]+)" on node \d+')

_DIAGNOSTIC_WITH_LOCATION = re.compile(
    r"^(?P<file>.+?)\((?P<line>\d+)(?:,(?P<col>\d+))?(?:,\d+,\d+)?\)\s*:\s*"
    r"(?:\w+\s+)?(?P<kind>error|warning)(?:\s+(?P<code>[^\s:]+))?\s*:\s*(?P<message>.*)$",
    re.IGNORECASE,
)
_DIAGNOSTIC_WITHOUT_LOCATION = re.compile(
    r"^(?P<file>[^()]+?)\s*:\s*"
    r"(?:\w+\s+)?(?P<kind>error|warning)(?:\s+(?P<code>[^\s:]+))?\s*:\s*(?P<message>.*)$",
    re.IGNORECASE,
)
_PROJECT_SUFFIX = re.compile(r"\s*\[(?P<project>[^\[\]]+)\]\s*$")

_BUILD_FOOTER = re.compile(r"^Build (?:succeeded|FAILED)\.", re.IGNORECASE)


@dataclass
class ReplayStats:
    """Counts of what a replay handed to the event handler."""

    lines: int = 0
    infos: int = 0
    warnings: int = 0
    errors: int = 0


def _split_project_suffix(message: str) -> Tuple[str, Optional[str]]:
    match = _PROJECT_SUFFIX.search(message)
    if not match:
        return message.strip(), None
    return message[: match.start()].strip(), match.group("project")


def replay_build_log(lines: Iterable[str], handler: BuildEventHandler) -> ReplayStats:
    """
    Feed MSBuild console output lines into a build event handler.

    Replay stops at the ``Build succeeded.``/``Build FAILED.`` footer, since
    MSBuild repeats every diagnostic in the summary that follows it.

    Args:
        lines: Log lines, with or without trailing newlines
        handler: Receiver of the info/warning/error events

    Returns:
        ReplayStats with the number of events raised per kind
    """
    stats = ReplayStats()
    projects: Dict[str, str] = {}
    current_node: Optional[str] = None

    for raw_line in lines:
        stats.lines += 1
        prefix = _NODE_PREFIX.match(raw_line.rstrip("\r\n"))
        if prefix.group("node"):
            current_node = prefix.group("node")
        body = prefix.group("body").strip()
        if not body:
            continue

        if _BUILD_FOOTER.match(body):
            logger.debug("Build footer reached at line %d; stopping replay", stats.lines)
            break

        header = _PROJECT_BUILDING.match(body)
        if header:
            projects[header.group("node")] = header.group("project")
            continue
        header = _PROJECT_ON_NODE.match(body)
        if header:
            if current_node is not None:
                projects[current_node] = header.group("project")
            continue

        node_project = projects.get(current_node or "", "")
        diagnostic = _DIAGNOSTIC_WITH_LOCATION.match(body) or _DIAGNOSTIC_WITHOUT_LOCATION.match(body)
        if diagnostic is None:
            handler.info_raised(body, node_project)
            stats.infos += 1
            continue

        message, project = _split_project_suffix(diagnostic.group("message"))
        args = (
            message,
            diagnostic.group("code") or "",
            diagnostic.group("file").strip(),
            project or node_project,
            int(diagnostic.groupdict().get("line") or 0),
            int(diagnostic.groupdict().get("col") or 0),
        )
        if diagnostic.group("kind").lower() == "error":
            handler.error_raised(*args)
            stats.errors += 1
        else:
            handler.warning_raised(*args)
            stats.warnings += 1

    logger.debug(
        "Replayed %d lines: %d info, %d warning, %d error events",
        stats.lines,
        stats.infos,
        stats.warnings,
        stats.errors,
    )
    return stats


def read_build_log(path: str) -> List[str]:
    """
    Read a saved build log; ``-`` reads standard input.

    Raises:
        BuildLogReadError: If the file cannot be read
    """
    if path == "-":
        return sys.stdin.buffer.read().decode("utf-8-sig", errors="replace").splitlines()
    try:
        with open(path, "r", encoding="utf-8-sig", errors="replace") as f:
            return f.read().splitlines()
    except OSError as e:
        raise BuildLogReadError(path, e)
