"""
JUnit XML reporter for build diagnostics.
"""

import re
import xml.etree.ElementTree as ET

from ..models import Message, ReportSummary, Severity
from .base import ReportGenerator

XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>'

_DETAIL_TAGS = {
    Severity.WARNING: "failure",
    Severity.ERROR: "error",
}

# ANSI escape sequences emitted by colored compiler/MSBuild output
_ANSI_ESCAPE = re.compile(r"\x1b(?:\[[0-?]*[ -/]*[@-~]|[@-Z\\-_])")

# Code points outside the XML 1.0 Char production
_INVALID_XML_CHARS = re.compile("[^\x09\x0a\x0d\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")


def xml_safe(text: str) -> str:
    """Strip ANSI sequences and replace characters XML 1.0 cannot carry with U+FFFD."""
    return _INVALID_XML_CHARS.sub("\ufffd", _ANSI_ESCAPE.sub("", text))


def format_detail(message: Message) -> str:
    """Return the text body of a failure/error element."""
    return f"({message.line}) {message.code}: {message.description}"


class JUnitReporter(ReportGenerator):
    """Generate a JUnit XML document: project -> file -> diagnostic."""

    def __init__(self, indent: bool = True) -> None:
        self.indent = indent

    def generate(self, summary: ReportSummary) -> str:
        """Generate JUnit XML report."""
        testsuites = ET.Element("testsuites")
        testsuites.set("errors", str(summary.errors))
        testsuites.set("failures", str(summary.failures))
        testsuites.set("tests", str(summary.tests))

        for project in summary.projects:
            testsuite = ET.SubElement(testsuites, "testsuite")
            testsuite.set("name", xml_safe(project.name))
            testsuite.set("errors", str(project.errors))
            testsuite.set("failures", str(project.failures))
            testsuite.set("tests", str(project.tests))

            for case in project.testcases:
                testcase = ET.SubElement(testsuite, "testcase")
                testcase.set("classname", xml_safe(case.name))
                testcase.set("name", xml_safe(case.name))

                for message in case.details:
                    tag = _DETAIL_TAGS.get(message.severity)
                    if tag is None:
                        continue
                    detail = ET.SubElement(testcase, tag)
                    detail.set("type", xml_safe(message.code))
                    detail.set("message", xml_safe(message.description))
                    detail.text = xml_safe(format_detail(message))

        if self.indent:
            ET.indent(testsuites, space="  ")
        body = ET.tostring(testsuites, encoding="unicode")
        return f"{XML_DECLARATION}\n{body}\n"
