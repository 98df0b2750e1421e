"""Report sinks: where rendered coverage reports and violations end up."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from covgate.adapters.sinks.base import RecordingSink, ReportSink
from covgate.adapters.sinks.markdown_file import MarkdownFileSink
from covgate.adapters.sinks.terminal import TerminalSink
from covgate.model.types import CoverageService

if TYPE_CHECKING:
    from rich.console import Console

    from covgate.model.identity import ProjectIdentity

DEFAULT_REPORT_NAME = "covgate-report.md"


def make_sink(
    identity: ProjectIdentity,
    *,
    report_path: Path | None = None,
    console: Console | None = None,
) -> RecordingSink:
    """Select the sink named by ``identity.coverage_service``.

    An explicit *report_path* always selects the markdown sink.
    """
    service = CoverageService(str(identity.coverage_service).lower())
    if report_path is not None or service is CoverageService.MARKDOWN:
        if report_path is None:
            base = identity.output_directory or identity.path
            report_path = Path(base) / DEFAULT_REPORT_NAME
        return MarkdownFileSink(destination=report_path)
    if console is not None:
        return TerminalSink(console=console)
    return TerminalSink()


__all__ = [
    "DEFAULT_REPORT_NAME",
    "MarkdownFileSink",
    "RecordingSink",
    "ReportSink",
    "TerminalSink",
    "make_sink",
]
