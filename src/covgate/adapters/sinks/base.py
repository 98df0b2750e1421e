"""Report sink interface and the shared recording behaviour."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol


class ReportSink(Protocol):
    """Destination for rendered reports and routed violations."""

    def post_markdown_block(self, text: str) -> None: ...

    def post_inline_warning(self, text: str) -> None: ...

    def post_build_failure(self, text: str) -> None: ...


@dataclass(slots=True)
class RecordingSink:
    """Sink that keeps everything it was given, in order of arrival."""

    markdown: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    failures: list[str] = field(default_factory=list)

    def post_markdown_block(self, text: str) -> None:
        self.markdown.append(text)

    def post_inline_warning(self, text: str) -> None:
        self.warnings.append(text)

    def post_build_failure(self, text: str) -> None:
        self.failures.append(text)

    @property
    def failed(self) -> bool:
        return bool(self.failures)

    def close(self) -> None:
        """Flush anything buffered. Recording sinks have nothing to flush."""


__all__ = ["RecordingSink", "ReportSink"]
