from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from covgate import logger
from covgate.adapters.sinks.base import RecordingSink

if TYPE_CHECKING:
    from pathlib import Path


def render_document(markdown: list[str], warnings: list[str], failures: list[str]) -> str:
    """Assemble one markdown document: failures, then warnings, then report blocks."""
    parts: list[str] = []
    if failures:
        parts.append("### Failures\n" + "".join(f"- {msg}\n" for msg in failures))
    if warnings:
        parts.append("### Warnings\n" + "".join(f"- {msg}\n" for msg in warnings))
    parts.extend(block for block in markdown if block)
    return "\n".join(parts)


@dataclass(slots=True)
class MarkdownFileSink(RecordingSink):
    """Collect everything posted and write it as one markdown file on :meth:`close`.

    The file is meant to be posted as a pull-request comment by the CI job.
    """

    destination: Path | None = None

    def close(self) -> None:
        if self.destination is None:
            return
        text = render_document(self.markdown, self.warnings, self.failures)
        self.destination.parent.mkdir(parents=True, exist_ok=True)
        self.destination.write_text(text, encoding="utf-8")
        logger.info("wrote coverage report to %s", self.destination)


__all__ = ["MarkdownFileSink", "render_document"]
