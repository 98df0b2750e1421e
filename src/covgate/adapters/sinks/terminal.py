from __future__ import annotations

from dataclasses import dataclass, field

from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape

from covgate.adapters.sinks.base import RecordingSink


def _default_console() -> Console:
    return Console(soft_wrap=True)


@dataclass(slots=True)
class TerminalSink(RecordingSink):
    """Print reports to the terminal as they arrive; failures red, warnings yellow."""

    console: Console = field(default_factory=_default_console)

    def post_markdown_block(self, text: str) -> None:
        RecordingSink.post_markdown_block(self, text)
        if text:
            self.console.print(Markdown(text))

    def post_inline_warning(self, text: str) -> None:
        RecordingSink.post_inline_warning(self, text)
        self.console.print(f"[bold yellow]WARNING[/bold yellow] {escape(text)}")

    def post_build_failure(self, text: str) -> None:
        RecordingSink.post_build_failure(self, text)
        self.console.print(f"[bold red]FAILURE[/bold red] {escape(text)}")


__all__ = ["TerminalSink"]
