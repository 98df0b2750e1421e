"""Per-file coverage counts produced by a coverage provider."""

from __future__ import annotations

from dataclasses import dataclass

from covgate.errors import InvalidCoverageReportError
from covgate.model.metrics import pct


@dataclass(frozen=True, slots=True)
class CoverageRecord:
    """One file's tested/testable line counts.

    Fields
    ------
    path:
        Repository-relative POSIX path of the source file.
    lines_tested:
        Number of coverable lines executed at least once.
    lines_testable:
        Number of coverable lines (``>= lines_tested``).
    """

    path: str
    lines_tested: int
    lines_testable: int

    def __post_init__(self) -> None:
        if self.lines_tested < 0 or self.lines_testable < 0:
            msg = f"negative line counts for {self.path!r}: {self.lines_tested}/{self.lines_testable}"
            raise InvalidCoverageReportError(msg)
        if self.lines_tested > self.lines_testable:
            msg = f"{self.path!r} reports more tested than testable lines: {self.lines_tested}/{self.lines_testable}"
            raise InvalidCoverageReportError(msg)

    @property
    def has_testable_lines(self) -> bool:
        return self.lines_testable > 0

    @property
    def percentage(self) -> float | None:
        """Line coverage in percent; ``None`` for files without testable lines."""
        return pct(self.lines_tested, self.lines_testable)


__all__ = ["CoverageRecord"]
