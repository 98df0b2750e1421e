"""Markdown rendering of project and change-set coverage."""

from __future__ import annotations

from typing import TYPE_CHECKING

from covgate.model.metrics import format_percent

if TYPE_CHECKING:
    from collections.abc import Sequence

    from covgate.engine.index import CoverageIndex
    from covgate.model.records import CoverageRecord

ATTRIBUTION = "> Powered by covgate"
NOT_APPLICABLE = "n/a"


def _path_cell(path: str) -> str:
    return path.replace("|", "\\|")


def _percent_cell(value: float | None, decimals: int | None) -> str:
    if value is None:
        return NOT_APPLICABLE
    return f"{format_percent(value, decimals)}%"


def total_coverage_heading(index: CoverageIndex) -> str:
    decimals = index.identity.decimal_precision
    return f"### Total coverage: **`{_percent_cell(index.total_coverage(), decimals)}`**\n"


def modified_files_table(view: Sequence[CoverageRecord], decimals: int | None = None) -> str:
    """Two-column ``File | Coverage`` table; empty string for an empty view.

    Files without testable lines show ``n/a``.
    """
    if not view:
        return ""
    lines = ["File | Coverage\n", "-----|-----\n"]
    lines.extend(f"{_path_cell(r.path)} | **`{_percent_cell(r.percentage, decimals)}`**\n" for r in view)
    return "".join(lines)


def full_report(index: CoverageIndex, view: Sequence[CoverageRecord], scheme_name: str) -> str:
    return (
        f"## {scheme_name} code coverage\n"
        + total_coverage_heading(index)
        + modified_files_table(view, index.identity.decimal_precision)
        + ATTRIBUTION
    )


__all__ = ["ATTRIBUTION", "full_report", "modified_files_table", "total_coverage_heading"]
