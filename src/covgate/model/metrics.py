from __future__ import annotations

from covgate.model.types import FULL_COVERAGE

_DEFAULT_DECIMALS = 2


def pct(covered: int, total: int) -> float | None:
    """Return ``covered / total`` as a percentage, or ``None`` when *total* is zero."""
    if total <= 0:
        return None
    return (covered / total) * float(FULL_COVERAGE)


def format_percent(value: float, decimals: int | None = None) -> str:
    """Format a coverage percentage for reports.

    With an explicit precision the value is padded to exactly that many decimals.
    Without one it is rounded to two decimals and trailing zeros are dropped,
    keeping at least one (``65.0``, ``66.67``).
    """
    if decimals is not None:
        return f"{value:.{decimals}f}"
    return str(float(f"{value:.{_DEFAULT_DECIMALS}f}"))


def format_minimum(minimum: float) -> str:
    """Render a threshold the way users write it (``70`` rather than ``70.0``)."""
    return f"{minimum:g}"


__all__ = ["format_minimum", "format_percent", "pct"]
