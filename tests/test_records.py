from __future__ import annotations

import pytest

from covgate.errors import InvalidCoverageReportError
from covgate.model import CoverageRecord, format_minimum, format_percent, pct


def test_percentage_is_tested_over_testable() -> None:
    assert CoverageRecord("A.swift", 8, 10).percentage == 80.0
    assert CoverageRecord("B.swift", 0, 3).percentage == 0.0


def test_zero_testable_lines_has_no_percentage() -> None:
    record = CoverageRecord("Empty.swift", 0, 0)
    assert record.percentage is None
    assert not record.has_testable_lines


@pytest.mark.parametrize(
    ("tested", "testable", "pattern"),
    [
        (-1, 10, "negative line counts"),
        (1, -1, "negative line counts"),
        (11, 10, "more tested than testable"),
    ],
)
def test_inconsistent_counts_are_rejected(tested: int, testable: int, pattern: str) -> None:
    with pytest.raises(InvalidCoverageReportError, match=pattern):
        CoverageRecord("X.swift", tested, testable)


def test_pct_returns_none_for_empty_total() -> None:
    assert pct(3, 0) is None
    assert pct(1, 4) == 25.0


@pytest.mark.parametrize(
    ("value", "decimals", "expected"),
    [
        (65.0, None, "65.0"),
        (200 / 3, None, "66.67"),
        (100.0, None, "100.0"),
        (65.0, 2, "65.00"),
        (200 / 3, 0, "67"),
    ],
)
def test_format_percent(value: float, decimals: int | None, expected: str) -> None:
    assert format_percent(value, decimals) == expected


def test_format_minimum_drops_trailing_zero() -> None:
    assert format_minimum(70.0) == "70"
    assert format_minimum(72.5) == "72.5"
