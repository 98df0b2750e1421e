from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

import pytest

from covgate.engine import CoverageIndex
from covgate.errors import ProviderConfigError, ZeroTestableLinesError
from covgate.model import CoverageRecord, ProjectIdentity

if TYPE_CHECKING:
    from pathlib import Path


def test_total_coverage_sums_all_records(identity: ProjectIdentity) -> None:
    index = CoverageIndex(identity, [CoverageRecord("A.swift", 8, 10), CoverageRecord("B.swift", 5, 10)])
    assert index.total_coverage() == 65.0


def test_total_coverage_is_independent_of_order(identity: ProjectIdentity) -> None:
    records = [CoverageRecord("A.swift", 8, 10), CoverageRecord("B.swift", 5, 10), CoverageRecord("C.swift", 1, 4)]
    forward = CoverageIndex(identity, records).total_coverage()
    backward = CoverageIndex(identity, reversed(records)).total_coverage()
    assert forward == backward == pytest.approx(14 / 24 * 100)


def test_total_coverage_is_memoized(identity: ProjectIdentity, make_provider) -> None:
    provider = make_provider([("A.swift", 8, 10), ("B.swift", 5, 10)])
    index = CoverageIndex.open(identity, provider)

    first = index.total_coverage()
    second = index.total_coverage()

    assert first == second == 65.0
    assert len(provider.calls) == 1


def test_zero_testable_records_do_not_change_the_total(identity: ProjectIdentity) -> None:
    index = CoverageIndex(
        identity,
        [CoverageRecord("A.swift", 8, 10), CoverageRecord("Empty.swift", 0, 0), CoverageRecord("B.swift", 5, 10)],
    )
    assert index.total_coverage() == 65.0
    assert index.percentage_of("Empty.swift") is None


def test_project_without_testable_lines_raises(identity: ProjectIdentity) -> None:
    index = CoverageIndex(identity, [CoverageRecord("Empty.swift", 0, 0)])
    with pytest.raises(ZeroTestableLinesError):
        index.total_coverage()
    # consistent across calls
    with pytest.raises(ZeroTestableLinesError):
        index.total_coverage()


def test_empty_index_raises(identity: ProjectIdentity) -> None:
    with pytest.raises(ZeroTestableLinesError):
        CoverageIndex(identity, []).total_coverage()


def test_open_applies_ignore_list(identity: ProjectIdentity, make_provider) -> None:
    provider = make_provider([("Sources/A.swift", 8, 10), ("Tests/ATests.swift", 0, 10), ("Pods/X.swift", 0, 5)])
    index = CoverageIndex.open(replace(identity, ignore_list=("Tests/**", "Pods/")), provider)

    assert [r.path for r in index.records()] == ["Sources/A.swift"]
    assert index.total_coverage() == 80.0


def test_open_keeps_provider_order(identity: ProjectIdentity, make_provider) -> None:
    provider = make_provider([("Z.swift", 1, 1), ("A.swift", 1, 2), ("M.swift", 0, 1)])
    index = CoverageIndex.open(identity, provider)
    assert [r.path for r in index.records()] == ["Z.swift", "A.swift", "M.swift"]
    assert index.get("A.swift") == CoverageRecord("A.swift", 1, 2)
    assert index.percentage_of("A.swift") == 50.0
    assert index.percentage_of("missing.swift") is None


@pytest.mark.parametrize(
    "changes",
    [
        {"input_format": "lcov"},
        {"decimal_precision": -1},
        {"coverage_service": "carrier-pigeon"},
        {"ignore_list": ("  ",)},
    ],
)
def test_open_rejects_malformed_identity(identity: ProjectIdentity, make_provider, changes: dict) -> None:
    provider = make_provider([("A.swift", 1, 1)])
    with pytest.raises(ProviderConfigError):
        CoverageIndex.open(replace(identity, **changes), provider)
    assert provider.calls == []


def test_open_wraps_provider_io_errors(identity: ProjectIdentity) -> None:
    class BrokenProvider:
        def list_coverage_files(self, identity: ProjectIdentity) -> list[CoverageRecord]:
            msg = "permission denied"
            raise PermissionError(msg)

    with pytest.raises(ProviderConfigError, match="permission denied"):
        CoverageIndex.open(identity, BrokenProvider())


def test_open_propagates_provider_config_errors(tmp_path: Path) -> None:
    class MissingOutput:
        def list_coverage_files(self, identity: ProjectIdentity) -> list[CoverageRecord]:
            msg = "no coverage output"
            raise ProviderConfigError(msg)

    with pytest.raises(ProviderConfigError, match="no coverage output"):
        CoverageIndex.open(ProjectIdentity(path=tmp_path), MissingOutput())
