from __future__ import annotations

import pytest

from covgate.engine import ChangeKind, CoverageIndex, resolve
from covgate.model import CoverageRecord, ProjectIdentity


@pytest.fixture
def index(identity: ProjectIdentity) -> CoverageIndex:
    return CoverageIndex(
        identity,
        [CoverageRecord("A.swift", 8, 10), CoverageRecord("B.swift", 5, 10), CoverageRecord("C.swift", 1, 4)],
    )


def _paths(records) -> list[str]:
    return [r.path for r in records]


def test_views_split_added_and_modified(index: CoverageIndex, make_vcs) -> None:
    changes = resolve(index, make_vcs(modified=["B.swift"], added=["C.swift"]))

    assert _paths(changes.added_or_modified) == ["B.swift", "C.swift"]
    assert _paths(changes.modified_only) == ["B.swift"]
    assert _paths(changes.added_only) == ["C.swift"]


def test_file_in_both_lists_counts_once_in_union(index: CoverageIndex, make_vcs) -> None:
    changes = resolve(index, make_vcs(modified=["B.swift"], added=["B.swift", "C.swift"]))

    assert _paths(changes.added_or_modified) == ["B.swift", "C.swift"]
    assert _paths(changes.modified_only) == ["B.swift"]
    assert _paths(changes.added_only) == ["B.swift", "C.swift"]
    assert changes.classify(index.records()[1]) is ChangeKind.BOTH


def test_union_equals_views_combined(index: CoverageIndex, make_vcs) -> None:
    changes = resolve(index, make_vcs(modified=["A.swift", "gone.swift"], added=["C.swift", "README.md"]))
    records = set(index.records())

    assert set(changes.modified_only) <= records
    assert set(changes.added_only) <= records
    assert {r.path for r in changes.added_or_modified} == {
        r.path for r in (*changes.modified_only, *changes.added_only)
    }


def test_missing_vcs_data_is_an_empty_change_set(index: CoverageIndex, make_vcs) -> None:
    changes = resolve(index, make_vcs(modified=None, added=None))

    assert changes.added_or_modified == ()
    assert changes.modified_only == ()
    assert changes.added_only == ()


def test_vcs_is_queried_once_and_views_are_memoized(index: CoverageIndex, make_vcs) -> None:
    vcs = make_vcs(modified=["B.swift"], added=["C.swift"])
    changes = resolve(index, vcs)

    first = changes.modified_only
    assert changes.modified_only is first
    _ = changes.added_only, changes.added_or_modified
    assert vcs.queries == 2  # one modified_files() and one added_files() call


def test_views_are_computed_independently(index: CoverageIndex, make_vcs) -> None:
    changes = resolve(index, make_vcs(modified=["B.swift"], added=["C.swift"]))

    assert _paths(changes.added_only) == ["C.swift"]
    assert "added_or_modified" not in vars(changes)
    assert "modified_only" not in vars(changes)


def test_membership_is_exact_path_equality(index: CoverageIndex, make_vcs) -> None:
    changes = resolve(index, make_vcs(modified=["./B.swift", "b.swift"], added=[]))
    assert changes.modified_only == ()


def test_classify(index: CoverageIndex, make_vcs) -> None:
    changes = resolve(index, make_vcs(modified=["B.swift"], added=["C.swift"]))
    a, b, c = index.records()

    assert changes.classify(a) is ChangeKind.NONE
    assert changes.classify(b) is ChangeKind.MODIFIED
    assert changes.classify(c) is ChangeKind.ADDED
