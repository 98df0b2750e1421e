from __future__ import annotations

from covgate.model import CoverageRecord, IgnoreList


def test_ignore_list_matches_gitwildmatch_patterns() -> None:
    ignore = IgnoreList(["Pods/", "**/*Tests.swift", "generated_*.py"])

    assert ignore.ignores("Pods/Alamofire/Session.swift")
    assert ignore.ignores("App/Tests/LoginTests.swift")
    assert ignore.ignores("pkg/generated_api.py")
    assert not ignore.ignores("App/Login.swift")


def test_ignore_list_normalizes_paths() -> None:
    ignore = IgnoreList(["build/*"])
    assert ignore.ignores("./build/out.py")
    assert ignore.ignores("build\\out.py")


def test_empty_ignore_list_keeps_everything() -> None:
    ignore = IgnoreList()
    assert not ignore
    assert not ignore.ignores("anything.py")


def test_ignore_list_dedupes_and_preserves_order() -> None:
    ignore = IgnoreList(["b/*", " a/* ", "b/*", ""])
    assert ignore.patterns == ("b/*", "a/*")


def test_apply_filters_records_in_order() -> None:
    records = [CoverageRecord("src/a.py", 1, 1), CoverageRecord("tests/test_a.py", 1, 1), CoverageRecord("src/b.py", 0, 1)]
    kept = IgnoreList(["tests/"]).apply(records, key=lambda r: r.path)
    assert [r.path for r in kept] == ["src/a.py", "src/b.py"]

