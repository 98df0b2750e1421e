from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from pathlib import Path

import pytest
from click.testing import CliRunner

from covgate.adapters.sinks import RecordingSink
from covgate.model import CoverageRecord, ProjectIdentity

LinesSpec = Mapping[int, int] | Iterable[int]


class StubProvider:
    """Coverage provider returning fixed records and counting invocations."""

    def __init__(self, records: Sequence[tuple[str, int, int]]) -> None:
        self._records = [CoverageRecord(path, tested, testable) for path, tested, testable in records]
        self.calls: list[ProjectIdentity] = []

    def list_coverage_files(self, identity: ProjectIdentity) -> list[CoverageRecord]:
        self.calls.append(identity)
        return list(self._records)


class StubVcs:
    def __init__(self, modified: Sequence[str] | None = None, added: Sequence[str] | None = None) -> None:
        self._modified = modified
        self._added = added
        self.queries = 0

    def modified_files(self) -> list[str] | None:
        self.queries += 1
        return None if self._modified is None else list(self._modified)

    def added_files(self) -> list[str] | None:
        self.queries += 1
        return None if self._added is None else list(self._added)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a CLI runner for invoking the command-line interface."""
    return CliRunner()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def identity(tmp_path: Path) -> ProjectIdentity:
    return ProjectIdentity(path=tmp_path, scheme="App")


@pytest.fixture
def provider_abc() -> StubProvider:
    return StubProvider([("A.swift", 8, 10), ("B.swift", 5, 10), ("C.swift", 1, 4)])


@pytest.fixture
def coverage_xml_content() -> Callable[..., str]:
    def build(mapping: Mapping[Path | str, LinesSpec], *, sources: Path | str | None = None) -> str:
        classes: list[str] = []
        for file, lines in mapping.items():
            items = lines.items() if isinstance(lines, Mapping) else ((ln, 0) for ln in lines)
            lines_xml = "".join(f'<line number="{ln}" hits="{hits}"/>' for ln, hits in items)
            classes.append(f'<class filename="{file}"><lines>{lines_xml}</lines></class>')
        classes_xml = "".join(classes)
        sources_xml = f"<sources><source>{sources}</source></sources>" if sources else ""
        return (
            "<coverage>"
            f"{sources_xml}"
            f"<packages><package><classes>{classes_xml}</classes></package></packages>"
            "</coverage>"
        )

    return build


@pytest.fixture
def coverage_xml_file(
    tmp_path: Path,
    coverage_xml_content: Callable[..., str],
) -> Callable[..., Path]:
    def write(
        mapping: Mapping[Path | str, LinesSpec],
        *,
        sources: Path | str | None = None,
        filename: str = "coverage.xml",
    ) -> Path:
        xml_content = coverage_xml_content(mapping, sources=sources)
        xml_file = tmp_path / filename
        xml_file.parent.mkdir(parents=True, exist_ok=True)
        xml_file.write_text(xml_content)
        return xml_file

    return write


@pytest.fixture
def make_provider() -> type[StubProvider]:
    return StubProvider


@pytest.fixture
def make_vcs() -> type[StubVcs]:
    return StubVcs
