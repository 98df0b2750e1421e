"""Coverage provider reading Cobertura-style XML reports."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from defusedxml import ElementTree

from covgate import logger
from covgate.adapters.coverage.discover import resolve_report_paths
from covgate.errors import InvalidCoverageReportError
from covgate.model.records import CoverageRecord

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Sequence
    from xml.etree.ElementTree import Element  # noqa: S405

    from covgate.model.identity import ProjectIdentity


def read_root(path: Path) -> Element:
    """Parse coverage XML and return the root element."""
    try:
        root = ElementTree.parse(path).getroot()
    except ElementTree.ParseError as exc:
        msg = f"failed to parse coverage XML {path}: {exc}"
        raise InvalidCoverageReportError(msg) from exc
    tag = (root.tag or "").split("}")[-1]
    if tag.lower() != "coverage":
        msg = f"unexpected root tag {root.tag!r} in {path}"
        raise InvalidCoverageReportError(msg)
    return root


def source_roots(root: Element) -> tuple[Path, ...]:
    return tuple(Path(s.text.strip()) for s in root.findall("./sources/source") if s.text and s.text.strip())


def iter_line_hits(root: Element) -> Iterator[tuple[str, int, int]]:
    """Yield ``(filename, line, hits)`` for every well-formed ``<line>`` entry."""
    for cls in root.findall(".//class"):
        filename = cls.get("filename")
        if not filename:
            continue
        for line_elem in cls.findall("./lines/line"):
            n_raw = line_elem.get("number")
            hits_raw = line_elem.get("hits")
            if not n_raw or hits_raw is None:
                continue
            try:
                n = int(n_raw)
                hits = int(hits_raw)
            except ValueError:
                continue
            yield filename, n, hits


def repo_relative(
    filename: str,
    *,
    root: Path,
    sources: Sequence[Path] = (),
    source_directory: Path | None = None,
) -> str:
    """Return *filename* as a repository-relative POSIX path when possible."""
    p = Path(filename)
    if not p.is_absolute():
        if source_directory is not None:
            p = source_directory / p
        elif sources:
            p = next((s / p for s in sources if (s / p).exists()), sources[0] / p)
    if p.is_absolute():
        try:
            return p.resolve().relative_to(root.resolve()).as_posix()
        except ValueError:
            return p.as_posix()
    return p.as_posix()


def aggregate(entries: Iterable[tuple[str, int, int]]) -> dict[str, dict[int, int]]:
    """Merge line entries per file, keeping the highest hit count per line."""
    files: dict[str, dict[int, int]] = {}
    for path, line, hits in entries:
        lines = files.setdefault(path, {})
        lines[line] = max(lines.get(line, 0), hits)
    return files


def collect_records(
    paths: Sequence[Path],
    *,
    root: Path,
    source_directory: Path | None = None,
) -> list[CoverageRecord]:
    def entries() -> Iterator[tuple[str, int, int]]:
        for report in paths:
            xml_root = read_root(report)
            sources = source_roots(xml_root)
            for filename, line, hits in iter_line_hits(xml_root):
                rel = repo_relative(filename, root=root, sources=sources, source_directory=source_directory)
                yield rel, line, hits

    return [
        CoverageRecord(
            path=path,
            lines_tested=sum(1 for hits in lines.values() if hits > 0),
            lines_testable=len(lines),
        )
        for path, lines in aggregate(entries()).items()
    ]


class CoberturaProvider:
    """Produce :class:`CoverageRecord` objects from Cobertura XML on disk."""

    def list_coverage_files(self, identity: ProjectIdentity) -> list[CoverageRecord]:
        paths = resolve_report_paths(identity)
        logger.info("Using coverage report: %s", ", ".join(str(p) for p in paths))
        records = collect_records(
            paths,
            root=Path(identity.path),
            source_directory=identity.source_directory,
        )
        logger.debug("read %d file records from %d report(s)", len(records), len(paths))
        return records


__all__ = [
    "CoberturaProvider",
    "aggregate",
    "collect_records",
    "iter_line_hits",
    "read_root",
    "repo_relative",
    "source_roots",
]
