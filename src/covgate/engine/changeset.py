"""Intersect a coverage index with the files added or modified in a change-set."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from functools import cached_property
from typing import TYPE_CHECKING, Protocol

from covgate import logger

if TYPE_CHECKING:
    from collections.abc import Iterable

    from covgate.engine.index import CoverageIndex
    from covgate.model.records import CoverageRecord


class ChangeSetSource(Protocol):
    """Version-control collaborator. ``None`` means "no data", never an error."""

    def modified_files(self) -> Iterable[str] | None: ...

    def added_files(self) -> Iterable[str] | None: ...


class ChangeKind(StrEnum):
    NONE = "none"
    ADDED = "added"
    MODIFIED = "modified"
    BOTH = "both"


@dataclass(frozen=True, slots=True)
class VcsSnapshot:
    """The change-set as reported once by the version-control collaborator."""

    modified: frozenset[str]
    added: frozenset[str]

    @classmethod
    def capture(cls, vcs: ChangeSetSource) -> VcsSnapshot:
        modified = frozenset(str(p) for p in (vcs.modified_files() or ()))
        added = frozenset(str(p) for p in (vcs.added_files() or ()))
        logger.debug("change-set: %d modified, %d added", len(modified), len(added))
        return cls(modified=modified, added=added)

    @property
    def changed(self) -> frozenset[str]:
        return self.modified | self.added


class ChangeSet:
    """Three views over an index, each computed on first use and then kept.

    A file reported both added and modified appears once in
    :attr:`added_or_modified` and in each of :attr:`modified_only` and
    :attr:`added_only`, because every view reads its own path set.
    """

    def __init__(self, index: CoverageIndex, snapshot: VcsSnapshot) -> None:
        self._index = index
        self._snapshot = snapshot

    def _select(self, paths: frozenset[str]) -> tuple[CoverageRecord, ...]:
        return tuple(r for r in self._index.records() if r.path in paths)

    @cached_property
    def added_or_modified(self) -> tuple[CoverageRecord, ...]:
        return self._select(self._snapshot.changed)

    @cached_property
    def modified_only(self) -> tuple[CoverageRecord, ...]:
        return self._select(self._snapshot.modified)

    @cached_property
    def added_only(self) -> tuple[CoverageRecord, ...]:
        return self._select(self._snapshot.added)

    def classify(self, record: CoverageRecord) -> ChangeKind:
        added = record.path in self._snapshot.added
        modified = record.path in self._snapshot.modified
        if added and modified:
            return ChangeKind.BOTH
        if added:
            return ChangeKind.ADDED
        if modified:
            return ChangeKind.MODIFIED
        return ChangeKind.NONE


def resolve(index: CoverageIndex, vcs: ChangeSetSource) -> ChangeSet:
    """Query *vcs* once and bind the result to *index*."""
    return ChangeSet(index, VcsSnapshot.capture(vcs))


__all__ = ["ChangeKind", "ChangeSet", "ChangeSetSource", "VcsSnapshot", "resolve"]
