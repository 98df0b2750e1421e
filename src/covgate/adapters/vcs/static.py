from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class StaticChangeSet:
    """Change-set given explicitly, e.g. by a CI system that already computed it.

    ``None`` means the list is unknown and is reported as such.
    """

    modified: tuple[str, ...] | None = None
    added: tuple[str, ...] | None = None

    def modified_files(self) -> list[str] | None:
        return None if self.modified is None else list(self.modified)

    def added_files(self) -> list[str] | None:
        return None if self.added is None else list(self.added)


__all__ = ["StaticChangeSet"]
