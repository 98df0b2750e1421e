"""Change-set collaborator backed by ``git diff --name-status``."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from covgate import logger
from covgate.errors import ChangeSetError

if TYPE_CHECKING:
    from pathlib import Path

TWO_PATH_STATUSES = frozenset({"R", "C"})


@dataclass(frozen=True, slots=True)
class NameStatus:
    """Files grouped by how the diff touched them."""

    added: tuple[str, ...] = ()
    modified: tuple[str, ...] = ()


def parse_name_status(output: str) -> NameStatus:
    """Parse ``git diff -z --name-status`` output.

    Fields are NUL-separated and paths are never quoted. Renames and copies
    carry two paths (old, new); every other status carries one.

    ``A`` is added and ``M``/``T`` are modified. Renames (``R``) count as
    modified and copies (``C``) as added, both under their new name. Deletions
    and unmerged entries are ignored.
    """
    added: list[str] = []
    modified: list[str] = []
    fields = output.split("\0")
    i = 0
    while i < len(fields):
        token = fields[i]
        i += 1
        if not token:
            continue
        status = token[0].upper()
        count = 2 if status in TWO_PATH_STATUSES else 1
        paths = fields[i : i + count]
        i += count
        if len(paths) < count or not all(paths):
            break
        if status == "A":
            added.append(paths[0])
        elif status in {"M", "T"}:
            modified.append(paths[0])
        elif status == "R":
            modified.append(paths[1])
        elif status == "C":
            added.append(paths[1])
    return NameStatus(added=tuple(added), modified=tuple(modified))


@dataclass(slots=True)
class GitChangeSet:
    """Files changed between *base* and *head* (or the working tree when *head* is ``None``).

    Paths are reported relative to *root*, matching coverage record paths even
    when *root* is a subdirectory of the repository; changes outside *root* are
    left out. ``git`` runs once; both queries read the same result.
    """

    root: Path
    base: str
    head: str | None = None
    _result: NameStatus | None = field(default=None, init=False, repr=False)

    def _command(self) -> list[str]:
        target = f"{self.base}...{self.head}" if self.head else self.base
        return ["git", "diff", "-z", "--name-status", "-M", "--relative", target]

    def _diff(self) -> NameStatus:
        if self._result is None:
            cmd = self._command()
            try:
                proc = subprocess.run(  # noqa: S603
                    cmd,
                    cwd=self.root,
                    capture_output=True,
                    text=True,
                    encoding="utf-8",
                    check=True,
                )
            except FileNotFoundError as exc:
                msg = "git executable not found"
                raise ChangeSetError(msg) from exc
            except subprocess.CalledProcessError as exc:
                msg = f"{' '.join(cmd)} failed: {(exc.stderr or '').strip() or exc}"
                raise ChangeSetError(msg) from exc
            self._result = parse_name_status(proc.stdout)
            logger.debug(
                "git diff %s: %d added, %d modified",
                cmd[-1],
                len(self._result.added),
                len(self._result.modified),
            )
        return self._result

    def modified_files(self) -> list[str]:
        return list(self._diff().modified)

    def added_files(self) -> list[str]:
        return list(self._diff().added)


__all__ = ["GitChangeSet", "NameStatus", "parse_name_status"]
