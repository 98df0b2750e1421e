from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import TYPE_CHECKING, TypeVar

from pathspec import PathSpec

from covgate import logger
from covgate.errors import ProviderConfigError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence

T = TypeVar("T")


def _normalize(path: str) -> str:
    s = path.replace("\\", "/")
    while s.startswith("./"):
        s = s[2:]
    return PurePosixPath(s).as_posix() if s else s


@dataclass(frozen=True, slots=True)
class IgnoreList:
    """Ordered gitwildmatch patterns matched against repository-relative paths."""

    patterns: tuple[str, ...]
    _spec: PathSpec = field(compare=False, repr=False)

    def __init__(self, patterns: Sequence[str] = ()) -> None:
        # de-dupe, preserve order
        seen: set[str] = set()
        ordered: list[str] = []
        for raw in patterns:
            pat = str(raw).strip()
            if pat and pat not in seen:
                seen.add(pat)
                ordered.append(pat)
        try:
            spec = PathSpec.from_lines("gitwildmatch", ordered)
        except ValueError as exc:
            msg = f"invalid ignore pattern: {exc}"
            raise ProviderConfigError(msg) from exc
        object.__setattr__(self, "patterns", tuple(ordered))
        object.__setattr__(self, "_spec", spec)

    def __bool__(self) -> bool:
        return bool(self.patterns)

    def ignores(self, path: str) -> bool:
        return bool(self.patterns) and self._spec.match_file(_normalize(path))

    def apply(self, items: Iterable[T], key: Callable[[T], str]) -> list[T]:
        """Return the items whose path (as given by *key*) is not ignored."""
        out: list[T] = []
        for item in items:
            path = key(item)
            if self.ignores(path):
                logger.debug("ignore list drops %s", path)
                continue
            out.append(item)
        return out


__all__ = ["IgnoreList"]
