from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from covgate.errors import CoverageReportNotFoundError

if TYPE_CHECKING:
    from covgate.model.identity import ProjectIdentity

DEFAULT_BASENAME = "coverage"


def _under(root: Path, p: Path) -> Path:
    return p if p.is_absolute() else root / p


def resolve_report_paths(identity: ProjectIdentity) -> tuple[Path, ...]:
    """Resolve the coverage report(s) for *identity*.

    Rules
    -----
    - If ``binary_file`` lists reports: they must all exist.
    - Else: look for ``<binary_basename or "coverage">.xml`` in the output
      directory, then the build directory, then the project root.

    Relative paths are taken relative to the project root.
    """
    root = Path(identity.path)
    if identity.binary_file:
        paths = tuple(_under(root, Path(p)) for p in identity.binary_file)
        missing = [p for p in paths if not p.exists()]
        if missing:
            msg = f"coverage report not found: {', '.join(str(p) for p in missing)}"
            raise CoverageReportNotFoundError(msg)
        return tuple(p.resolve() for p in paths)

    name = f"{identity.binary_basename or DEFAULT_BASENAME}.xml"
    dirs = [d for d in (identity.output_directory, identity.build_directory) if d is not None]
    candidates = [_under(root, Path(d)) / name for d in dirs]
    candidates.append(root / name)
    for candidate in candidates:
        if candidate.exists():
            return (candidate.resolve(),)

    msg = f"no coverage report found (looked for {', '.join(str(c) for c in candidates)})"
    raise CoverageReportNotFoundError(msg)


__all__ = ["DEFAULT_BASENAME", "resolve_report_paths"]
