"""Options, exit codes and helpers shared by the CLI commands."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Annotated, Any

import typer

from covgate import logger
from covgate.adapters.coverage import CoberturaProvider
from covgate.adapters.sinks import RecordingSink, make_sink
from covgate.adapters.vcs import GitChangeSet, StaticChangeSet
from covgate.config import LOG_FORMAT, load_config
from covgate.engine.session import CoverageSession
from covgate.errors import (
    ChangeSetError,
    ConfigFileError,
    CoverageReportNotFoundError,
    InvalidCoverageReportError,
    ProviderConfigError,
    ZeroTestableLinesError,
)
from covgate.model.identity import ProjectIdentity
from covgate.model.types import Check

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from covgate.engine.changeset import ChangeSetSource
    from covgate.model.violations import ThresholdPolicy

# mirror <sysexits.h>
EXIT_OK = 0
EXIT_GENERIC = 1
EXIT_THRESHOLD = 2  # a blocking threshold was missed
EXIT_DATAERR = 65  # coverage report unreadable, or no testable lines
EXIT_NOINPUT = 66  # coverage report not found
EXIT_CONFIG = 78  # invalid project identity or [tool.covgate]


ProjectArg = Annotated[
    Path,
    typer.Argument(help="Project root; coverage paths are reported relative to it."),
]
SchemeOpt = Annotated[str | None, typer.Option("--scheme", help="Name shown in the report heading.")]
WorkspaceOpt = Annotated[str | None, typer.Option("--workspace", help="Workspace the project belongs to.")]
BuildDirOpt = Annotated[
    Path | None, typer.Option("--build-dir", help="Build directory searched for the coverage report.")
]
OutputDirOpt = Annotated[
    Path | None, typer.Option("--output-dir", help="Output directory searched for the coverage report.")
]
SourceDirOpt = Annotated[
    Path | None,
    typer.Option("--source-dir", help="Prefix for relative filenames found in the coverage report."),
]
InputFormatOpt = Annotated[str | None, typer.Option("--input-format", help="Coverage report format.")]
CovOpt = Annotated[
    list[Path] | None, typer.Option("--cov", help="Coverage report file (can be repeated).")
]
BasenameOpt = Annotated[
    str | None, typer.Option("--basename", help="Report file stem to look for (default: coverage).")
]
DecimalsOpt = Annotated[
    int | None, typer.Option("--decimals", min=0, help="Decimal places for reported percentages.")
]
IgnoreOpt = Annotated[
    list[str] | None, typer.Option("--ignore", help="Gitwildmatch pattern to ignore (can be repeated).")
]
CiServiceOpt = Annotated[str | None, typer.Option("--ci-service", help="CI service running the check.")]
ServiceOpt = Annotated[
    str | None, typer.Option("--coverage-service", help="Report sink: terminal or markdown.")
]
TokenOpt = Annotated[
    str | None,
    typer.Option(
        "--coverage-access-token",
        envvar="COVGATE_COVERAGE_ACCESS_TOKEN",
        help="Access token passed through to the coverage service.",
    ),
]
BaseOpt = Annotated[str | None, typer.Option("--base", help="Git ref the change-set is computed against.")]
HeadOpt = Annotated[
    str | None, typer.Option("--head", help="Git ref compared with --base (default: working tree).")
]
AddedOpt = Annotated[
    list[str] | None, typer.Option("--added", help="Added file, repository-relative (can be repeated).")
]
ModifiedOpt = Annotated[
    list[str] | None,
    typer.Option("--modified", help="Modified file, repository-relative (can be repeated)."),
]
ReportOpt = Annotated[
    Path | None, typer.Option("--report", help="Write a markdown report to PATH instead of the terminal.")
]
ConfigOpt = Annotated[
    Path | None, typer.Option("--config", help="pyproject.toml to read [tool.covgate] from.")
]
QuietOpt = Annotated[bool, typer.Option("-q", "--quiet", help="Suppress INFO logs, emit only errors.")]
VerboseOpt = Annotated[bool, typer.Option("-v", "--verbose", help="Emit diagnostic logging.")]


def configure_logging(*, quiet: bool, verbose: bool) -> None:
    """Configure logging based on *quiet*/*verbose*."""
    level = logging.ERROR if quiet else (logging.DEBUG if verbose else logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)


def build_identity(project: Path, settings: Mapping[str, Any], overrides: Mapping[str, Any]) -> ProjectIdentity:
    """Merge file settings with CLI overrides; ``None``/empty overrides do not count."""
    merged = dict(settings)
    for key, value in overrides.items():
        if value is None or value == ():
            continue
        merged[key] = value
    for key in ("build_directory", "output_directory", "source_directory"):
        value = merged.get(key)
        if value is not None and not Path(value).is_absolute():
            merged[key] = project / value
    return ProjectIdentity(path=project, **merged)


def build_vcs(
    project: Path,
    *,
    base: str | None,
    head: str | None,
    added: list[str] | None,
    modified: list[str] | None,
) -> ChangeSetSource:
    """Explicit file lists win over git; without either the change-set is empty."""
    if added or modified:
        return StaticChangeSet(
            modified=tuple(modified) if modified else None,
            added=tuple(added) if added else None,
        )
    if base:
        return GitChangeSet(root=project, base=base, head=head)
    logger.info("no change-set given (use --base or --added/--modified); file checks see no files")
    return StaticChangeSet()


def _fail(message: str, code: int) -> typer.Exit:
    typer.echo(f"ERROR: {message}", err=True)
    return typer.Exit(code=code)


@contextmanager
def exit_on_error() -> Iterator[None]:
    """Translate covgate errors into sysexits-style exit codes."""
    try:
        yield
    except CoverageReportNotFoundError as exc:
        raise _fail(str(exc), EXIT_NOINPUT) from exc
    except (InvalidCoverageReportError, ZeroTestableLinesError) as exc:
        raise _fail(str(exc), EXIT_DATAERR) from exc
    except (ConfigFileError, ProviderConfigError) as exc:
        raise _fail(str(exc), EXIT_CONFIG) from exc
    except ChangeSetError as exc:
        raise _fail(str(exc), EXIT_GENERIC) from exc


@dataclass(slots=True)
class PreparedRun:
    """A session plus everything a command needs to drive it."""

    session: CoverageSession
    sink: RecordingSink
    identity: ProjectIdentity
    thresholds: dict[Check, ThresholdPolicy]


def open_session(
    project: Path,
    *,
    config: Path | None,
    overrides: Mapping[str, Any],
    vcs: ChangeSetSource,
    report: Path | None,
) -> PreparedRun:
    """Load configuration and build a session bound to the selected sink."""
    file_config = load_config(config or project / "pyproject.toml")
    identity = build_identity(project, file_config.settings, overrides).validate()
    sink = make_sink(identity, report_path=report)
    session = CoverageSession(CoberturaProvider(), vcs, sink)
    return PreparedRun(session=session, sink=sink, identity=identity, thresholds=dict(file_config.thresholds))


__all__ = [
    "EXIT_CONFIG",
    "EXIT_DATAERR",
    "EXIT_GENERIC",
    "EXIT_NOINPUT",
    "EXIT_OK",
    "EXIT_THRESHOLD",
    "PreparedRun",
    "build_identity",
    "build_vcs",
    "configure_logging",
    "exit_on_error",
    "open_session",
]
