from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any

import typer

from covgate.cli._shared import (
    EXIT_OK,
    EXIT_THRESHOLD,
    AddedOpt,
    BaseOpt,
    BasenameOpt,
    BuildDirOpt,
    CiServiceOpt,
    ConfigOpt,
    CovOpt,
    DecimalsOpt,
    HeadOpt,
    IgnoreOpt,
    InputFormatOpt,
    ModifiedOpt,
    OutputDirOpt,
    ProjectArg,
    QuietOpt,
    ReportOpt,
    SchemeOpt,
    ServiceOpt,
    SourceDirOpt,
    TokenOpt,
    VerboseOpt,
    WorkspaceOpt,
    build_vcs,
    configure_logging,
    exit_on_error,
    open_session,
)
from covgate.model.types import DEFAULT_ESCALATION, Check, Escalation
from covgate.model.violations import ThresholdPolicy


def _minimum_opt(check: Check, what: str) -> Any:
    return typer.Option(f"--min-{check.value}", min=0.0, max=100.0, help=f"Minimum coverage percent for {what}.")


def _level_opt(check: Check) -> Any:
    default = DEFAULT_ESCALATION[check].value
    return typer.Option(f"--{check.value}-level", help=f"Escalation for the {check.value} check (default: {default}).")


def _override(
    policies: dict[Check, ThresholdPolicy],
    check: Check,
    minimum: float | None,
    level: Escalation | None,
) -> None:
    current = policies.get(check)
    if minimum is None and current is None:
        return
    policies[check] = ThresholdPolicy(
        minimum=minimum if minimum is not None else current.minimum,
        escalation=level or (current.escalation if current else DEFAULT_ESCALATION[check]),
    )


def register(app: typer.Typer) -> None:
    @app.command("check")
    def check_cmd(
        project: ProjectArg = Path(),
        min_total: Annotated[float | None, _minimum_opt(Check.TOTAL, "the whole project")] = None,
        total_level: Annotated[Escalation | None, _level_opt(Check.TOTAL)] = None,
        min_changed: Annotated[float | None, _minimum_opt(Check.CHANGED, "each added or modified file")] = None,
        changed_level: Annotated[Escalation | None, _level_opt(Check.CHANGED)] = None,
        min_added: Annotated[float | None, _minimum_opt(Check.ADDED, "each added file")] = None,
        added_level: Annotated[Escalation | None, _level_opt(Check.ADDED)] = None,
        min_modified: Annotated[float | None, _minimum_opt(Check.MODIFIED, "each modified file")] = None,
        modified_level: Annotated[Escalation | None, _level_opt(Check.MODIFIED)] = None,
        scheme: SchemeOpt = None,
        workspace: WorkspaceOpt = None,
        build_dir: BuildDirOpt = None,
        output_dir: OutputDirOpt = None,
        source_dir: SourceDirOpt = None,
        input_format: InputFormatOpt = None,
        cov: CovOpt = None,
        basename: BasenameOpt = None,
        decimals: DecimalsOpt = None,
        ignore: IgnoreOpt = None,
        ci_service: CiServiceOpt = None,
        coverage_service: ServiceOpt = None,
        coverage_access_token: TokenOpt = None,
        base: BaseOpt = None,
        head: HeadOpt = None,
        added: AddedOpt = None,
        modified: ModifiedOpt = None,
        report: ReportOpt = None,
        config: ConfigOpt = None,
        *,
        quiet: QuietOpt = False,
        verbose: VerboseOpt = False,
    ) -> None:
        """Show coverage and fail when a blocking threshold is missed."""
        configure_logging(quiet=quiet, verbose=verbose)
        vcs = build_vcs(project, base=base, head=head, added=added, modified=modified)

        with exit_on_error():
            run = open_session(
                project,
                config=config,
                overrides={
                    "scheme": scheme,
                    "workspace": workspace,
                    "build_directory": build_dir,
                    "output_directory": output_dir,
                    "source_directory": source_dir,
                    "input_format": input_format,
                    "binary_file": tuple(cov or ()),
                    "binary_basename": basename,
                    "decimal_precision": decimals,
                    "ignore_list": tuple(ignore or ()),
                    "ci_service": ci_service,
                    "coverage_service": coverage_service,
                    "coverage_access_token": coverage_access_token,
                },
                vcs=vcs,
                report=report,
            )

        policies = run.thresholds
        _override(policies, Check.TOTAL, min_total, total_level)
        _override(policies, Check.CHANGED, min_changed, changed_level)
        _override(policies, Check.ADDED, min_added, added_level)
        _override(policies, Check.MODIFIED, min_modified, modified_level)

        try:
            with exit_on_error():
                run.session.configure(run.identity)
                if not run.identity.post:
                    run.session.show_coverage()
                violations = run.session.run_checks(policies)
        finally:
            run.sink.close()

        if any(v.blocking for v in violations):
            raise typer.Exit(code=EXIT_THRESHOLD)
        raise typer.Exit(code=EXIT_OK)


__all__ = ["register"]
