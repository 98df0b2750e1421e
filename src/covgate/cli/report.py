from __future__ import annotations

from pathlib import Path

import typer

from covgate.cli._shared import (
    EXIT_OK,
    AddedOpt,
    BaseOpt,
    BasenameOpt,
    BuildDirOpt,
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
    SourceDirOpt,
    VerboseOpt,
    build_vcs,
    configure_logging,
    exit_on_error,
    open_session,
)


def register(app: typer.Typer) -> None:
    @app.command("report")
    def report_cmd(
        project: ProjectArg = Path(),
        scheme: SchemeOpt = None,
        build_dir: BuildDirOpt = None,
        output_dir: OutputDirOpt = None,
        source_dir: SourceDirOpt = None,
        input_format: InputFormatOpt = None,
        cov: CovOpt = None,
        basename: BasenameOpt = None,
        decimals: DecimalsOpt = None,
        ignore: IgnoreOpt = None,
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
        """Show total and changed-file coverage without applying thresholds."""
        configure_logging(quiet=quiet, verbose=verbose)
        vcs = build_vcs(project, base=base, head=head, added=added, modified=modified)

        with exit_on_error():
            run = open_session(
                project,
                config=config,
                overrides={
                    "scheme": scheme,
                    "build_directory": build_dir,
                    "output_directory": output_dir,
                    "source_directory": source_dir,
                    "input_format": input_format,
                    "binary_file": tuple(cov or ()),
                    "binary_basename": basename,
                    "decimal_precision": decimals,
                    "ignore_list": tuple(ignore or ()),
                    "post": False,
                },
                vcs=vcs,
                report=report,
            )
        try:
            with exit_on_error():
                run.session.configure(run.identity)
                run.session.show_coverage()
        finally:
            run.sink.close()
        raise typer.Exit(code=EXIT_OK)


__all__ = ["register"]
