"""Threshold evaluation over a coverage index or a change-set view."""

from __future__ import annotations

from typing import TYPE_CHECKING

from covgate import logger
from covgate.model.metrics import format_minimum
from covgate.model.types import Escalation
from covgate.model.violations import Violation

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from covgate.adapters.sinks.base import ReportSink
    from covgate.engine.index import CoverageIndex
    from covgate.model.records import CoverageRecord


def evaluate_total(
    index: CoverageIndex,
    minimum: float,
    escalation: Escalation = Escalation.BLOCK,
) -> Violation | None:
    """Return a violation when the project total is below *minimum*."""
    if index.total_coverage() < minimum:
        return Violation(
            message=f"Total coverage less than {format_minimum(minimum)}%",
            escalation=escalation,
        )
    return None


def evaluate_files(
    view: Iterable[CoverageRecord],
    minimum: float,
    escalation: Escalation = Escalation.BLOCK,
) -> list[Violation]:
    """Return one violation per file in *view* covered below *minimum*.

    Files without testable lines cannot miss a threshold and are skipped.
    """
    violations: list[Violation] = []
    for record in view:
        percentage = record.percentage
        if percentage is None:
            logger.debug("skipping %s: no testable lines", record.path)
            continue
        if percentage < minimum:
            violations.append(
                Violation(
                    message=f"{record.path} has less than {format_minimum(minimum)}% code coverage",
                    escalation=escalation,
                    path=record.path,
                )
            )
    return violations


def route(violations: Sequence[Violation], sink: ReportSink) -> None:
    """Post each violation to the sink channel matching its escalation."""
    for violation in violations:
        logger.debug("routing %s violation: %s", violation.escalation.value, violation.message)
        if violation.escalation is Escalation.BLOCK:
            sink.post_build_failure(violation.message)
        else:
            sink.post_inline_warning(violation.message)


__all__ = ["evaluate_files", "evaluate_total", "route"]
