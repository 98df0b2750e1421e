"""Threshold policies and the violations they produce."""

from __future__ import annotations

from dataclasses import dataclass

from covgate.model.types import FULL_COVERAGE, Escalation


@dataclass(frozen=True, slots=True)
class ThresholdPolicy:
    """Minimum coverage percentage plus the escalation applied when it is missed."""

    minimum: float
    escalation: Escalation = Escalation.BLOCK

    def __post_init__(self) -> None:
        if self.minimum < 0 or self.minimum > float(FULL_COVERAGE):
            msg = f"minimum coverage out of range: {self.minimum}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Violation:
    """A missed threshold, routed to exactly one report-sink channel."""

    message: str
    escalation: Escalation
    path: str | None = None

    @property
    def blocking(self) -> bool:
        return self.escalation is Escalation.BLOCK


__all__ = ["ThresholdPolicy", "Violation"]
