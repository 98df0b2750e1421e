"""Shared enumerations and constants used across covgate."""

from __future__ import annotations

from enum import StrEnum

# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class Escalation(StrEnum):
    """Severity attached to a threshold violation."""

    BLOCK = "block"  # fails the run
    WARN = "warn"  # advisory only


class Check(StrEnum):
    """Named threshold checks a run can apply."""

    TOTAL = "total"
    CHANGED = "changed"  # added or modified files
    ADDED = "added"
    MODIFIED = "modified"


class InputFormat(StrEnum):
    """Raw coverage formats understood by the bundled provider."""

    COBERTURA = "cobertura"


class CoverageService(StrEnum):
    """Report sinks selectable from the project identity."""

    TERMINAL = "terminal"
    MARKDOWN = "markdown"


FULL_COVERAGE: int = 100

# Policy defaults per call site: only the modified-only check is advisory.
DEFAULT_ESCALATION: dict[Check, Escalation] = {
    Check.TOTAL: Escalation.BLOCK,
    Check.CHANGED: Escalation.BLOCK,
    Check.ADDED: Escalation.BLOCK,
    Check.MODIFIED: Escalation.WARN,
}


__all__ = [
    "DEFAULT_ESCALATION",
    "FULL_COVERAGE",
    "Check",
    "CoverageService",
    "Escalation",
    "InputFormat",
]
