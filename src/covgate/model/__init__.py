"""Domain model for covgate (pure types + policy; no IO)."""

from .identity import ProjectIdentity
from .metrics import format_minimum, format_percent, pct
from .path_filter import IgnoreList
from .records import CoverageRecord
from .types import DEFAULT_ESCALATION, FULL_COVERAGE, Check, CoverageService, Escalation, InputFormat
from .violations import ThresholdPolicy, Violation

__all__ = [
    "DEFAULT_ESCALATION",
    "FULL_COVERAGE",
    "Check",
    "CoverageRecord",
    "CoverageService",
    "Escalation",
    "IgnoreList",
    "InputFormat",
    "ProjectIdentity",
    "ThresholdPolicy",
    "Violation",
    "format_minimum",
    "format_percent",
    "pct",
]
