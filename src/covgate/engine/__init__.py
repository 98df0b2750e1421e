"""Coverage aggregation, change-set intersection and threshold policy."""

from covgate.engine.changeset import ChangeKind, ChangeSet, ChangeSetSource, VcsSnapshot, resolve
from covgate.engine.evaluate import evaluate_files, evaluate_total, route
from covgate.engine.index import CoverageIndex, CoverageProvider
from covgate.engine.session import ConfigurationState, CoverageSession, Ready, SessionState, Unconfigured

__all__ = [
    "ChangeKind",
    "ChangeSet",
    "ChangeSetSource",
    "ConfigurationState",
    "CoverageIndex",
    "CoverageProvider",
    "CoverageSession",
    "Ready",
    "SessionState",
    "Unconfigured",
    "VcsSnapshot",
    "evaluate_files",
    "evaluate_total",
    "resolve",
    "route",
]
