"""One evaluation session: configuration state plus the notify/show entry points."""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import TYPE_CHECKING

from covgate import logger
from covgate.engine.changeset import ChangeSet, ChangeSetSource, resolve
from covgate.engine.evaluate import evaluate_files, evaluate_total, route
from covgate.engine.index import CoverageIndex, CoverageProvider
from covgate.errors import ProviderConfigError
from covgate.model.types import DEFAULT_ESCALATION, Check, Escalation
from covgate.render.markdown import full_report, modified_files_table, total_coverage_heading

if TYPE_CHECKING:
    from collections.abc import Mapping

    from covgate.adapters.sinks.base import ReportSink
    from covgate.model.identity import ProjectIdentity
    from covgate.model.violations import ThresholdPolicy, Violation


@dataclass(slots=True)
class ConfigurationState:
    """Identity of the last configured project; survives :meth:`CoverageSession.reset`."""

    identity: ProjectIdentity | None = None


class Unconfigured:
    """No coverage index is loaded; queries return empty results."""

    def __repr__(self) -> str:
        return "Unconfigured()"


class Ready:
    """A loaded index and its lazily resolved change-set."""

    def __init__(self, index: CoverageIndex, vcs: ChangeSetSource) -> None:
        self.index = index
        self._vcs = vcs

    @cached_property
    def change_set(self) -> ChangeSet:
        return resolve(self.index, self._vcs)

    def __repr__(self) -> str:
        return f"Ready({self.index.identity.display_name!r}, records={len(self.index)})"


SessionState = Unconfigured | Ready


class CoverageSession:
    """Evaluate one configured project against coverage thresholds.

    Construct one session per CI run. :meth:`configure` stores the project
    identity and opens a coverage index; every ``notify_*`` check reopens the
    index from the stored identity so that it runs against its own scope
    (the total check ignores the ignore list, file checks apply it).
    """

    def __init__(self, provider: CoverageProvider, vcs: ChangeSetSource, sink: ReportSink) -> None:
        self.provider = provider
        self.vcs = vcs
        self.sink = sink
        self.config = ConfigurationState()
        self.state: SessionState = Unconfigured()

    # ------------------------------------------------------------------ #
    # configuration                                                      #
    # ------------------------------------------------------------------ #

    def configure(self, identity: ProjectIdentity) -> None:
        """Open an index for *identity* and store it; a failed open leaves the session unconfigured."""
        self.state = Unconfigured()
        index = CoverageIndex.open(identity.validate(), self.provider)
        self.config.identity = identity
        self.state = Ready(index, self.vcs)
        if identity.post:
            self.show_coverage()

    def reset(self) -> None:
        """Drop the loaded index and every cached view; keep the stored identity."""
        self.state = Unconfigured()

    def reconfigure(self, *, include_ignore_list: bool, provider: CoverageProvider | None = None) -> Ready:
        """Reopen the index from the stored identity, optionally with another provider."""
        if self.config.identity is None:
            msg = "no project identity stored; call configure() first"
            raise ProviderConfigError(msg)
        if provider is not None:
            self.provider = provider
        identity = self.config.identity.scoped(include_ignore_list=include_ignore_list)
        self.state = Unconfigured()
        state = Ready(CoverageIndex.open(identity, self.provider), self.vcs)
        self.state = state
        return state

    @property
    def index(self) -> CoverageIndex | None:
        state = self.state
        return state.index if isinstance(state, Ready) else None

    @property
    def change_set(self) -> ChangeSet | None:
        state = self.state
        return state.change_set if isinstance(state, Ready) else None

    # ------------------------------------------------------------------ #
    # queries                                                            #
    # ------------------------------------------------------------------ #

    def total_coverage(self) -> float | None:
        state = self.state
        if isinstance(state, Ready):
            return state.index.total_coverage()
        return None

    # ------------------------------------------------------------------ #
    # threshold checks                                                   #
    # ------------------------------------------------------------------ #

    def notify_if_coverage_is_less_than(
        self, minimum: float, level: Escalation = DEFAULT_ESCALATION[Check.TOTAL]
    ) -> list[Violation]:
        if self.config.identity is None:
            return []
        state = self.reconfigure(include_ignore_list=False)
        violation = evaluate_total(state.index, minimum, level)
        found = [] if violation is None else [violation]
        route(found, self.sink)
        return found

    def notify_if_modified_file_is_less_than(
        self, minimum: float, level: Escalation = DEFAULT_ESCALATION[Check.CHANGED]
    ) -> list[Violation]:
        """Check every added or modified file."""
        return self._notify_files(Check.CHANGED, minimum, level)

    def notify_if_only_added_file_is_less_than(
        self, minimum: float, level: Escalation = DEFAULT_ESCALATION[Check.ADDED]
    ) -> list[Violation]:
        return self._notify_files(Check.ADDED, minimum, level)

    def notify_if_only_modified_file_is_less_than(
        self, minimum: float, level: Escalation = DEFAULT_ESCALATION[Check.MODIFIED]
    ) -> list[Violation]:
        return self._notify_files(Check.MODIFIED, minimum, level)

    def _notify_files(self, check: Check, minimum: float, level: Escalation) -> list[Violation]:
        if self.config.identity is None:
            return []
        changes = self.reconfigure(include_ignore_list=True).change_set
        if check is Check.CHANGED:
            view = changes.added_or_modified
        elif check is Check.ADDED:
            view = changes.added_only
        else:
            view = changes.modified_only
        found = evaluate_files(view, minimum, level)
        logger.debug("%s check: %d files, %d below %s%%", check.value, len(view), len(found), minimum)
        route(found, self.sink)
        return found

    def run_checks(self, policies: Mapping[Check, ThresholdPolicy]) -> list[Violation]:
        """Apply every configured policy in a fixed order and collect the violations."""
        runners = {
            Check.TOTAL: self.notify_if_coverage_is_less_than,
            Check.CHANGED: self.notify_if_modified_file_is_less_than,
            Check.ADDED: self.notify_if_only_added_file_is_less_than,
            Check.MODIFIED: self.notify_if_only_modified_file_is_less_than,
        }
        found: list[Violation] = []
        for check in Check:
            policy = policies.get(check)
            if policy is not None:
                found.extend(runners[check](policy.minimum, policy.escalation))
        return found

    # ------------------------------------------------------------------ #
    # rendering                                                          #
    # ------------------------------------------------------------------ #

    def total_coverage_markdown(self) -> str | None:
        index = self.index
        return None if index is None else total_coverage_heading(index)

    def modified_files_coverage_table(self) -> str | None:
        state = self.state
        if not isinstance(state, Ready):
            return None
        return modified_files_table(state.change_set.added_or_modified, state.index.identity.decimal_precision)

    def show_total_coverage(self) -> str | None:
        text = self.total_coverage_markdown()
        if text is not None:
            self.sink.post_markdown_block(text)
        return text

    def show_modified_files_coverage(self) -> str | None:
        text = self.modified_files_coverage_table()
        if text is not None:
            self.sink.post_markdown_block(text)
        return text

    def show_coverage(self) -> str | None:
        state = self.state
        if not isinstance(state, Ready):
            return None
        text = full_report(state.index, state.change_set.added_or_modified, state.index.identity.display_name)
        self.sink.post_markdown_block(text)
        return text


__all__ = ["ConfigurationState", "CoverageSession", "Ready", "SessionState", "Unconfigured"]
