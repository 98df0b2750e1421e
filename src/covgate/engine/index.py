"""Coverage index: the per-evaluation snapshot of a project's coverage records."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from covgate import logger
from covgate.errors import ProviderConfigError, ZeroTestableLinesError
from covgate.model.metrics import pct
from covgate.model.path_filter import IgnoreList

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from covgate.model.identity import ProjectIdentity
    from covgate.model.records import CoverageRecord


class CoverageProvider(Protocol):
    """Produces per-file line coverage for a configured project."""

    def list_coverage_files(self, identity: ProjectIdentity) -> Sequence[CoverageRecord]: ...


class CoverageIndex:
    """Ordered, immutable set of :class:`CoverageRecord` for one configured project.

    Record order is the provider's emission order. The total coverage is
    computed at most once per index; a new evaluation needs a new index.
    """

    def __init__(self, identity: ProjectIdentity, records: Iterable[CoverageRecord]) -> None:
        self._identity = identity
        self._records = tuple(records)
        self._by_path = {r.path: r for r in self._records}
        self._total: float | None = None

    @classmethod
    def open(cls, identity: ProjectIdentity, provider: CoverageProvider) -> CoverageIndex:
        """Invoke *provider* for *identity* and index its records.

        Records whose path matches the identity's ignore list are dropped.
        Raises :class:`ProviderConfigError` when the identity is malformed or the
        provider cannot produce results; no partial index is returned.
        """
        identity.validate()
        ignore = IgnoreList(identity.ignore_list)
        try:
            produced = provider.list_coverage_files(identity)
        except OSError as exc:
            msg = f"coverage provider failed for {identity.path}: {exc}"
            raise ProviderConfigError(msg) from exc
        records = ignore.apply(produced, key=lambda r: r.path)
        logger.debug(
            "opened coverage index for %s: %d records (%d ignored)",
            identity.display_name,
            len(records),
            len(produced) - len(records),
        )
        return cls(identity, records)

    @property
    def identity(self) -> ProjectIdentity:
        return self._identity

    def records(self) -> tuple[CoverageRecord, ...]:
        return self._records

    def __len__(self) -> int:
        return len(self._records)

    def get(self, path: str) -> CoverageRecord | None:
        return self._by_path.get(path)

    def percentage_of(self, path: str) -> float | None:
        """Coverage of one file, or ``None`` if unknown or without testable lines."""
        record = self._by_path.get(path)
        return None if record is None else record.percentage

    def total_coverage(self) -> float:
        """Project-wide line coverage: ``sum(tested) / sum(testable) * 100``.

        Raises :class:`ZeroTestableLinesError` when the project has no testable line.
        """
        if self._total is None:
            tested = sum(r.lines_tested for r in self._records)
            testable = sum(r.lines_testable for r in self._records)
            total = pct(tested, testable)
            if total is None:
                msg = f"{self._identity.display_name} has no testable lines; total coverage is undefined"
                raise ZeroTestableLinesError(msg)
            self._total = total
        return self._total


__all__ = ["CoverageIndex", "CoverageProvider"]
