"""Project identity: the opaque configuration bag handed to coverage providers."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path

from covgate.errors import ProviderConfigError
from covgate.model.types import CoverageService, InputFormat


@dataclass(frozen=True, slots=True)
class ProjectIdentity:
    """Everything needed to reproduce one project's coverage results.

    ``path``, ``scheme``, ``workspace`` and ``ignore_list`` identify the project;
    the remaining fields tell the provider where its raw output lives and how
    results are presented.
    """

    path: Path
    scheme: str = ""
    workspace: str | None = None
    build_directory: Path | None = None
    output_directory: Path | None = None
    source_directory: Path | None = None
    input_format: str = InputFormat.COBERTURA
    binary_file: tuple[Path, ...] = ()
    binary_basename: str | None = None
    decimal_precision: int | None = None
    ignore_list: tuple[str, ...] = field(default_factory=tuple)
    ci_service: str | None = None
    coverage_access_token: str | None = field(default=None, repr=False)
    coverage_service: str = CoverageService.TERMINAL
    post: bool = False

    def validate(self) -> ProjectIdentity:
        """Return *self* or raise :class:`ProviderConfigError` if a field is malformed."""
        if not str(self.path).strip():
            msg = "project path must be non-empty"
            raise ProviderConfigError(msg)
        try:
            InputFormat(str(self.input_format).lower())
        except ValueError as exc:
            choices = ", ".join(f.value for f in InputFormat)
            msg = f"unsupported input format {self.input_format!r}; expected one of: {choices}"
            raise ProviderConfigError(msg) from exc
        try:
            CoverageService(str(self.coverage_service).lower())
        except ValueError as exc:
            choices = ", ".join(s.value for s in CoverageService)
            msg = f"unsupported coverage service {self.coverage_service!r}; expected one of: {choices}"
            raise ProviderConfigError(msg) from exc
        if self.decimal_precision is not None and self.decimal_precision < 0:
            msg = f"decimal precision must be non-negative: {self.decimal_precision}"
            raise ProviderConfigError(msg)
        if any(not str(p).strip() for p in self.ignore_list):
            msg = "ignore list entries must be non-empty patterns"
            raise ProviderConfigError(msg)
        return self

    def scoped(self, *, include_ignore_list: bool) -> ProjectIdentity:
        """Copy of this identity, optionally without its ignore list."""
        if include_ignore_list:
            return self
        return replace(self, ignore_list=())

    @property
    def display_name(self) -> str:
        return self.scheme or self.path.name


__all__ = ["ProjectIdentity"]
