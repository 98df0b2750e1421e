"""Centralised exception hierarchy for covgate."""

from __future__ import annotations


class CovgateError(Exception):
    """Base class for all custom covgate exceptions."""


class ProviderConfigError(CovgateError):
    """Project identity is malformed or the provider cannot produce coverage results."""


class CoverageReportNotFoundError(ProviderConfigError):
    """Coverage report could not be located on disk."""


class InvalidCoverageReportError(ProviderConfigError):
    """Coverage report was found but does not contain a valid report."""


class ZeroTestableLinesError(CovgateError):
    """Coverage was requested for a set of records without any testable line."""


class ChangeSetError(CovgateError):
    """The version-control collaborator failed to report the change-set."""


class ConfigFileError(CovgateError):
    """``[tool.covgate]`` configuration contains invalid values."""


__all__ = [
    "ChangeSetError",
    "ConfigFileError",
    "CovgateError",
    "CoverageReportNotFoundError",
    "InvalidCoverageReportError",
    "ProviderConfigError",
    "ZeroTestableLinesError",
]
