"""Central configuration and ``[tool.covgate]`` loading."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from covgate import logger
from covgate.errors import ConfigFileError
from covgate.model.types import DEFAULT_ESCALATION, Check, Escalation
from covgate.model.violations import ThresholdPolicy

# Default logging format used by the CLI entry point.
LOG_FORMAT = "%(levelname)s: %(message)s"

_STR_FIELDS = frozenset(
    {"scheme", "workspace", "binary_basename", "input_format", "ci_service", "coverage_service"}
)
_PATH_FIELDS = frozenset({"build_directory", "output_directory", "source_directory"})
_ALIASES = {"decimals": "decimal_precision", "ignore": "ignore_list"}

_ESCALATION_ALIASES = {
    "block": Escalation.BLOCK,
    "fail": Escalation.BLOCK,
    "error": Escalation.BLOCK,
    "warn": Escalation.WARN,
    "warning": Escalation.WARN,
}


@dataclass(frozen=True, slots=True)
class FileConfig:
    """Settings read from ``pyproject.toml``.

    ``settings`` holds :class:`~covgate.model.identity.ProjectIdentity` keyword
    arguments; ``thresholds`` the configured checks.
    """

    settings: dict[str, Any] = field(default_factory=dict)
    thresholds: dict[Check, ThresholdPolicy] = field(default_factory=dict)


def parse_escalation(value: str) -> Escalation:
    try:
        return _ESCALATION_ALIASES[value.strip().lower()]
    except KeyError as exc:
        msg = f"unknown escalation level {value!r}; expected 'block' or 'warn'"
        raise ValueError(msg) from exc


def parse_policy(check: Check, value: object) -> ThresholdPolicy:
    """Build a policy from ``80`` or ``{minimum = 80, level = "warn"}``."""
    level = DEFAULT_ESCALATION[check]
    if isinstance(value, dict):
        if "minimum" not in value:
            msg = f"threshold {check.value!r} needs a 'minimum'"
            raise ConfigFileError(msg)
        raw_level = value.get("level")
        if raw_level is not None:
            if not isinstance(raw_level, str):
                msg = f"threshold {check.value!r}: level must be a string"
                raise ConfigFileError(msg)
            try:
                level = parse_escalation(raw_level)
            except ValueError as exc:
                raise ConfigFileError(str(exc)) from exc
        value = value["minimum"]
    if isinstance(value, bool) or not isinstance(value, int | float):
        msg = f"threshold {check.value!r}: minimum must be a number, got {value!r}"
        raise ConfigFileError(msg)
    try:
        return ThresholdPolicy(minimum=float(value), escalation=level)
    except ValueError as exc:
        msg = f"threshold {check.value!r}: {exc}"
        raise ConfigFileError(msg) from exc


def _coerce_field(key: str, value: object) -> tuple[str, Any]:
    key = _ALIASES.get(key, key)
    if key in _STR_FIELDS:
        if not isinstance(value, str):
            msg = f"[tool.covgate] {key} must be a string"
            raise ConfigFileError(msg)
        return key, value
    if key in _PATH_FIELDS:
        if not isinstance(value, str):
            msg = f"[tool.covgate] {key} must be a path string"
            raise ConfigFileError(msg)
        return key, Path(value)
    if key == "binary_file":
        items = [value] if isinstance(value, str) else value
        if not isinstance(items, list) or not all(isinstance(v, str) for v in items):
            msg = "[tool.covgate] binary_file must be a path or a list of paths"
            raise ConfigFileError(msg)
        return key, tuple(Path(v) for v in items)
    if key == "ignore_list":
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            msg = "[tool.covgate] ignore_list must be a list of patterns"
            raise ConfigFileError(msg)
        return key, tuple(value)
    if key == "decimal_precision":
        if isinstance(value, bool) or not isinstance(value, int):
            msg = "[tool.covgate] decimals must be an integer"
            raise ConfigFileError(msg)
        return key, value
    if key == "post":
        if not isinstance(value, bool):
            msg = "[tool.covgate] post must be a boolean"
            raise ConfigFileError(msg)
        return key, value
    msg = f"unknown [tool.covgate] setting: {key!r}"
    raise ConfigFileError(msg)


def load_config(pyproject: Path) -> FileConfig:
    """Read ``[tool.covgate]`` from *pyproject*.

    A missing file or section yields defaults. An unreadable file is reported
    and ignored; invalid values raise :class:`ConfigFileError`.
    """
    if not pyproject.exists():
        return FileConfig()
    try:
        with pyproject.open("rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Failed to parse %s: %s", pyproject, e)
        return FileConfig()

    section = data.get("tool", {}).get("covgate", {})
    if not isinstance(section, dict):
        msg = "[tool.covgate] must be a table"
        raise ConfigFileError(msg)

    settings: dict[str, Any] = {}
    for key, value in section.items():
        if key == "thresholds":
            continue
        name, coerced = _coerce_field(key, value)
        settings[name] = coerced

    raw_thresholds = section.get("thresholds", {})
    if not isinstance(raw_thresholds, dict):
        msg = "[tool.covgate.thresholds] must be a table"
        raise ConfigFileError(msg)
    thresholds: dict[Check, ThresholdPolicy] = {}
    for name, value in raw_thresholds.items():
        try:
            check = Check(name)
        except ValueError as exc:
            choices = ", ".join(c.value for c in Check)
            msg = f"unknown threshold {name!r}; expected one of: {choices}"
            raise ConfigFileError(msg) from exc
        thresholds[check] = parse_policy(check, value)

    logger.debug("loaded [tool.covgate] from %s: %s", pyproject, sorted(settings))
    return FileConfig(settings=settings, thresholds=thresholds)


__all__ = ["LOG_FORMAT", "FileConfig", "load_config", "parse_escalation", "parse_policy"]
