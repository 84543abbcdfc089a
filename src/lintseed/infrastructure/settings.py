"""Autoconfig settings: deny-list, rule set cap, severity, base config."""

# lintseed:domain=infrastructure

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

import yaml

from lintseed.autoconfig.planner import MAX_CONFIG_COMBINATIONS
from lintseed.autoconfig.schema import Severity

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

logger = logging.getLogger(__name__)

_SEVERITY_NAMES: dict[str, Severity] = {
    "off": Severity.OFF,
    "warn": Severity.WARN,
    "error": Severity.ERROR,
}


@dataclass(frozen=True)
class AutoconfigSettings:
    """Knobs for one autoconfig session.

    Configurable via the ``autoconfig`` section of ``lintseed.yml``.
    """

    # Rules never expanded, e.g. those whose schemas explode combinatorially.
    deny_list: frozenset[str] = frozenset()
    max_config_combinations: int = MAX_CONFIG_COMBINATIONS
    default_severity: Severity = Severity.ERROR
    # Non-rule linter settings (parser options, environments, ...).
    base_config: dict[str, Any] = field(default_factory=dict)

    def with_overrides(
        self,
        *,
        deny: Iterable[str] = (),
        max_config_combinations: int | None = None,
    ) -> AutoconfigSettings:
        """Return a copy with CLI-style overrides applied."""
        updated = replace(self, deny_list=self.deny_list | frozenset(deny))
        if max_config_combinations is not None:
            updated = replace(updated, max_config_combinations=max_config_combinations)
        return updated


def _parse_severity(value: object) -> Severity:
    if isinstance(value, bool):
        msg = f"Invalid default_severity: {value!r}"
        raise ValueError(msg)
    if isinstance(value, int):
        try:
            return Severity(value)
        except ValueError:
            msg = f"Invalid default_severity: {value!r}, must be 0, 1 or 2"
            raise ValueError(msg) from None
    if isinstance(value, str) and value.lower() in _SEVERITY_NAMES:
        return _SEVERITY_NAMES[value.lower()]
    msg = f"Invalid default_severity: {value!r}, must be one of {sorted(_SEVERITY_NAMES)}"
    raise ValueError(msg)


def parse_settings(section: dict[str, Any]) -> AutoconfigSettings:
    """Build settings from an ``autoconfig`` mapping, validating each key."""
    kwargs: dict[str, Any] = {}

    if "deny_list" in section:
        deny = section["deny_list"] or []
        if not isinstance(deny, list):
            msg = "autoconfig.deny_list must be a list of rule ids"
            raise ValueError(msg)
        kwargs["deny_list"] = frozenset(str(rule_id) for rule_id in deny)

    if "max_config_combinations" in section:
        cap = section["max_config_combinations"]
        if isinstance(cap, bool) or not isinstance(cap, int) or cap < 1:
            msg = f"autoconfig.max_config_combinations must be a positive integer, got {cap!r}"
            raise ValueError(msg)
        kwargs["max_config_combinations"] = cap

    if "default_severity" in section:
        kwargs["default_severity"] = _parse_severity(section["default_severity"])

    if "base_config" in section:
        base = section["base_config"] or {}
        if not isinstance(base, dict):
            msg = "autoconfig.base_config must be a mapping"
            raise ValueError(msg)
        kwargs["base_config"] = dict(base)

    return AutoconfigSettings(**kwargs)


def load_settings(config_path: Path | None) -> AutoconfigSettings:
    """Load settings from the ``autoconfig`` section of a YAML file.

    Falls back to defaults, with a warning, for a missing file, unreadable
    YAML, or a missing section.  Present but invalid values raise ``ValueError``.
    """
    if config_path is None:
        return AutoconfigSettings()
    if not config_path.is_file():
        logger.warning("Settings file %s not found, using defaults", config_path)
        return AutoconfigSettings()

    try:
        with config_path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError):
        logger.warning("Failed to read %s, using default settings", config_path)
        return AutoconfigSettings()

    if not isinstance(data, dict):
        logger.warning("%s is not a YAML mapping, using default settings", config_path)
        return AutoconfigSettings()

    section = data.get("autoconfig")
    if not isinstance(section, dict):
        logger.warning("No autoconfig section in %s, using default settings", config_path)
        return AutoconfigSettings()

    return parse_settings(section)
