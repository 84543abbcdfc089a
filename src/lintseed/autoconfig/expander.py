"""Schema expansion: enumerate every valid configuration of a rule."""

# lintseed:domain=autoconfig

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from lintseed.autoconfig.schema import (
    EnumOption,
    NotSupportedOption,
    ObjectOption,
    RuleConfig,
    Severity,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from lintseed.autoconfig.schema import OptionDescriptor

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Array helpers
# ---------------------------------------------------------------------------


def _as_list(item: Any) -> list[Any]:
    if isinstance(item, (list, tuple)):
        return list(item)
    return [item]


def explode_array(xs: Sequence[Any]) -> list[list[Any]]:
    """Wrap every element of *xs* in its own list."""
    return [[x] for x in xs]


def combine_arrays(arr1: Sequence[Any], arr2: Sequence[Any]) -> list[list[Any]]:
    """Concatenate each element of *arr2* onto each element of *arr1*.

    List elements are spliced, anything else (including dicts) is kept whole::

        combine_arrays([["a"], ["b", "c"]], ["x", "y"])
        # -> [["a", "x"], ["a", "y"], ["b", "c", "x"], ["b", "c", "y"]]
    """
    if not arr1:
        return explode_array(arr2)
    if not arr2:
        return explode_array(arr1)
    return [[*_as_list(x1), *_as_list(x2)] for x1 in arr1 for x2 in arr2]


# ---------------------------------------------------------------------------
# Object helpers
# ---------------------------------------------------------------------------


def group_by_property(objects: Sequence[dict[str, Any]]) -> list[list[dict[str, Any]]]:
    """Group single-key objects by their key, in first-seen key order.

    ``[{before: True}, {before: False}, {after: True}]`` becomes
    ``[[{before: True}, {before: False}], [{after: True}]]``.
    """
    grouped: dict[str, list[dict[str, Any]]] = {}
    for obj in objects:
        prop = next(iter(obj))
        grouped.setdefault(prop, []).append(obj)
    return list(grouped.values())


def combine_property_objects(
    objs1: Sequence[dict[str, Any]], objs2: Sequence[dict[str, Any]]
) -> list[dict[str, Any]]:
    """Merge every object of *objs1* with every object of *objs2*."""
    if not objs1:
        return list(objs2)
    if not objs2:
        return list(objs1)
    return [{**obj1, **obj2} for obj1 in objs1 for obj2 in objs2]


# ---------------------------------------------------------------------------
# Accumulator
# ---------------------------------------------------------------------------


class RuleConfigSet:
    """Accumulates option combinations for one rule, then adds a severity.

    For the ``semi`` rule (``enum: [always, never]``) the finished set is
    ``[2], [2, "always"], [2, "never"]``.
    """

    def __init__(self, configs: list[list[Any]] | None = None) -> None:
        self.rule_configs: list[list[Any]] = configs or []
        self._finished = False

    def _grow(self, values: Sequence[Any]) -> None:
        # Existing candidates are kept; each also spawns one extension per value.
        if not values:
            return
        self.rule_configs = self.rule_configs + combine_arrays(self.rule_configs, values)

    def add_enums(self, values: Sequence[Any]) -> None:
        """Add configs from an enum's values (e.g. ``["always", "never"]``)."""
        self._grow(values)

    def add_object(self, option: ObjectOption) -> None:
        """Add configs from an object option's enum and boolean properties."""
        single_key_objects: list[dict[str, Any]] = [
            {name: value} for name, prop in option.properties for value in prop.values
        ]
        combined: list[dict[str, Any]] = []
        for group in group_by_property(single_key_objects):
            combined = combine_property_objects(combined, group)
        self._grow(combined)

    def add_error_severity(self, severity: Severity = Severity.ERROR) -> None:
        """Prefix *severity* to every config and put a severity-only config first.

        Call once, after all options have been added.
        """
        if self._finished:
            msg = "severity has already been added to this config set"
            raise RuntimeError(msg)
        self.rule_configs = [[severity, *config] for config in self.rule_configs]
        self.rule_configs.insert(0, [severity])
        self._finished = True

    def to_rule_configs(self) -> list[RuleConfig]:
        return [RuleConfig(Severity(cfg[0]), tuple(cfg[1:])) for cfg in self.rule_configs]


def generate_configs_from_schema(
    schema: Sequence[OptionDescriptor],
    severity: Severity = Severity.ERROR,
    *,
    rule_id: str | None = None,
) -> list[RuleConfig]:
    """Return every valid configuration for a rule, in a deterministic order.

    The first entry is always the severity-only config, so a rule without
    options still gets exactly one candidate.
    """
    config_set = RuleConfigSet()
    for option in schema:
        if isinstance(option, EnumOption):
            config_set.add_enums(option.values)
        elif isinstance(option, ObjectOption):
            config_set.add_object(option)
        elif isinstance(option, NotSupportedOption):
            logger.debug("Skipping option of %s: %s", rule_id or "<rule>", option.reason)
    config_set.add_error_severity(severity)
    return config_set.to_rule_configs()
