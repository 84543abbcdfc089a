"""Candidate registry: per-rule scoreboard of configurations and error counts."""

# lintseed:domain=autoconfig

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import TYPE_CHECKING

from lintseed.autoconfig.expander import generate_configs_from_schema
from lintseed.autoconfig.schema import Severity

if TYPE_CHECKING:
    from collections.abc import Collection, Iterable, Mapping, Sequence

    from lintseed.autoconfig.schema import RuleConfig, Specificity
    from lintseed.infrastructure.catalog import RuleCatalog

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RegistryEntry:
    """A candidate configuration and the diagnostics it produced."""

    config: RuleConfig
    specificity: Specificity
    error_count: int = 0


# ---------------------------------------------------------------------------
# Candidate generation
# ---------------------------------------------------------------------------


def create_configs_for_rules(
    catalog: RuleCatalog,
    deny_list: Collection[str] = (),
    severity: Severity = Severity.ERROR,
) -> dict[str, list[RuleConfig]]:
    """Expand the schema of every catalog rule not on *deny_list*."""
    denied = frozenset(deny_list)
    configs: dict[str, list[RuleConfig]] = {}
    for rule_id in catalog.rule_ids():
        if rule_id in denied:
            logger.debug("Rule %s is deny-listed, not generating configs", rule_id)
            continue
        configs[rule_id] = generate_configs_from_schema(
            catalog.get_schema(rule_id), severity, rule_id=rule_id
        )
    return configs


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class Registry:
    """Per-rule candidate lists in generation order, with error counts.

    Error counts change only through :meth:`record_error`; everything else
    reads the immutable :attr:`rules` view.
    """

    def __init__(self, rules_config: Mapping[str, Sequence[RuleConfig]]) -> None:
        self._rules: dict[str, list[RegistryEntry]] = {
            rule_id: [
                RegistryEntry(config=config, specificity=config.specificity)
                for config in configs
            ]
            for rule_id, configs in rules_config.items()
        }
        self.dropped_rules: list[str] = []

    @classmethod
    def from_catalog(
        cls,
        catalog: RuleCatalog,
        deny_list: Collection[str] = (),
        severity: Severity = Severity.ERROR,
    ) -> Registry:
        """Build a registry covering the whole catalog minus *deny_list*."""
        return cls(create_configs_for_rules(catalog, deny_list, severity))

    # -- views ---------------------------------------------------------------

    @property
    def rules(self) -> Mapping[str, tuple[RegistryEntry, ...]]:
        return MappingProxyType({rid: tuple(entries) for rid, entries in self._rules.items()})

    def rule_ids(self) -> list[str]:
        return list(self._rules)

    def __contains__(self, rule_id: object) -> bool:
        return rule_id in self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def candidate_count(self, rule_id: str) -> int:
        return len(self._rules[rule_id])

    def entry(self, rule_id: str, index: int) -> RegistryEntry:
        return self._rules[rule_id][index]

    # -- mutation ------------------------------------------------------------

    def record_error(self, rule_id: str, index: int, count: int = 1) -> None:
        """Add *count* diagnostics to the *index*-th candidate of *rule_id*."""
        entries = self._rules[rule_id]
        entries[index] = replace(entries[index], error_count=entries[index].error_count + count)

    def discard(self, rule_ids: Iterable[str]) -> None:
        """Remove rules from the registry, ignoring unknown ids."""
        for rule_id in rule_ids:
            self._rules.pop(rule_id, None)

    def untestable_rules(self, max_combinations: int) -> list[str]:
        """Rules with more candidates than a rule set plan can carry."""
        return [rid for rid, entries in self._rules.items() if len(entries) > max_combinations]

    def strip_failing_configs(self) -> None:
        """Keep only error-free candidates; delete rules left with none."""
        for rule_id in list(self._rules):
            error_free = [entry for entry in self._rules[rule_id] if entry.error_count == 0]
            if error_free:
                self._rules[rule_id] = error_free
            else:
                del self._rules[rule_id]
                self.dropped_rules.append(rule_id)
                logger.debug("No error-free config for %s", rule_id)

    # -- queries -------------------------------------------------------------

    def rules_with_one_config(self) -> dict[str, RuleConfig]:
        """Rules whose candidate list has exactly one entry."""
        return {
            rule_id: entries[0].config
            for rule_id, entries in self._rules.items()
            if len(entries) == 1
        }

    def rules_with_specificity(self, specificity: int) -> dict[str, RuleConfig]:
        """Rules with exactly one candidate at *specificity*.

        Several candidates at the same specificity leave the rule out; there
        is no tie-break.
        """
        result: dict[str, RuleConfig] = {}
        for rule_id, entries in self._rules.items():
            matching = [entry for entry in entries if entry.specificity == specificity]
            if len(matching) == 1:
                result[rule_id] = matching[0].config
        return result
