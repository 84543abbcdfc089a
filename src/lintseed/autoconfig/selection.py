"""Selection policy: turn a scored registry into one config per rule."""

# lintseed:domain=autoconfig

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

    from lintseed.autoconfig.registry import Registry
    from lintseed.autoconfig.schema import RuleConfig

# Lowest confidence first; later levels override earlier ones.
SPECIFICITY_PREFERENCE: tuple[int, ...] = (1, 3, 2)


def select_rule_configs(registry: Registry, *, strip: bool = True) -> dict[str, RuleConfig]:
    """Pick one error-free config per rule where the choice is unambiguous.

    Priority, highest last:

    1. severity only, when nothing more specific is unique;
    2. a unique three-element config;
    3. a unique two-element config (severity plus one option), which tends to
       be the most useful;
    4. the only surviving config of a rule.

    Rules with no error-free config, or with ties at every level, are missing
    from the result.
    """
    if strip:
        registry.strip_failing_configs()

    selected: dict[str, RuleConfig] = {}
    for specificity in SPECIFICITY_PREFERENCE:
        selected.update(registry.rules_with_specificity(specificity))
    selected.update(registry.rules_with_one_config())
    return selected


def unresolved_rules(registry: Registry, selected: Mapping[str, RuleConfig]) -> list[str]:
    """Rules that still have error-free configs but no unambiguous pick."""
    return [rule_id for rule_id in registry.rule_ids() if rule_id not in selected]
