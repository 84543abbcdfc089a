"""Rule set planning: pack per-rule candidates into linter invocations."""

# lintseed:domain=autoconfig

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lintseed.autoconfig.registry import Registry
    from lintseed.autoconfig.schema import RuleConfig

MAX_CONFIG_COMBINATIONS = 16

RuleSet = dict[str, "RuleConfig"]


def build_rule_sets(
    registry: Registry, max_combinations: int = MAX_CONFIG_COMBINATIONS
) -> list[RuleSet]:
    """Create rule sets that configure as many rules at once as possible.

    Rule set *i* holds the *i*-th candidate of every rule that has one, so
    the first set is the densest and later sets shrink as shorter candidate
    lists run out.  Rules with more than *max_combinations* candidates are
    left out of every set, which bounds the result to *max_combinations*
    sets.
    """
    eligible = [
        rule_id
        for rule_id in registry.rule_ids()
        if registry.candidate_count(rule_id) <= max_combinations
    ]

    rule_sets: list[RuleSet] = []
    idx = 0
    while True:
        rule_set: RuleSet = {
            rule_id: registry.entry(rule_id, idx).config
            for rule_id in eligible
            if idx < registry.candidate_count(rule_id)
        }
        if not rule_set:
            break
        rule_sets.append(rule_set)
        idx += 1
    return rule_sets
