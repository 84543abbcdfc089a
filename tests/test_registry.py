"""Tests for lintseed.autoconfig.registry — candidate scoreboard and selection queries."""

from __future__ import annotations

import pytest

from lintseed.autoconfig.registry import Registry, RegistryEntry, create_configs_for_rules
from lintseed.autoconfig.schema import EnumOption, RuleConfig, Severity
from lintseed.infrastructure.catalog import DictRuleCatalog

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

SEVERITY_ONLY = RuleConfig(Severity.ERROR)
ALWAYS = RuleConfig(Severity.ERROR, ("always",))
NEVER = RuleConfig(Severity.ERROR, ("never",))


def _registry() -> Registry:
    return Registry(
        {
            "semi": [SEVERITY_ONLY, ALWAYS, NEVER],
            "no-tabs": [SEVERITY_ONLY],
        }
    )


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestConstruction:
    def test_wraps_configs_as_entries(self) -> None:
        registry = _registry()
        assert registry.rules["semi"] == (
            RegistryEntry(SEVERITY_ONLY, 1, 0),
            RegistryEntry(ALWAYS, 2, 0),
            RegistryEntry(NEVER, 2, 0),
        )
        assert registry.rule_ids() == ["semi", "no-tabs"]
        assert len(registry) == 2
        assert "semi" in registry

    def test_rules_view_is_read_only(self) -> None:
        registry = _registry()
        with pytest.raises(TypeError):
            registry.rules["semi"] = ()  # type: ignore[index]

    def test_create_configs_for_rules_applies_deny_list(self) -> None:
        catalog = DictRuleCatalog(
            {
                "semi": (EnumOption(("always", "never")),),
                "lines-around-comment": (EnumOption(("a", "b")),),
            }
        )
        configs = create_configs_for_rules(catalog, deny_list={"lines-around-comment"})
        assert list(configs) == ["semi"]
        assert configs["semi"] == [SEVERITY_ONLY, ALWAYS, NEVER]

    def test_from_catalog_with_severity(self) -> None:
        catalog = DictRuleCatalog({"no-tabs": ()})
        registry = Registry.from_catalog(catalog, severity=Severity.WARN)
        assert registry.entry("no-tabs", 0).config == RuleConfig(Severity.WARN)


# ---------------------------------------------------------------------------
# Mutation
# ---------------------------------------------------------------------------


class TestMutation:
    def test_record_error(self) -> None:
        registry = _registry()
        registry.record_error("semi", 2)
        registry.record_error("semi", 2, count=3)
        assert registry.entry("semi", 2).error_count == 4
        assert registry.entry("semi", 0).error_count == 0

    def test_discard_ignores_unknown_rules(self) -> None:
        registry = _registry()
        registry.discard(["semi", "missing"])
        assert registry.rule_ids() == ["no-tabs"]

    def test_untestable_rules(self) -> None:
        registry = Registry({"big": [SEVERITY_ONLY] * 17, "small": [SEVERITY_ONLY] * 16})
        assert registry.untestable_rules(16) == ["big"]

    def test_strip_failing_configs_keeps_error_free(self) -> None:
        registry = _registry()
        registry.record_error("semi", 2)
        registry.strip_failing_configs()
        assert [e.config for e in registry.rules["semi"]] == [SEVERITY_ONLY, ALWAYS]
        assert registry.dropped_rules == []

    def test_strip_failing_configs_removes_rule_without_safe_config(self) -> None:
        registry = _registry()
        for idx in range(3):
            registry.record_error("semi", idx)
        registry.strip_failing_configs()
        assert "semi" not in registry
        assert registry.dropped_rules == ["semi"]

    def test_strip_with_no_errors_strips_nothing(self) -> None:
        registry = _registry()
        registry.strip_failing_configs()
        assert registry.candidate_count("semi") == 3
        assert registry.candidate_count("no-tabs") == 1


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


class TestQueries:
    def test_rules_with_one_config(self) -> None:
        assert _registry().rules_with_one_config() == {"no-tabs": SEVERITY_ONLY}

    def test_rules_with_specificity_excludes_ties(self) -> None:
        registry = _registry()
        assert registry.rules_with_specificity(2) == {}
        assert registry.rules_with_specificity(1) == {
            "semi": SEVERITY_ONLY,
            "no-tabs": SEVERITY_ONLY,
        }

    def test_rules_with_specificity_after_strip(self) -> None:
        registry = _registry()
        registry.record_error("semi", 2)
        registry.strip_failing_configs()
        assert registry.rules_with_specificity(2) == {"semi": ALWAYS}

    def test_rules_with_specificity_no_match(self) -> None:
        assert _registry().rules_with_specificity(3) == {}
