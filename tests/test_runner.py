"""Tests for lintseed.autoconfig.runner — linting the corpus with every rule set."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import pytest

from lintseed.autoconfig.engine import Diagnostic
from lintseed.autoconfig.expander import generate_configs_from_schema
from lintseed.autoconfig.planner import build_rule_sets
from lintseed.autoconfig.registry import Registry
from lintseed.autoconfig.runner import lint_with_configs
from lintseed.autoconfig.schema import EnumOption

if TYPE_CHECKING:
    from collections.abc import Mapping

    from tests.conftest import StyleEngine


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def registry() -> Registry:
    """Registry with a three-candidate ``semi`` and a one-candidate ``no-tabs``."""
    return Registry(
        {
            "semi": generate_configs_from_schema((EnumOption(("always", "never")),)),
            "no-tabs": generate_configs_from_schema(()),
        }
    )


class CrashingEngine:
    """Raises on every call made with rule set carrying ``semi: never``."""

    def __init__(self) -> None:
        self.calls = 0

    def verify(self, source: str, config: Mapping[str, Any]) -> list[Diagnostic]:
        self.calls += 1
        if config["rules"].get("semi") == [2, "never"]:
            msg = "parser exploded"
            raise RuntimeError(msg)
        return [Diagnostic(rule_id="semi")]


class NoisyEngine:
    """Reports diagnostics the runner cannot attribute."""

    def verify(self, source: str, config: Mapping[str, Any]) -> list[Diagnostic]:
        return [
            Diagnostic(rule_id=None, message="Parsing error"),
            Diagnostic(rule_id="not-in-rule-set"),
        ]


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestLintWithConfigs:
    def test_diagnostics_charged_to_matching_candidate(
        self, registry: Registry, style_engine: StyleEngine, corpus: dict[str, str]
    ) -> None:
        rule_sets = build_rule_sets(registry)
        stats = lint_with_configs(corpus.items(), {}, rule_sets, registry, style_engine)

        errors = [entry.error_count for entry in registry.rules["semi"]]
        # Three non-blank lines, all ending with ";", so only "never" fails.
        assert errors == [0, 0, 3]
        assert registry.rules["no-tabs"][0].error_count == 0
        assert stats.files_linted == 2
        assert stats.invocations == 2 * len(rule_sets)
        assert stats.diagnostics == 3
        assert stats.failures == 0

    def test_engine_receives_base_config_with_rule_set(
        self, registry: Registry, style_engine: StyleEngine
    ) -> None:
        rule_sets = build_rule_sets(registry)
        base = {"env": {"browser": True}, "rules": {"ignored": 2}}
        lint_with_configs([("a.js", "x;\n")], base, rule_sets, registry, style_engine)

        assert style_engine.calls[0] == {
            "env": {"browser": True},
            "rules": {"semi": 2, "no-tabs": 2},
        }
        assert style_engine.calls[1]["rules"] == {"semi": [2, "always"]}
        assert style_engine.calls[2]["rules"] == {"semi": [2, "never"]}
        assert base["rules"] == {"ignored": 2}

    def test_failure_is_logged_and_run_continues(
        self, registry: Registry, caplog: pytest.LogCaptureFixture
    ) -> None:
        engine = CrashingEngine()
        rule_sets = build_rule_sets(registry)
        corpus = [("a.js", "x\n"), ("b.js", "y\n")]

        with caplog.at_level(logging.WARNING, logger="lintseed.autoconfig.runner"):
            stats = lint_with_configs(corpus, {}, rule_sets, registry, engine)

        assert engine.calls == 6
        assert stats.failures == 2
        # The crashing candidate is not penalized.
        assert [e.error_count for e in registry.rules["semi"]] == [2, 2, 0]
        assert "parser exploded" in caplog.text

    def test_unattributable_diagnostics_are_ignored(self, registry: Registry) -> None:
        rule_sets = build_rule_sets(registry)
        stats = lint_with_configs([("a.js", "x")], {}, rule_sets, registry, NoisyEngine())

        assert stats.ignored_diagnostics == 2 * len(rule_sets)
        assert stats.diagnostics == 0
        assert all(e.error_count == 0 for e in registry.rules["semi"])

    def test_empty_corpus_leaves_counts_at_zero(
        self, registry: Registry, style_engine: StyleEngine
    ) -> None:
        stats = lint_with_configs([], {}, build_rule_sets(registry), registry, style_engine)
        assert stats.files_linted == 0
        assert style_engine.calls == []
        assert all(e.error_count == 0 for entries in registry.rules.values() for e in entries)

    def test_corpus_is_consumed_lazily(self, registry: Registry, style_engine: StyleEngine) -> None:
        seen: list[str] = []

        def _files():
            for name in ("a.js", "b.js"):
                seen.append(name)
                # Every rule set for the previous file ran before the next is read.
                assert len(style_engine.calls) == 3 * (len(seen) - 1)
                yield name, "x;\n"

        lint_with_configs(_files(), {}, build_rule_sets(registry), registry, style_engine)
        assert seen == ["a.js", "b.js"]
