"""Evaluation runner: lint the corpus with every rule set and score candidates."""

# lintseed:domain=autoconfig

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from lintseed.autoconfig.engine import LinterEngine
    from lintseed.autoconfig.planner import RuleSet
    from lintseed.autoconfig.registry import Registry

logger = logging.getLogger(__name__)


@dataclass
class EvaluationStats:
    """Counters collected while linting the corpus."""

    files_linted: int = 0
    invocations: int = 0
    failures: int = 0
    diagnostics: int = 0
    ignored_diagnostics: int = 0


def _lint_config(base_config: Mapping[str, Any], rule_set: RuleSet) -> dict[str, Any]:
    """Base config with its rules replaced by the rule set's native configs."""
    config = dict(base_config)
    config["rules"] = {rule_id: cfg.as_native() for rule_id, cfg in rule_set.items()}
    return config


def lint_with_configs(
    corpus: Iterable[tuple[str, str]],
    base_config: Mapping[str, Any],
    rule_sets: Sequence[RuleSet],
    registry: Registry,
    engine: LinterEngine,
) -> EvaluationStats:
    """Lint each corpus file once per rule set, charging diagnostics to candidates.

    A diagnostic from rule set *i* counts against the *i*-th candidate of its
    rule.  An engine failure for one (file, rule set) pair is logged and
    counts as no diagnostics.  Files are pulled from *corpus* one at a time
    and dropped after their last rule set, so only one file is held in
    memory.

    The registry is only meaningful once this returns.
    """
    stats = EvaluationStats()
    lint_configs = [_lint_config(base_config, rule_set) for rule_set in rule_sets]

    logger.debug("Linting with %d rule sets", len(rule_sets))
    for filename, source in corpus:
        logger.debug("Linting file: %s", filename)
        for rule_set_idx, rule_set in enumerate(rule_sets):
            stats.invocations += 1
            try:
                diagnostics = engine.verify(source, lint_configs[rule_set_idx])
            except Exception as exc:
                stats.failures += 1
                logger.warning(
                    "Linting %s with rule set %d failed: %s", filename, rule_set_idx, exc
                )
                continue

            for diagnostic in diagnostics:
                rule_id = diagnostic.rule_id
                if rule_id is None or rule_id not in rule_set:
                    stats.ignored_diagnostics += 1
                    logger.debug(
                        "Ignoring diagnostic outside rule set %d in %s: %s",
                        rule_set_idx,
                        filename,
                        rule_id,
                    )
                    continue
                registry.record_error(rule_id, rule_set_idx)
                stats.diagnostics += 1
        stats.files_linted += 1
        del source

    return stats
