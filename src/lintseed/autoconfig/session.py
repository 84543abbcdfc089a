"""Autoconfig orchestrator: expand, plan, evaluate, select, format results."""

# lintseed:domain=autoconfig

from __future__ import annotations

import json
import logging
import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from lintseed.autoconfig.planner import build_rule_sets
from lintseed.autoconfig.registry import Registry
from lintseed.autoconfig.runner import lint_with_configs
from lintseed.autoconfig.schema import validate_config
from lintseed.autoconfig.selection import select_rule_configs, unresolved_rules
from lintseed.infrastructure.settings import AutoconfigSettings

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from rich.console import Console

    from lintseed.autoconfig.engine import LinterEngine
    from lintseed.autoconfig.schema import RuleConfig
    from lintseed.infrastructure.catalog import RuleCatalog

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class AutoconfigError(Exception):
    """Raised when an autoconfig session is set up incorrectly."""


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass
class AutoconfigResult:
    """Outcome of an autoconfig session."""

    rules: dict[str, RuleConfig] = field(default_factory=dict)
    dropped: list[str] = field(default_factory=list)  # no error-free config
    unresolved: list[str] = field(default_factory=list)  # ties at every level
    untested: list[str] = field(default_factory=list)  # too many candidates
    files_linted: int = 0
    rule_sets: int = 0
    failures: int = 0
    elapsed_ms: float = 0.0


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _check_against_catalog(
    rules_config: Mapping[str, Sequence[RuleConfig]], catalog: RuleCatalog
) -> None:
    known = set(catalog.rule_ids())
    for rule_id, configs in rules_config.items():
        if rule_id not in known:
            continue
        schema = catalog.get_schema(rule_id)
        for config in configs:
            if not validate_config(schema, config):
                msg = f"Config {config.as_native()!r} for rule '{rule_id}' does not fit its schema"
                raise AutoconfigError(msg)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------


def infer_config(
    corpus: Iterable[tuple[str, str]] | Mapping[str, str],
    engine: LinterEngine,
    *,
    catalog: RuleCatalog | None = None,
    rules_config: Mapping[str, Sequence[RuleConfig]] | None = None,
    settings: AutoconfigSettings | None = None,
) -> AutoconfigResult:
    """Infer a rule configuration from how the corpus is actually written.

    Parameters
    ----------
    corpus:
        ``(filename, source)`` pairs, or a filename -> source mapping.
    engine:
        Linter used to evaluate each rule set.
    catalog:
        Rule catalog to expand; deny-listed rules are skipped.
    rules_config:
        Explicit rule id -> candidate list, used instead of expanding
        *catalog*.  When a catalog is given too, each candidate of a
        catalog rule must fit that rule's schema.
    settings:
        Session settings; defaults when *None*.

    Returns
    -------
    AutoconfigResult
        Selected configs plus the rules that could not be decided.

    Raises
    ------
    AutoconfigError
        When neither *catalog* nor *rules_config* is given, or an explicit
        candidate does not fit its catalog schema.
    """
    start = time.monotonic()
    settings = settings or AutoconfigSettings()

    # Step a: Build the registry.
    if rules_config is not None:
        if catalog is not None:
            _check_against_catalog(rules_config, catalog)
        registry = Registry(
            {rid: cfgs for rid, cfgs in rules_config.items() if rid not in settings.deny_list}
        )
    elif catalog is not None:
        registry = Registry.from_catalog(
            catalog, settings.deny_list, settings.default_severity
        )
    else:
        msg = "Either a rule catalog or explicit rule configs are required"
        raise AutoconfigError(msg)

    # Step b: Rules too large to plan are never tested, so never selected.
    untested = registry.untestable_rules(settings.max_config_combinations)
    if untested:
        logger.info(
            "Skipping %d rules with more than %d configs: %s",
            len(untested),
            settings.max_config_combinations,
            ", ".join(untested),
        )
        registry.discard(untested)

    # Step c: Plan rule sets.
    rule_sets = build_rule_sets(registry, settings.max_config_combinations)

    # Step d: Lint every file with every rule set.
    pairs = corpus.items() if isinstance(corpus, Mapping) else corpus
    stats = lint_with_configs(pairs, settings.base_config, rule_sets, registry, engine)

    # Step e: Select.
    selected = select_rule_configs(registry)
    unresolved = unresolved_rules(registry, selected)

    elapsed = (time.monotonic() - start) * 1000
    logger.info("Finished generating config in %.3fs", elapsed / 1000)

    return AutoconfigResult(
        rules=selected,
        dropped=list(registry.dropped_rules),
        unresolved=unresolved,
        untested=untested,
        files_linted=stats.files_linted,
        rule_sets=len(rule_sets),
        failures=stats.failures,
        elapsed_ms=elapsed,
    )


# ---------------------------------------------------------------------------
# Formatters
# ---------------------------------------------------------------------------


def render_result(result: AutoconfigResult, console: Console) -> None:
    """Render an AutoconfigResult using Rich console output.

    Displays:
    - Header with files linted and rule sets used
    - Table of configured rules with their config and specificity
    - Unresolved rules in yellow, dropped rules dimmed
    - Summary line with counts
    """
    from rich.markup import escape
    from rich.table import Table

    console.print(
        f"[bold]Linted {result.files_linted} files with {result.rule_sets} rule sets[/bold]"
        f" ({result.failures} failed)"
    )
    console.print()

    if result.rules:
        table = Table(box=None, padding=(0, 1))
        table.add_column("rule", style="cyan")
        table.add_column("config")
        table.add_column("specificity", justify="right")
        for rule_id in sorted(result.rules):
            config = result.rules[rule_id]
            table.add_row(
                escape(rule_id), escape(json.dumps(config.as_native())), str(config.specificity)
            )
        console.print(table)
        console.print()

    if result.unresolved:
        names = escape(", ".join(sorted(result.unresolved)))
        console.print(f"[yellow]? unresolved:[/yellow] {names}")
    if result.dropped:
        console.print(f"[dim]- dropped: {escape(', '.join(sorted(result.dropped)))}[/dim]")
    if result.unresolved or result.dropped:
        console.print()

    console.print(
        f"{len(result.rules)} rules configured, {len(result.unresolved)} unresolved, "
        f"{len(result.dropped)} dropped, {len(result.untested)} untested "
        f"({result.elapsed_ms / 1000:.1f}s)"
    )


def format_json(result: AutoconfigResult) -> str:
    """Format an AutoconfigResult as JSON with ``rules`` and ``summary`` objects."""
    output: dict[str, object] = {
        "rules": {rid: result.rules[rid].as_native() for rid in sorted(result.rules)},
        "unresolved": sorted(result.unresolved),
        "dropped": sorted(result.dropped),
        "untested": sorted(result.untested),
        "summary": {
            "rules_configured": len(result.rules),
            "files_linted": result.files_linted,
            "rule_sets": result.rule_sets,
            "failures": result.failures,
            "elapsed_ms": result.elapsed_ms,
        },
    }
    return json.dumps(output, indent=2)


def format_porcelain(result: AutoconfigResult) -> str:
    """One ``rule_id:specificity`` line per configured rule, sorted by rule id."""
    return "\n".join(
        f"{rid}:{result.rules[rid].specificity}" for rid in sorted(result.rules)
    )
