"""Rule catalog: the option schema of every rule a linter knows."""

# lintseed:domain=infrastructure

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Protocol

import yaml

from lintseed.autoconfig.schema import parse_schema

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

    from lintseed.autoconfig.schema import OptionSchema

logger = logging.getLogger(__name__)


class CatalogError(Exception):
    """Raised when a rule catalog file cannot be loaded."""


class RuleCatalog(Protocol):
    """Lookup of rule option schemas by rule id."""

    def rule_ids(self) -> list[str]: ...

    def get_schema(self, rule_id: str) -> OptionSchema: ...


class DictRuleCatalog:
    """In-memory catalog built from parsed schemas."""

    def __init__(self, schemas: Mapping[str, OptionSchema]) -> None:
        self._schemas: dict[str, OptionSchema] = dict(schemas)

    def rule_ids(self) -> list[str]:
        return list(self._schemas)

    def get_schema(self, rule_id: str) -> OptionSchema:
        return self._schemas[rule_id]

    def __len__(self) -> int:
        return len(self._schemas)


def parse_catalog(data: Any, source: str = "catalog") -> DictRuleCatalog:
    """Build a catalog from the ``rules:`` mapping of a loaded YAML document.

    Each rule maps to ``{schema: [...]}``; a bare list is accepted as the
    schema itself, and ``null`` means the rule takes no options.
    """
    if not isinstance(data, dict):
        msg = f"{source}: top level must be a mapping"
        raise CatalogError(msg)

    rules = data.get("rules")
    if not isinstance(rules, dict):
        msg = f"{source}: 'rules' must be a mapping of rule id to schema"
        raise CatalogError(msg)

    schemas: dict[str, OptionSchema] = {}
    for rule_id, rule_data in rules.items():
        raw_schema = rule_data.get("schema") if isinstance(rule_data, dict) else rule_data
        try:
            schemas[str(rule_id)] = parse_schema(raw_schema, f"{source}: rule '{rule_id}'")
        except ValueError as exc:
            raise CatalogError(str(exc)) from exc

    logger.debug("Loaded %d rule schemas from %s", len(schemas), source)
    return DictRuleCatalog(schemas)


def load_catalog(path: Path) -> DictRuleCatalog:
    """Load a YAML rule catalog file."""
    try:
        with path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except OSError as exc:
        msg = f"Cannot read rule catalog {path}: {exc}"
        raise CatalogError(msg) from exc
    except yaml.YAMLError as exc:
        msg = f"Invalid YAML in rule catalog {path}: {exc}"
        raise CatalogError(msg) from exc
    return parse_catalog(data, str(path))
