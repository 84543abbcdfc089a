"""Autoconfig domain — schema expansion, candidate registry, rule set planning, evaluation."""

# lintseed:domain=autoconfig

from lintseed.autoconfig.engine import Diagnostic, EngineLoadError, LinterEngine, load_engine
from lintseed.autoconfig.expander import (
    RuleConfigSet,
    combine_arrays,
    combine_property_objects,
    explode_array,
    generate_configs_from_schema,
    group_by_property,
)
from lintseed.autoconfig.planner import MAX_CONFIG_COMBINATIONS, RuleSet, build_rule_sets
from lintseed.autoconfig.registry import Registry, RegistryEntry, create_configs_for_rules
from lintseed.autoconfig.runner import EvaluationStats, lint_with_configs
from lintseed.autoconfig.schema import (
    BooleanOption,
    EnumOption,
    NotSupportedOption,
    ObjectOption,
    OptionSchema,
    RuleConfig,
    Severity,
    Specificity,
    parse_schema,
    unsupported_options,
    validate_config,
)
from lintseed.autoconfig.selection import select_rule_configs, unresolved_rules
from lintseed.autoconfig.session import (
    AutoconfigError,
    AutoconfigResult,
    format_json,
    format_porcelain,
    infer_config,
    render_result,
)

__all__ = [
    "MAX_CONFIG_COMBINATIONS",
    "AutoconfigError",
    "AutoconfigResult",
    "BooleanOption",
    "Diagnostic",
    "EngineLoadError",
    "EnumOption",
    "EvaluationStats",
    "LinterEngine",
    "NotSupportedOption",
    "ObjectOption",
    "OptionSchema",
    "Registry",
    "RegistryEntry",
    "RuleConfig",
    "RuleConfigSet",
    "RuleSet",
    "Severity",
    "Specificity",
    "build_rule_sets",
    "combine_arrays",
    "combine_property_objects",
    "create_configs_for_rules",
    "explode_array",
    "format_json",
    "format_porcelain",
    "generate_configs_from_schema",
    "group_by_property",
    "infer_config",
    "lint_with_configs",
    "load_engine",
    "parse_schema",
    "render_result",
    "select_rule_configs",
    "unresolved_rules",
    "unsupported_options",
    "validate_config",
]
