"""Option schemas and candidate rule configurations."""

# lintseed:domain=autoconfig

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, NewType, Union

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

# ---------------------------------------------------------------------------
# Scalar types
# ---------------------------------------------------------------------------


class Severity(enum.IntEnum):
    """Severity level a rule is switched on with."""

    OFF = 0
    WARN = 1
    ERROR = 2


Specificity = NewType("Specificity", int)

# An option value is a literal from an enum, or a single-level object.
OptionValue = Union[str, int, float, bool, None, dict[str, Any]]

# ---------------------------------------------------------------------------
# Option descriptors
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EnumOption:
    """Enumerated choice over an ordered set of literal values."""

    values: tuple[Any, ...]


@dataclass(frozen=True)
class BooleanOption:
    """Boolean flag; behaves like an enum over ``(True, False)``."""

    @property
    def values(self) -> tuple[bool, bool]:
        return (True, False)


@dataclass(frozen=True)
class ObjectOption:
    """Object option whose enumerable properties are combined."""

    properties: tuple[tuple[str, EnumOption | BooleanOption], ...]


@dataclass(frozen=True)
class NotSupportedOption:
    """A descriptor the expander cannot enumerate (``oneOf``, ``anyOf``, ...)."""

    reason: str


OptionDescriptor = Union[EnumOption, BooleanOption, ObjectOption, NotSupportedOption]
OptionSchema = tuple[OptionDescriptor, ...]

_DISJUNCTIVE_KEYS: tuple[str, ...] = ("oneOf", "anyOf")


def _parse_property(prop: object) -> EnumOption | BooleanOption | None:
    if not isinstance(prop, dict):
        return None
    if "enum" in prop and isinstance(prop["enum"], list):
        return EnumOption(tuple(prop["enum"]))
    if prop.get("type") == "boolean":
        return BooleanOption()
    return None


def parse_descriptor(data: Mapping[str, Any], context: str = "schema") -> OptionDescriptor:
    """Parse a single JSON-schema-like descriptor into an option descriptor.

    ``enum`` wins over ``type``; a descriptor that is neither an enum nor an
    object, or that is a disjunction, becomes :class:`NotSupportedOption`.
    """
    if not isinstance(data, dict):
        msg = f"{context}: option descriptor must be a mapping"
        raise ValueError(msg)

    for key in _DISJUNCTIVE_KEYS:
        if key in data:
            return NotSupportedOption(reason=f"{key} is not expanded")

    enum_values = data.get("enum")
    if enum_values is not None:
        if not isinstance(enum_values, list):
            msg = f"{context}: 'enum' must be a list"
            raise ValueError(msg)
        return EnumOption(tuple(enum_values))

    if data.get("type") == "object":
        raw_props = data.get("properties", {})
        if not isinstance(raw_props, dict):
            msg = f"{context}: 'properties' must be a mapping"
            raise ValueError(msg)
        properties: list[tuple[str, EnumOption | BooleanOption]] = []
        for name, prop in raw_props.items():
            parsed = _parse_property(prop)
            if parsed is not None:
                properties.append((str(name), parsed))
        return ObjectOption(tuple(properties))

    kind = data.get("type", "untyped")
    return NotSupportedOption(reason=f"type '{kind}' is not expanded")


def parse_schema(raw: object, context: str = "schema") -> OptionSchema:
    """Parse a rule's raw option schema (a list of descriptors).

    ``None`` and an empty mapping mean "no options"; anything else that is
    not a list is rejected.
    """
    if raw is None or raw == {}:
        return ()
    if not isinstance(raw, list):
        msg = f"{context}: schema must be a list of option descriptors"
        raise ValueError(msg)
    return tuple(
        parse_descriptor(item, f"{context}[{idx}]") for idx, item in enumerate(raw)
    )


def unsupported_options(schema: Sequence[OptionDescriptor]) -> list[NotSupportedOption]:
    """Return the descriptors that expansion will skip."""
    return [opt for opt in schema if isinstance(opt, NotSupportedOption)]


# ---------------------------------------------------------------------------
# Candidate configuration
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RuleConfig:
    """One concrete way to switch a rule on: a severity plus option values."""

    severity: Severity
    options: tuple[OptionValue, ...] = field(default=())

    def __post_init__(self) -> None:
        # Each config owns its object options; expansion reuses dict instances.
        object.__setattr__(self, "options", tuple(_copy_value(v) for v in self.options))

    def __hash__(self) -> int:
        return hash((self.severity, tuple(_hashable(v) for v in self.options)))

    @property
    def kind(self) -> str:
        """``"severity"``, ``"value"`` or ``"object"`` by the last option's shape."""
        if not self.options:
            return "severity"
        if isinstance(self.options[-1], dict):
            return "object"
        return "value"

    @property
    def specificity(self) -> Specificity:
        return Specificity(1 + len(self.options))

    def as_native(self) -> int | list[Any]:
        """Return the form a linter config file uses (``2`` or ``[2, "always"]``)."""
        if not self.options:
            return int(self.severity)
        return [int(self.severity), *(_copy_value(v) for v in self.options)]

    @classmethod
    def from_native(cls, value: int | Sequence[Any]) -> RuleConfig:
        """Build a config from the linter-native form."""
        if isinstance(value, int):
            return cls(Severity(value))
        if not value:
            msg = "native rule config must not be empty"
            raise ValueError(msg)
        return cls(Severity(value[0]), tuple(value[1:]))


def _copy_value(value: OptionValue) -> OptionValue:
    return dict(value) if isinstance(value, dict) else value


def _hashable(value: OptionValue) -> object:
    return tuple(sorted(value.items())) if isinstance(value, dict) else value


def _is_allowed(value: object, allowed: Sequence[Any]) -> bool:
    # Typed comparison: 1 == True in Python, but not in a rule config.
    return any(type(candidate) is type(value) and candidate == value for candidate in allowed)


def _value_matches(descriptor: OptionDescriptor, value: OptionValue) -> bool:
    if isinstance(descriptor, (EnumOption, BooleanOption)):
        return not isinstance(value, dict) and _is_allowed(value, descriptor.values)
    if isinstance(descriptor, ObjectOption):
        if not isinstance(value, dict):
            return False
        allowed = dict(descriptor.properties)
        return all(
            key in allowed and _is_allowed(val, allowed[key].values) for key, val in value.items()
        )
    return False


def validate_config(schema: Sequence[OptionDescriptor], config: RuleConfig) -> bool:
    """Check that *config*'s options fit *schema*, in declaration order.

    Options may skip descriptors (every expansion keeps shorter candidates),
    so this is a subsequence match.
    """
    supported = [opt for opt in schema if not isinstance(opt, NotSupportedOption)]

    def _match(opt_idx: int, desc_idx: int) -> bool:
        if opt_idx == len(config.options):
            return True
        for idx in range(desc_idx, len(supported)):
            if _value_matches(supported[idx], config.options[opt_idx]) and _match(
                opt_idx + 1, idx + 1
            ):
                return True
        return False

    return _match(0, 0)
