"""Linter engine contract and loader."""

# lintseed:domain=autoconfig

from __future__ import annotations

import importlib
import inspect
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence


class EngineLoadError(Exception):
    """Raised when a linter engine cannot be imported or instantiated."""


@dataclass(frozen=True)
class Diagnostic:
    """A single problem reported by the linter."""

    rule_id: str | None  # None for parse errors and other rule-less problems
    message: str = ""
    line: int | None = None
    column: int | None = None
    severity: int = 2


@runtime_checkable
class LinterEngine(Protocol):
    """Anything that can lint one source text with a given configuration.

    *config* is the base configuration with its ``rules`` key replaced by a
    rule id -> native rule config mapping.  Rules absent from that mapping
    must not run.
    """

    def verify(self, source: str, config: Mapping[str, Any]) -> Sequence[Diagnostic]: ...


def load_engine(spec: str) -> LinterEngine:
    """Resolve ``"package.module:attr"`` to a linter engine instance.

    *attr* may name an engine instance, a class, or a zero-argument factory.
    """
    module_name, sep, attr = spec.partition(":")
    if not sep or not module_name or not attr:
        msg = f"Engine must be given as 'module:attribute', got '{spec}'"
        raise EngineLoadError(msg)

    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        msg = f"Cannot import engine module '{module_name}': {exc}"
        raise EngineLoadError(msg) from exc

    target: Any = module
    for part in attr.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as exc:
            msg = f"Module '{module_name}' has no attribute '{attr}'"
            raise EngineLoadError(msg) from exc

    if inspect.isclass(target) or (callable(target) and not hasattr(target, "verify")):
        try:
            target = target()
        except Exception as exc:
            msg = f"Cannot create engine from '{spec}': {exc}"
            raise EngineLoadError(msg) from exc

    if not isinstance(target, LinterEngine):
        msg = f"'{spec}' does not provide a verify(source, config) method"
        raise EngineLoadError(msg)
    return target
