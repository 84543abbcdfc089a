"""Shared test fixtures for Lintseed."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest

from lintseed.autoconfig.engine import Diagnostic
from lintseed.autoconfig.schema import RuleConfig

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from pathlib import Path


# ---------------------------------------------------------------------------
# A toy linter
# ---------------------------------------------------------------------------


def _check_semi(source: str, options: tuple[Any, ...]) -> list[int]:
    mode = options[0] if options else "always"
    lines = [(n, line.rstrip()) for n, line in enumerate(source.splitlines(), 1) if line.strip()]
    if mode == "always":
        return [n for n, line in lines if not line.endswith(";")]
    return [n for n, line in lines if line.endswith(";")]


def _check_quotes(source: str, options: tuple[Any, ...]) -> list[int]:
    style = options[0] if options else "double"
    wrong = "'" if style == "double" else '"'
    return [n for n, line in enumerate(source.splitlines(), 1) if wrong in line]


def _check_no_tabs(source: str, options: tuple[Any, ...]) -> list[int]:
    return [n for n, line in enumerate(source.splitlines(), 1) if "\t" in line]


def _check_max_len(source: str, options: tuple[Any, ...]) -> list[int]:
    limit = options[0] if options else 10
    return [n for n, line in enumerate(source.splitlines(), 1) if len(line) > limit]


def _check_always_fails(source: str, options: tuple[Any, ...]) -> list[int]:
    return [1]


STYLE_CHECKS: dict[str, Callable[[str, tuple[Any, ...]], list[int]]] = {
    "semi": _check_semi,
    "quotes": _check_quotes,
    "no-tabs": _check_no_tabs,
    "max-len": _check_max_len,
    "always-fails": _check_always_fails,
}


class StyleEngine:
    """Line-based stand-in for a real linter, recording every call."""

    def __init__(self) -> None:
        self.calls: list[Mapping[str, Any]] = []

    def verify(self, source: str, config: Mapping[str, Any]) -> list[Diagnostic]:
        self.calls.append(config)
        diagnostics: list[Diagnostic] = []
        for rule_id, native in config["rules"].items():
            check = STYLE_CHECKS.get(rule_id)
            if check is None:
                continue
            options = RuleConfig.from_native(native).options
            diagnostics.extend(
                Diagnostic(rule_id=rule_id, message=f"{rule_id} violated", line=line)
                for line in check(source, options)
            )
        return diagnostics


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


CATALOG_YAML = (
    "rules:\n"
    "  semi:\n"
    "    schema:\n"
    "      - enum: [always, never]\n"
    "  quotes:\n"
    "    schema:\n"
    "      - enum: [double, single]\n"
    "  no-tabs:\n"
    "    schema: []\n"
    "  max-len:\n"
    "    schema:\n"
    "      - enum: [80, 120]\n"
    "  always-fails:\n"
    "    schema: []\n"
)

CORPUS: dict[str, str] = {
    "src/app.js": 'var greeting = "hello there";\nvar name = "world";\n',
    "src/util.js": 'export const sep = "-";\n',
}


@pytest.fixture()
def style_engine() -> StyleEngine:
    """Provide a fresh toy linter."""
    return StyleEngine()


@pytest.fixture()
def corpus() -> dict[str, str]:
    """Provide a small corpus using semicolons and double quotes."""
    return dict(CORPUS)


@pytest.fixture()
def catalog_file(tmp_path: Path) -> Path:
    """Write the toy linter's rule catalog to a YAML file."""
    path = tmp_path / "catalog.yml"
    path.write_text(CATALOG_YAML)
    return path
