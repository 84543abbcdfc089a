"""Lintseed CLI entry point."""

# lintseed:service=cli

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from lintseed import __version__


# lintseed:service=cli
@click.group()
@click.version_option(version=__version__, prog_name="lintseed")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Minimal output (errors only).")
@click.pass_context
def main(ctx: click.Context, *, verbose: bool, quiet: bool) -> None:
    """Lintseed - infer a linter configuration from sample code."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet

    level = logging.WARNING
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


# lintseed:domain=autoconfig
@main.command()
@click.argument(
    "files",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--catalog",
    "catalog_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML file with the option schema of every rule.",
)
@click.option(
    "--engine",
    "engine_spec",
    required=True,
    help="Linter engine as 'module:attribute'.",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Settings file (default: lintseed.yml in the current directory, if present).",
)
@click.option(
    "--deny",
    multiple=True,
    help="Rule id to leave out (repeatable); added to the settings deny-list.",
)
@click.option(
    "--max-combinations",
    type=click.IntRange(min=1),
    default=None,
    help="Skip rules with more candidate configs than this (default: 16).",
)
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["rich", "json", "porcelain"]),
    default=None,
    help="Output format (default: rich if TTY, porcelain if piped).",
)
def infer(
    *,
    files: tuple[Path, ...],
    catalog_path: Path,
    engine_spec: str,
    config_path: Path | None,
    deny: tuple[str, ...],
    max_combinations: int | None,
    fmt: str | None,
) -> None:
    """Infer rule configs that the given FILES already satisfy.

    Every schema-valid config of every catalog rule is tried against the
    files; per rule, the most specific config without errors is kept.
    Exit codes: 0 = done, 2 = configuration error.
    """
    from lintseed.autoconfig.engine import EngineLoadError, load_engine
    from lintseed.autoconfig.session import AutoconfigError, infer_config
    from lintseed.autoconfig.session import format_json as _format_json
    from lintseed.autoconfig.session import format_porcelain as _format_porcelain
    from lintseed.autoconfig.session import render_result
    from lintseed.infrastructure.catalog import CatalogError, load_catalog
    from lintseed.infrastructure.corpus import iter_corpus
    from lintseed.infrastructure.settings import load_settings

    if config_path is None:
        implicit = Path.cwd() / "lintseed.yml"
        config_path = implicit if implicit.is_file() else None

    # Resolve output format: explicit flag > TTY detection.
    if fmt is None:
        fmt = "rich" if sys.stdout.isatty() else "porcelain"

    try:
        settings = load_settings(config_path).with_overrides(
            deny=deny, max_config_combinations=max_combinations
        )
        catalog = load_catalog(catalog_path)
        engine = load_engine(engine_spec)
        result = infer_config(
            iter_corpus(files), engine, catalog=catalog, settings=settings
        )
    except (AutoconfigError, CatalogError, EngineLoadError, ValueError) as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(2)

    if fmt == "rich":
        from rich.console import Console

        render_result(result, Console())
        return

    output = _format_json(result) if fmt == "json" else _format_porcelain(result)
    if output:
        click.echo(output)


# lintseed:domain=autoconfig
@main.command("expand")
@click.argument("rule_id")
@click.option(
    "--catalog",
    "catalog_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML file with the option schema of every rule.",
)
def expand_cmd(*, rule_id: str, catalog_path: Path) -> None:
    """List every candidate config of RULE_ID, one per line, in test order."""
    import json

    from lintseed.autoconfig.expander import generate_configs_from_schema
    from lintseed.autoconfig.schema import unsupported_options
    from lintseed.infrastructure.catalog import CatalogError, load_catalog

    try:
        catalog = load_catalog(catalog_path)
        schema = catalog.get_schema(rule_id)
    except CatalogError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(2)
    except KeyError:
        click.echo(f"Error: unknown rule '{rule_id}'", err=True)
        sys.exit(1)

    for option in unsupported_options(schema):
        click.echo(f"Warning: option skipped ({option.reason})", err=True)

    for config in generate_configs_from_schema(schema, rule_id=rule_id):
        click.echo(json.dumps(config.as_native()))
