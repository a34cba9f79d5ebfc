#!/usr/bin/env python3
"""Command-line interface for order-import using Click."""

from importlib import metadata
import logging
from pathlib import Path
import sys
from typing import Optional
from typing import Tuple

import click
from order_import import config as config_module
from order_import import core
from order_import.models import FORMAT_STYLES
from order_import.models import OrganizerConfig


try:
    VERSION = f"order-import {metadata.version('order_import')}"
except metadata.PackageNotFoundError:
    VERSION = "order-import"


def _resolve_config(path: Path, style: Optional[str], optimize_barrels: Optional[bool],
                    group: Optional[bool], remove_unused: Optional[bool],
                    aliases: Tuple[str, ...]) -> OrganizerConfig:
    root = path if path.is_dir() else path.parent
    base = config_module.load_config(str(config_module.find_config_root(str(root))))
    return config_module.merge_overrides(
        base,
        format_style=style,
        optimize_barrel_imports=optimize_barrels,
        group_by_source_class=group,
        remove_unused=remove_unused,
        path_alias_prefixes=aliases or None,
    )


def _handle_files(path: Path, config: OrganizerConfig, apply_changes: bool) -> int:
    """Organize imports in the given files and report the result.

    Args:
        path: File or directory to process.
        config: Organizer options.
        apply_changes: If True, rewrite files in place.
    Returns:
        0 if no changes, 1 if changes required, 2 if error occurred.
    """
    exit_code = 0
    changed = 0

    if path.is_file():
        file_paths = [path]
    else:
        file_paths = list(core.iter_source_files(str(path)))

    for file_path in file_paths:
        modified, warnings = core.process_file(str(file_path), config, apply=apply_changes)

        for lineno, msg in warnings:
            if lineno == 0:
                logging.error("[%s] ERROR: %s", file_path, msg)
                exit_code = max(exit_code, 2)
            else:
                logging.warning("[%s] line %s: %s", file_path, lineno, msg)

        if modified:
            msg = "file updated." if apply_changes else "imports would be reorganized."
            logging.info("[%s] %s", file_path, msg)
            changed += 1
            exit_code = max(exit_code, 1)

    logging.debug("Processed %d files, %d changed", len(file_paths), changed)
    return exit_code


def _run(path: str, apply_changes: bool, style, optimize_barrels, group, remove_unused, aliases) -> None:
    target = Path(path)
    try:
        config = _resolve_config(target, style, optimize_barrels, group, remove_unused, aliases)
    except (ValueError, TypeError) as exc:
        logging.error("Invalid configuration: %s", exc)
        sys.exit(2)
    sys.exit(_handle_files(target, config, apply_changes))


def organizer_options(func):
    """Options shared by the check and fix commands."""
    options = [
        click.argument("path", type=click.Path(exists=True, file_okay=True, dir_okay=True)),
        click.option("--style", type=click.Choice(FORMAT_STYLES), default=None,
                     help="Format style: 'normal' sorts by specifier length, 'aligned' sorts by path and aligns 'from'."),
        click.option("--optimize-barrels/--no-optimize-barrels", default=None,
                     help="Split named imports from barrel packages into direct sub-module imports."),
        click.option("--group/--no-group", default=None,
                     help="Group imports into external, alias and relative blocks."),
        click.option("--remove-unused/--keep-unused", default=None,
                     help="Drop imports whose bindings are never used."),
        click.option("--alias", "aliases", multiple=True,
                     help="Path alias prefix (repeatable); replaces the configured list."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Increase verbosity.")
@click.option("-q", "--quiet", is_flag=True, help="Suppress non-error output.")
@click.version_option(version=VERSION, prog_name="order-import CLI")
def cli(verbose: bool, quiet: bool) -> None:
    """Organize JavaScript/TypeScript import blocks."""
    # Configure logging only once
    if not logging.getLogger().handlers:
        if quiet:
            logging.basicConfig(level=logging.ERROR, format="%(message)s")
        else:
            logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format="%(message)s")


@cli.command(help="Report files whose imports are not organized.")
@organizer_options
def check(path: str, style, optimize_barrels, group, remove_unused, aliases) -> None:
    _run(path, False, style, optimize_barrels, group, remove_unused, aliases)


@cli.command(help="Organize imports in place.")
@organizer_options
def fix(path: str, style, optimize_barrels, group, remove_unused, aliases) -> None:
    _run(path, True, style, optimize_barrels, group, remove_unused, aliases)


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    cli()
