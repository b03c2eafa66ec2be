#!/usr/bin/env python3
"""CLI for the drop-rate lookup."""

import logging
import sys
from functools import wraps
from pathlib import Path

import click

# Ensure drop_lookup is importable
sys.path.insert(0, str(Path(__file__).parent))

from drop_lookup import __version__
from drop_lookup.config import DATA_DIR, DEFAULT_VERSION, LOG_LEVEL
from drop_lookup.data import ENTITY_KINDS, VersionCatalog, load_dataset
from drop_lookup.errors import DropLookupError
from drop_lookup.lookup import DropLookup, RelatedRow
from drop_lookup.search.engine import DOMAIN_FILTERS


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding versions.json and the data files (default: DATA_DIR)",
)
@click.option("--verbose", "-v", is_flag=True, help="Show loading progress")
@click.pass_context
def cli(ctx: click.Context, data_dir: Path | None, verbose: bool):
    """Game drop-rate lookup - search items, monsters, maps and NPCs."""
    if verbose:
        logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")
    else:
        logging.basicConfig(level=LOG_LEVEL, format="%(name)s: %(message)s")
    ctx.ensure_object(dict)
    ctx.obj["data_dir"] = data_dir or DATA_DIR


def data_options(func):
    """Add --version/--data-file options and pass a loaded DropLookup as ``lookup``."""

    @click.option("--version", "version", default=None, help="Data version (see 'versions')")
    @click.option(
        "--data-file",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        default=None,
        help="Load this data file instead of a catalog version",
    )
    @click.pass_context
    @wraps(func)
    def wrapper(ctx: click.Context, version: str | None, data_file: Path | None, **kwargs):
        try:
            if data_file is not None:
                dataset = load_dataset(data_file)
            else:
                catalog = VersionCatalog.from_file(ctx.obj["data_dir"])
                version = version or DEFAULT_VERSION or next(
                    (v.data for v in catalog), None
                )
                if not version:
                    click.echo("No data version available. Add versions.json or use --data-file.", err=True)
                    sys.exit(1)
                dataset = catalog.load(version)
            lookup = DropLookup(dataset)
            return func(lookup=lookup, **kwargs)
        except DropLookupError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)

    return wrapper


def _echo_rows(title: str, rows: list[RelatedRow], empty: str) -> None:
    click.echo(f"\n{title}:")
    if not rows:
        click.echo(f"  {empty}")
        return
    for related in rows:
        click.echo(f"  {related.label}")


def _echo_lines(title: str, lines: list[str], empty: str) -> None:
    click.echo(f"\n{title}:")
    if not lines:
        click.echo(f"  {empty}")
        return
    for line in lines:
        click.echo(f"  {line}")


# ============================================================================
# Version commands
# ============================================================================


@cli.command("versions")
@click.pass_context
def versions(ctx: click.Context):
    """List the available data versions."""
    try:
        catalog = VersionCatalog.from_file(ctx.obj["data_dir"])
    except DropLookupError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if not catalog:
        click.echo("No data versions found.")
        return

    click.echo("Data versions:")
    for version in catalog:
        click.echo(f"  {version.data}: {version.name}")


# ============================================================================
# Search commands
# ============================================================================


@cli.command("search")
@click.argument("kind", type=click.Choice(list(ENTITY_KINDS)))
@click.argument("keyword", default="")
@click.option(
    "--filter",
    "filter_mode",
    default=None,
    help="Display filter: items related|all, monsters drops_items|all",
)
@data_options
def search(lookup: DropLookup, kind: str, keyword: str, filter_mode: str | None):
    """Search KIND by name; letters may be skipped ("fswd" finds "Fire Sword").

    \b
    Examples:
      drop-lookup search items firesw
      drop-lookup search monsters --filter all
    """
    if filter_mode is not None and filter_mode not in DOMAIN_FILTERS[kind]:
        click.echo(
            f"Unknown filter '{filter_mode}' for {kind}. Available: {', '.join(DOMAIN_FILTERS[kind])}",
            err=True,
        )
        sys.exit(1)

    result = lookup.search(kind, keyword, filter_mode)
    if not result.has_data:
        click.echo(f"No {kind} data in this version.")
        return
    if not result.hits:
        click.echo(f"No {kind} match '{keyword}'.")
        return

    for hit in result.hits:
        click.echo(hit.label)


# ============================================================================
# Drill-down commands
# ============================================================================


@cli.command("item")
@click.argument("number", type=int)
@data_options
def item_show(lookup: DropLookup, number: int):
    """Show where item NUMBER (as listed by search) comes from."""
    sources = lookup.item_sources(number - 1)
    click.echo(f"Item: {sources.item.row.name}")
    _echo_rows("Dropped by", sources.monsters, "Not dropped by monsters")
    _echo_rows("NPCs", sources.npcs, "No NPC source")


@cli.command("monster")
@click.argument("number", type=int)
@data_options
def monster_show(lookup: DropLookup, number: int):
    """Show drops and spawn maps of monster NUMBER."""
    details = lookup.monster_details(number - 1)
    click.echo(f"Monster: {details.monster.row.name}")
    _echo_rows("Drops", details.drops, "Drops nothing")
    _echo_rows("Maps", details.maps, "Does not spawn on any map")
    if details.spawn_schedule:
        _echo_lines("Timed spawns", details.spawn_schedule, "")


@cli.command("map")
@click.argument("number", type=int)
@data_options
def map_show(lookup: DropLookup, number: int):
    """Show monsters on map NUMBER and the route to it."""
    details = lookup.map_details(number - 1)
    click.echo(f"Map: {details.map.row.name}")
    _echo_rows("Monsters", details.monsters, "No monsters on this map")
    _echo_lines(
        "Route",
        [
            f"[{'NPC transfer' if step.kind == 'npc_transfer' else 'Path'}] {step.text}"
            for step in details.route
        ],
        "No route (entered by trigger)",
    )


@cli.command("npc")
@click.argument("number", type=int)
@data_options
def npc_show(lookup: DropLookup, number: int):
    """Show what NPC NUMBER takes and gives."""
    details = lookup.npc_details(number - 1)
    npc = details.npc.row
    click.echo(f"NPC: {npc.name}")
    if npc.map_name:
        click.echo(f"  Location: {npc.location}")
    _echo_lines("Takes", details.items_taken, "Nothing")
    _echo_lines("Gives", details.items_given, "Nothing")
    _echo_rows("Transfers to", details.transfer_maps, "No transfers")


if __name__ == "__main__":
    cli()
