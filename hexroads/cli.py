"""CLI for inspecting the hex board core."""

import logging
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError

from hexroads import config
from hexroads.board import SpatialBoard
from hexroads.hex_coords import HEX_DIRECTIONS, to_axial, to_world
from hexroads.schemas import BoardSnapshot
from hexroads.side_indexer import (
    AssetCatalog,
    angle_to_side_index,
    neighbor_delta_to_side_index,
    side_index_to_letter,
    side_letter_to_index,
)
from hexroads.tile_classifier import classify_with_issues, model_path

DIRECTION_NAMES = {index: name for name, index in HEX_DIRECTIONS.items()}


def _parse_side(value: str) -> int:
    if value.isdigit():
        return int(value)
    return side_letter_to_index(value)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool):
    """Hex Roads board and road tile tools"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


@cli.command()
@click.argument("q", type=int)
@click.argument("r", type=int)
@click.option("--size", default=config.HEX_SIZE, help="Hex size in world units")
def world(q: int, r: int, size: float):
    """Show the world position of a hex."""
    x, y, z = to_world(q, r, size)
    click.echo(f"({q}, {r}) -> x={x:.4f} y={y:.4f} z={z:.4f}")


@cli.command()
@click.argument("x", type=float)
@click.argument("z", type=float)
@click.option("--size", default=config.HEX_SIZE, help="Hex size in world units")
def axial(x: float, z: float, size: float):
    """Show the hex containing a world position."""
    q, r = to_axial(x, z, size)
    click.echo(f"x={x} z={z} -> ({q}, {r})")


@cli.command()
@click.argument("directions", nargs=-1, type=click.IntRange(0, 5))
def classify(directions: tuple[int, ...]):
    """Classify a road tile from its connection directions."""
    tile, issues = classify_with_issues(list(directions))
    click.echo(f"Shape: {tile.shape.value}")
    click.echo(f"Rotation: {tile.rotation}")
    click.echo(f"Model: {model_path(tile.shape)}")
    for issue in issues:
        click.echo(f"Warning: {issue.message}")


@cli.command()
@click.option("--delta", nargs=2, type=int, default=None, help="Axial step DQ DR to a neighbor")
@click.option("--angle", type=float, default=None, help="World angle in radians")
def side(delta: Optional[tuple[int, int]], angle: Optional[float]):
    """Show the side letter for a neighbor step or an angle."""
    if (delta is None) == (angle is None):
        raise click.UsageError("Give exactly one of --delta or --angle")

    if delta is not None:
        index = neighbor_delta_to_side_index(*delta)
        if index is None:
            click.echo(f"Delta {delta} is not a neighbor step")
            return
    else:
        try:
            index = angle_to_side_index(angle)
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="--angle")

    click.echo(f"Side: {side_index_to_letter(index)} ({index}) {DIRECTION_NAMES[index]}")


@cli.command()
@click.argument("entry")
@click.argument("exit_side", metavar="EXIT")
@click.option("--assets", default=None, help="Path to road_assets.toml")
def asset(entry: str, exit_side: str, assets: Optional[str]):
    """Resolve an entry/exit asset key (sides as letters or indices)."""
    try:
        entry_index = _parse_side(entry)
        exit_index = _parse_side(exit_side)
    except ValueError as e:
        raise click.BadParameter(str(e))

    catalog = AssetCatalog.from_toml(assets) if assets else AssetCatalog.default()
    resolution = catalog.resolve(entry_index, exit_index)
    if resolution.is_fallback:
        click.echo(f"Unavailable: {resolution.requested}")
        click.echo(f"Fallback: {resolution.fallback.shape.value}")
    else:
        click.echo(f"Asset: {resolution.key}")
        click.echo(f"Path: {resolution.path}")


@cli.command()
@click.argument("snapshot", type=click.Path(exists=True, dir_okay=False))
def board(snapshot: str):
    """Load a board snapshot and list the tile of every road cell."""
    try:
        data = BoardSnapshot.model_validate_json(Path(snapshot).read_text())
    except ValidationError as e:
        click.echo(f"Invalid snapshot: {e.error_count()} errors")
        raise SystemExit(1)

    spatial_board, report = SpatialBoard.from_snapshot(data)

    click.echo(f"Board radius: {spatial_board.radius}")
    click.echo(f"Road cells: {len(spatial_board.road_cells())}")
    for (q, r), tile in spatial_board.road_tiles().items():
        connections = spatial_board.connections(q, r)
        click.echo(f"  ({q}, {r}) {tile.shape.value} connections={connections}")

    for zone in spatial_board.zones():
        center = spatial_board.zone_center(zone.zone_id)
        click.echo(f"Zone {zone.zone_id} ({zone.name}): {len(zone.cells)} cells, center={center}")

    for issue in report.errors:
        click.echo(f"Error: {issue.message}")
    for issue in report.warnings:
        click.echo(f"Warning: {issue.message}")


if __name__ == "__main__":
    cli()
