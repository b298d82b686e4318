"""Pydantic schemas for hexroads."""

from .base import (
    HexCoord,
    EmptyOccupancy,
    BuildingOccupancy,
    ZoneCenterOccupancy,
    Occupancy,
)
from .road import RoadShape, RoadTile
from .board import Cell, Zone, BoardSnapshot

__all__ = [
    # base
    "HexCoord",
    "EmptyOccupancy",
    "BuildingOccupancy",
    "ZoneCenterOccupancy",
    "Occupancy",
    # road
    "RoadShape",
    "RoadTile",
    # board
    "Cell",
    "Zone",
    "BoardSnapshot",
]
