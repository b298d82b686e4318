"""Board state schemas: cells, zones and snapshots."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .base import EmptyOccupancy, HexCoord, Occupancy
from .road import RoadTile


class Cell(BaseModel):
    """Read-only view of one board cell.

    Built by the board on every query; editing it has no effect on the board.
    """

    model_config = ConfigDict(frozen=True)

    coord: HexCoord
    occupancy: Occupancy = Field(default_factory=EmptyOccupancy)
    zone_id: Optional[str] = None
    has_road: bool = False
    road_tile: Optional[RoadTile] = None

    @model_validator(mode="after")
    def check_road_tile(self) -> "Cell":
        if self.road_tile is not None and not self.has_road:
            raise ValueError("road_tile requires has_road")
        return self


class Zone(BaseModel):
    """A named, colored group of cells."""

    zone_id: str = Field(min_length=1)
    name: str = Field(max_length=100)
    color: str = Field(default="#FFFFFF", pattern=r"^#[0-9A-Fa-f]{6}$")
    cells: list[HexCoord] = Field(default_factory=list, description="Members in assignment order")

    @field_validator("cells")
    @classmethod
    def validate_unique_cells(cls, v: list[HexCoord]) -> list[HexCoord]:
        if len(set(v)) != len(v):
            raise ValueError("Zone cells must be unique")
        return v


class BoardSnapshot(BaseModel):
    """Serializable board state, as loaded from or handed to persistence."""

    radius: int = Field(ge=0)
    buildings: dict[str, str] = Field(default_factory=dict)  # "q,r" -> building_id
    zones: list[Zone] = Field(default_factory=list)
    roads: list[HexCoord] = Field(default_factory=list)

    @field_validator("buildings")
    @classmethod
    def validate_building_keys(cls, v: dict[str, str]) -> dict[str, str]:
        for key in v:
            parts = key.split(",")
            if len(parts) != 2:
                raise ValueError(f"Building key must look like 'q,r', got {key!r}")
            for part in parts:
                int(part)
        return v
