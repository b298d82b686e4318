"""Base types for hexroads schemas."""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field


class HexCoord(BaseModel):
    """Axial hex coordinates."""

    q: int
    r: int

    def __hash__(self) -> int:
        return hash((self.q, self.r))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HexCoord):
            return False
        return self.q == other.q and self.r == other.r

    def as_tuple(self) -> tuple[int, int]:
        return (self.q, self.r)

    def distance_to(self, other: "HexCoord") -> int:
        """Calculate hex distance using axial coordinates."""
        dq = abs(self.q - other.q)
        dr = abs(self.r - other.r)
        ds = abs((self.q + self.r) - (other.q + other.r))
        return max(dq, dr, ds)


class EmptyOccupancy(BaseModel):
    """Nothing stands on the cell."""

    kind: Literal["none"] = "none"


class BuildingOccupancy(BaseModel):
    """A building (work item) stands on the cell."""

    kind: Literal["building"] = "building"
    building_id: str = Field(min_length=1)


class ZoneCenterOccupancy(BaseModel):
    """The cell is the anchor of its zone."""

    kind: Literal["zone_center"] = "zone_center"
    zone_id: str = Field(min_length=1)


Occupancy = Annotated[
    Union[EmptyOccupancy, BuildingOccupancy, ZoneCenterOccupancy],
    Field(discriminator="kind"),
]
