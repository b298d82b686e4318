"""Road tile schemas."""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict


class RoadShape(str, Enum):
    """Closed set of pre-authored road segment shapes."""
    STRAIGHT = "straight"
    TURN60_LEFT = "turn60_left"
    TURN60_RIGHT = "turn60_right"
    TURN120_LEFT = "turn120_left"
    TURN120_RIGHT = "turn120_right"


class RoadTile(BaseModel):
    """Shape of the road segment a cell displays.

    Orientation is baked into the shape variants, so rotation is always 0.
    """

    model_config = ConfigDict(frozen=True)

    shape: RoadShape
    rotation: Literal[0] = 0
