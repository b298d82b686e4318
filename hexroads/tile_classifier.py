"""Road tile classification from local connectivity.

A cell's tile depends only on which of its six directions lead to other
road cells. Two connections pick a straight or a turn; anything else falls
back to a straight segment.
"""

import logging
from typing import Optional, Sequence

from hexroads import config
from hexroads.issues import Issue, IssueCode
from hexroads.schemas import RoadShape, RoadTile

logger = logging.getLogger(__name__)

# Turn shapes keyed by cyclic separation (in 60 degree steps), (left, right)
TURN_SHAPES: dict[int, tuple[RoadShape, RoadShape]] = {
    1: (RoadShape.TURN60_LEFT, RoadShape.TURN60_RIGHT),
    2: (RoadShape.TURN120_LEFT, RoadShape.TURN120_RIGHT),
}


def classify(connections: Sequence[int]) -> RoadTile:
    """Pick the tile for a cell from its connection directions.

    For two connections [d1, d2] the order matters: the turn is "left" when
    d2 sits exactly diff steps after d1 going clockwise, "right" otherwise.

    Args:
        connections: Direction indices 0-5, as from ConnectivityResolver

    Returns:
        RoadTile with rotation 0
    """
    if len(connections) != 2:
        # Isolated cells, dead ends and intersections have no dedicated shape
        return RoadTile(shape=RoadShape.STRAIGHT)

    d1, d2 = connections
    angle_diff = abs(d2 - d1)
    diff = min(angle_diff, 6 - angle_diff)

    if diff not in TURN_SHAPES:
        # Opposite directions, or a repeated direction
        return RoadTile(shape=RoadShape.STRAIGHT)

    left, right = TURN_SHAPES[diff]
    is_left = (d2 - d1 + 6) % 6 == diff
    return RoadTile(shape=left if is_left else right)


def classify_with_issues(
    connections: Sequence[int],
    coord: Optional[tuple[int, int]] = None,
) -> tuple[RoadTile, list[Issue]]:
    """Classify and report intersections as a soft issue."""
    tile = classify(connections)
    issues: list[Issue] = []
    if len(connections) >= 3:
        logger.info(f"Intersection with {len(connections)} connections at {coord}, using straight")
        issues.append(Issue(
            code=IssueCode.UNSUPPORTED_CONNECTIVITY_DEGREE,
            message=f"{len(connections)} road connections, no intersection tile; using straight",
            coord=coord,
        ))
    return tile, issues


def model_name(shape: RoadShape) -> str:
    """Asset stem for a tile shape."""
    return shape.value


def model_path(shape: RoadShape) -> str:
    """Asset path for a tile shape, relative to the tiles prefix."""
    return f"{config.TILES_URL_PREFIX}/{model_name(shape)}.glb"
