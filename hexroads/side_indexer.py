"""Side letters and directional road asset keys.

The six sides of a cell are lettered a-f. Side index i is the same physical
direction as direction index i in hex_coords, so grid adjacency and free
angles land on the same letters.
"""

import logging
import math
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from hexroads import config
from hexroads.hex_coords import get_direction, to_world
from hexroads.issues import Issue, IssueCode
from hexroads.schemas import RoadTile
from hexroads.tile_classifier import classify

logger = logging.getLogger(__name__)

SIDE_LETTERS: tuple[str, ...] = ("a", "b", "c", "d", "e", "f")

# Side normal angles after the authoring offset, indexed like SIDE_LETTERS
SIDE_ANGLES: tuple[float, ...] = (
    math.pi / 2,        # a: top
    math.pi / 6,        # b: top-right
    -math.pi / 6,       # c: bottom-right
    -math.pi / 2,       # d: bottom
    -5 * math.pi / 6,   # e: bottom-left
    5 * math.pi / 6,    # f: top-left
)

# Assets are authored with the grid turned 30 degrees against world axes
SIDE_ANGLE_OFFSET = math.pi / 6

# Half-width of the band around +-180 degrees where the input sign decides e/f
WEST_BAND = math.pi / 12


def normalize_angle(angle: float) -> float:
    """Wrap an angle into (-pi, pi].

    Raises:
        ValueError: If angle is inf or nan
    """
    if not math.isfinite(angle):
        raise ValueError(f"Angle must be finite, got {angle}")
    a = math.remainder(angle, 2 * math.pi)
    if a <= -math.pi:
        a = math.pi
    return a


def neighbor_delta_to_side_index(dq: int, dr: int) -> Optional[int]:
    """Side index for an axial step to an adjacent cell, None for any other delta."""
    return get_direction(0, 0, dq, dr)


def angle_to_side_index(angle: float) -> int:
    """Nearest side for a world-space direction angle.

    Args:
        angle: Radians, measured as atan2(-dz, dx) in the world XZ plane

    Returns:
        Side index 0-5

    Raises:
        ValueError: If angle is inf or nan
    """
    a = normalize_angle(angle + SIDE_ANGLE_OFFSET)

    # Near +-180 tiny sign noise would flip between e and f
    if abs(abs(a) - math.pi) < WEST_BAND:
        return 4 if a < 0 else 5

    best = 0
    best_diff = 2 * math.pi
    for index, side_angle in enumerate(SIDE_ANGLES):
        diff = abs(normalize_angle(a - side_angle))
        if diff < best_diff:
            best = index
            best_diff = diff
    return best


def angle_between(
    from_coord: tuple[int, int],
    to_coord: tuple[int, int],
    size: float = 1.0,
) -> float:
    """World-space angle of the vector between two cell centers."""
    x1, _, z1 = to_world(from_coord[0], from_coord[1], size)
    x2, _, z2 = to_world(to_coord[0], to_coord[1], size)
    return math.atan2(-(z2 - z1), x2 - x1)


def side_index_to_letter(index: int) -> str:
    """Letter for a side index; indices wrap modulo 6."""
    return SIDE_LETTERS[index % 6]


def side_letter_to_index(letter: str) -> int:
    letter = letter.lower()
    if letter not in SIDE_LETTERS:
        raise ValueError(f"Unknown side letter: {letter!r}")
    return SIDE_LETTERS.index(letter)


def compose_asset_key(entry_side: int, exit_side: int) -> str:
    """Canonical asset key, e.g. entry_a_exit_d."""
    entry = side_index_to_letter(entry_side)
    exit_ = side_index_to_letter(exit_side)
    return f"entry_{entry}_exit_{exit_}"


def asset_path(key: str) -> str:
    return f"{config.TILES_URL_PREFIX}/{key}.glb"


@dataclass(frozen=True)
class AssetResolution:
    """Outcome of an entry/exit asset lookup.

    Exactly one of key and fallback is set.
    """
    requested: str
    key: Optional[str] = None
    fallback: Optional[RoadTile] = None
    issue: Optional[Issue] = None

    @property
    def is_fallback(self) -> bool:
        return self.key is None

    @property
    def path(self) -> Optional[str]:
        return asset_path(self.key) if self.key else None


class AssetCatalog:
    """Authored entry/exit keys, minus the ones known to be broken."""

    def __init__(self, available: Sequence[str], blocked: Sequence[str] = ()):
        self.available = frozenset(available)
        self.blocked = frozenset(blocked)

    @classmethod
    def from_toml(cls, path: str | Path) -> "AssetCatalog":
        """Load whitelist and blocklist from a road_assets.toml file."""
        with open(path, "rb") as f:
            data = tomllib.load(f)

        entry_exit = data.get("entry_exit", {})
        return cls(
            available=entry_exit.get("available", []),
            blocked=entry_exit.get("blocked", []),
        )

    @classmethod
    def default(cls) -> "AssetCatalog":
        return cls.from_toml(config.ROAD_ASSETS_PATH)

    @property
    def usable(self) -> frozenset[str]:
        return self.available - self.blocked

    def is_usable(self, key: str) -> bool:
        return key in self.usable

    def resolve(
        self,
        entry_side: int,
        exit_side: int,
        fallback_connections: Optional[Sequence[int]] = None,
    ) -> AssetResolution:
        """Resolve an entry/exit pair to an authored key.

        When the key is missing or blocked, the result carries the generic
        classification of fallback_connections instead, which defaults to
        the entry and exit sides themselves.
        """
        key = compose_asset_key(entry_side, exit_side)
        if fallback_connections is None:
            fallback_connections = [entry_side % 6, exit_side % 6]
        if self.is_usable(key):
            return AssetResolution(requested=key, key=key)

        reason = "blocklisted" if key in self.blocked else "not authored"
        logger.debug(f"Asset {key} {reason}, falling back to generic tile")
        return AssetResolution(
            requested=key,
            fallback=classify(fallback_connections),
            issue=Issue(
                code=IssueCode.ASSET_KEY_UNAVAILABLE,
                message=f"Asset {key} is {reason}",
            ),
        )


def resolve_asset(
    entry_side: int,
    exit_side: int,
    catalog: Optional[AssetCatalog] = None,
    fallback_connections: Optional[Sequence[int]] = None,
) -> AssetResolution:
    """Resolve against the given catalog, or the packaged one."""
    if catalog is None:
        catalog = AssetCatalog.default()
    return catalog.resolve(entry_side, exit_side, fallback_connections)
