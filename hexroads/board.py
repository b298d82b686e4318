"""Spatial board: cell occupancy, zones and road cells.

All board state changes go through SpatialBoard. Edits return an
EditResult instead of raising; a rejected edit leaves the board untouched.
"""

import logging
from fractions import Fraction
from typing import Iterable, Optional

from hexroads import config
from hexroads.connectivity import ConnectivityResolver
from hexroads.hex_coords import (
    cells_between,
    coords_to_key,
    is_valid,
    key_to_coords,
    neighborhood,
    to_world,
)
from hexroads.issues import EditResult, Issue, IssueCode
from hexroads.schemas import (
    BoardSnapshot,
    BuildingOccupancy,
    Cell,
    EmptyOccupancy,
    HexCoord,
    RoadTile,
    Zone,
    ZoneCenterOccupancy,
)
from hexroads.side_indexer import AssetCatalog, AssetResolution
from hexroads.tile_classifier import classify_with_issues

logger = logging.getLogger(__name__)

Coord = tuple[int, int]


class SpatialBoard:
    """Registry of cell state for one project's hex board."""

    def __init__(
        self,
        radius: int = config.DEFAULT_BOARD_RADIUS,
        hex_size: float = config.HEX_SIZE,
        asset_catalog: Optional[AssetCatalog] = None,
    ):
        if radius < 0:
            raise ValueError(f"Board radius must be >= 0, got {radius}")
        self.radius = radius
        self.hex_size = hex_size
        self.asset_catalog = asset_catalog

        self._buildings: dict[Coord, str] = {}
        self._cell_zone: dict[Coord, str] = {}
        self._zones: dict[str, Zone] = {}
        # Insertion-ordered member sets, dict keys stand in for an ordered set
        self._zone_members: dict[str, dict[Coord, None]] = {}
        self._roads: set[Coord] = set()
        self._tiles: dict[Coord, RoadTile] = {}

        self.connectivity = ConnectivityResolver(self._roads)

    # ------------------------------------------------------------------
    # Buildings
    # ------------------------------------------------------------------

    def place_building(self, q: int, r: int, building_id: str) -> EditResult:
        """Put a building on a cell.

        Placing the same building again is a no-op; a different building
        on the cell rejects the edit.
        """
        if not is_valid(q, r, self.radius):
            return EditResult.rejected(self._invalid((q, r)))

        current = self._buildings.get((q, r))
        if current is not None and current != building_id:
            return EditResult.rejected(Issue(
                code=IssueCode.CELL_ALREADY_OCCUPIED,
                message=f"Cell {coords_to_key(q, r)} already holds building {current}",
                coord=(q, r),
            ))

        self._buildings[(q, r)] = building_id
        logger.debug(f"Placed building {building_id} at {q},{r}")
        return EditResult()

    def clear_building(self, q: int, r: int) -> EditResult:
        """Remove the building from a cell, if any."""
        if not is_valid(q, r, self.radius):
            return EditResult.rejected(self._invalid((q, r)))

        removed = self._buildings.pop((q, r), None)
        if removed is not None:
            logger.debug(f"Cleared building {removed} from {q},{r}")
        return EditResult()

    def building_at(self, q: int, r: int) -> Optional[str]:
        return self._buildings.get((q, r))

    # ------------------------------------------------------------------
    # Zones
    # ------------------------------------------------------------------

    def add_zone(
        self,
        zone_id: str,
        name: str,
        color: str = config.DEFAULT_ZONE_COLOR,
    ) -> Zone:
        """Register a zone, or update name and color of an existing one."""
        zone = Zone(zone_id=zone_id, name=name, color=color)
        self._zones[zone_id] = zone
        self._zone_members.setdefault(zone_id, {})
        return self.zone(zone_id)

    def assign_zone(self, cells: Iterable[Coord], zone_id: str) -> EditResult:
        """Add cells to a zone.

        All-or-nothing: an invalid cell or a cell of another zone rejects
        the whole edit. Cells already in this zone are left as they are.
        """
        if zone_id not in self._zones:
            return EditResult.rejected(Issue(
                code=IssueCode.UNKNOWN_ZONE,
                message=f"Zone {zone_id} is not registered",
            ))

        cells = list(dict.fromkeys(cells))
        errors: list[Issue] = []
        for q, r in cells:
            if not is_valid(q, r, self.radius):
                errors.append(self._invalid((q, r)))
                continue
            other = self.zone_of(q, r)
            if other is not None and other != zone_id:
                errors.append(Issue(
                    code=IssueCode.CELL_ALREADY_ZONED,
                    message=f"Cell {coords_to_key(q, r)} already belongs to zone {other}",
                    coord=(q, r),
                ))
        if errors:
            return EditResult.rejected(*errors)

        members = self._zone_members[zone_id]
        for coord in cells:
            self._cell_zone[coord] = zone_id
            members[coord] = None
        logger.debug(f"Zone {zone_id} now has {len(members)} cells")
        return EditResult()

    def unassign_zone(self, cells: Iterable[Coord]) -> EditResult:
        """Remove cells from whatever zone holds them."""
        for coord in cells:
            zone_id = self._cell_zone.pop(coord, None)
            if zone_id is not None:
                self._zone_members[zone_id].pop(coord, None)
        return EditResult()

    def remove_zone(self, zone_id: str) -> EditResult:
        """Drop a zone and release all of its cells."""
        if zone_id not in self._zones:
            return EditResult.rejected(Issue(
                code=IssueCode.UNKNOWN_ZONE,
                message=f"Zone {zone_id} is not registered",
            ))
        for coord in self._zone_members.pop(zone_id):
            self._cell_zone.pop(coord, None)
        del self._zones[zone_id]
        logger.debug(f"Removed zone {zone_id}")
        return EditResult()

    def zone(self, zone_id: str) -> Optional[Zone]:
        """Copy of a zone with its current members."""
        zone = self._zones.get(zone_id)
        if zone is None:
            return None
        return zone.model_copy(update={
            "cells": [HexCoord(q=q, r=r) for q, r in self._zone_members[zone_id]],
        })

    def zones(self) -> list[Zone]:
        return [self.zone(zone_id) for zone_id in self._zones]

    def zone_of(self, q: int, r: int) -> Optional[str]:
        return self._cell_zone.get((q, r))

    def zone_center(self, zone_id: str) -> Optional[Coord]:
        """Member cell closest to the zone's centroid.

        The centroid is the exact average of member q and r. Distance is
        Euclidean in the board plane, where an axial step (dq, dr) has
        squared length dq^2 + dq*dr + dr^2, not dq^2 + dr^2. Ties go to
        the smallest (q, r).
        """
        members = self._zone_members.get(zone_id)
        if not members:
            return None

        count = len(members)
        avg_q = Fraction(sum(q for q, _ in members), count)
        avg_r = Fraction(sum(r for _, r in members), count)

        def sort_key(coord: Coord) -> tuple[Fraction, Coord]:
            dq = coord[0] - avg_q
            dr = coord[1] - avg_r
            # Squared world distance divided by 3*size^2
            return (dq * dq + dq * dr + dr * dr, coord)

        return min(members, key=sort_key)

    # ------------------------------------------------------------------
    # Roads
    # ------------------------------------------------------------------

    def set_road(self, q: int, r: int, present: bool = True) -> EditResult:
        """Add or remove road on a cell and refresh nearby tiles.

        Only the cell and its neighbors are reclassified.
        """
        if not is_valid(q, r, self.radius):
            return EditResult.rejected(self._invalid((q, r)))

        if present:
            self._roads.add((q, r))
        else:
            self._roads.discard((q, r))

        result = EditResult()
        self._refresh_tiles(neighborhood(q, r), result)
        return result

    def lay_road(self, start: Coord, end: Coord, present: bool = True) -> EditResult:
        """Set or clear road on every cell of the straight line start..end."""
        path = cells_between(start, end)
        invalid = [self._invalid(c) for c in path if not is_valid(c[0], c[1], self.radius)]
        if invalid:
            return EditResult.rejected(*invalid)

        for coord in path:
            if present:
                self._roads.add(coord)
            else:
                self._roads.discard(coord)

        affected: dict[Coord, None] = {}
        for q, r in path:
            affected.update(dict.fromkeys(neighborhood(q, r)))

        result = EditResult()
        self._refresh_tiles(affected, result)
        return result

    def has_road(self, q: int, r: int) -> bool:
        return (q, r) in self._roads

    def road_cells(self) -> list[Coord]:
        return sorted(self._roads)

    def road_tile(self, q: int, r: int) -> Optional[RoadTile]:
        """Current tile of a road cell, None for cells without road."""
        return self._tiles.get((q, r))

    def road_tiles(self) -> dict[Coord, RoadTile]:
        return {coord: self._tiles[coord] for coord in sorted(self._tiles)}

    def connections(self, q: int, r: int) -> list[int]:
        return self.connectivity.connections(q, r)

    def resolve_asset(self, q: int, r: int, entry_side: int, exit_side: int) -> AssetResolution:
        """Entry/exit asset for a road cell, falling back to its generic tile."""
        catalog = self.asset_catalog
        if catalog is None:
            catalog = self.asset_catalog = AssetCatalog.default()
        return catalog.resolve(entry_side, exit_side, self.connections(q, r))

    def _refresh_tiles(self, coords: Iterable[Coord], result: EditResult) -> None:
        for coord in coords:
            if coord not in self._roads:
                self._tiles.pop(coord, None)
                continue
            tile, issues = classify_with_issues(self.connectivity.connections(*coord), coord)
            self._tiles[coord] = tile
            result.updated.append(coord)
            result.warnings.extend(issues)

    # ------------------------------------------------------------------
    # Cells
    # ------------------------------------------------------------------

    def cell(self, q: int, r: int) -> Optional[Cell]:
        """Snapshot of one cell with its derived occupancy and tile.

        Returns None for coordinates outside the board radius.
        """
        if not is_valid(q, r, self.radius):
            return None

        zone_id = self.zone_of(q, r)
        building_id = self._buildings.get((q, r))
        if building_id is not None:
            occupancy = BuildingOccupancy(building_id=building_id)
        elif zone_id is not None and self.zone_center(zone_id) == (q, r):
            occupancy = ZoneCenterOccupancy(zone_id=zone_id)
        else:
            occupancy = EmptyOccupancy()

        return Cell(
            coord=HexCoord(q=q, r=r),
            occupancy=occupancy,
            zone_id=zone_id,
            has_road=(q, r) in self._roads,
            road_tile=self._tiles.get((q, r)),
        )

    def is_valid(self, q: int, r: int) -> bool:
        return is_valid(q, r, self.radius)

    def world_position(self, q: int, r: int) -> tuple[float, float, float]:
        return to_world(q, r, self.hex_size)

    def _invalid(self, coord: Coord) -> Issue:
        return Issue(
            code=IssueCode.INVALID_COORDINATE,
            message=f"Cell {coords_to_key(*coord)} is outside board radius {self.radius}",
            coord=coord,
        )

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    @classmethod
    def from_snapshot(
        cls,
        snapshot: BoardSnapshot,
        hex_size: float = config.HEX_SIZE,
        asset_catalog: Optional[AssetCatalog] = None,
    ) -> tuple["SpatialBoard", EditResult]:
        """Build a board from persisted state.

        Entries that break board invariants are skipped and reported in the
        returned result; everything else is loaded.
        """
        board = cls(radius=snapshot.radius, hex_size=hex_size, asset_catalog=asset_catalog)
        report = EditResult()

        for key, building_id in snapshot.buildings.items():
            q, r = key_to_coords(key)
            board._merge(report, board.place_building(q, r, building_id))

        for zone in snapshot.zones:
            board.add_zone(zone.zone_id, zone.name, zone.color)
            board._merge(report, board.assign_zone([c.as_tuple() for c in zone.cells], zone.zone_id))

        for coord in snapshot.roads:
            if not board.is_valid(coord.q, coord.r):
                report.valid = False
                report.errors.append(board._invalid(coord.as_tuple()))
                continue
            board._roads.add(coord.as_tuple())

        # One pass over every road cell instead of per-cell neighbor refreshes
        board._refresh_tiles(sorted(board._roads), report)
        logger.info(
            f"Loaded board radius={board.radius}: {len(board._buildings)} buildings, "
            f"{len(board._zones)} zones, {len(board._roads)} road cells"
        )
        return board, report

    def to_snapshot(self) -> BoardSnapshot:
        return BoardSnapshot(
            radius=self.radius,
            buildings={coords_to_key(q, r): bid for (q, r), bid in sorted(self._buildings.items())},
            zones=self.zones(),
            roads=[HexCoord(q=q, r=r) for q, r in sorted(self._roads)],
        )

    @staticmethod
    def _merge(report: EditResult, result: EditResult) -> None:
        if not result.valid:
            report.valid = False
        report.errors.extend(result.errors)
        report.warnings.extend(result.warnings)
