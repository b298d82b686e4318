"""Integration tests for the board-to-tile flow.

Exercises the path the rendering layer relies on:
    board edits -> localized reclassification -> tile shapes / asset keys
"""

import pytest

from hexroads import SpatialBoard, classify
from hexroads.hex_coords import get_direction, hexes_in_radius
from hexroads.schemas import RoadShape
from hexroads.side_indexer import angle_between, angle_to_side_index, neighbor_delta_to_side_index


class TestEndToEnd:
    """Road edits across a whole board stay consistent with a fresh rescan."""

    def test_incremental_matches_full_rescan(self):
        board = SpatialBoard(radius=4)
        edits = [
            ((0, 0), True), ((1, 0), True), ((2, -1), True), ((2, 0), True),
            ((-1, 1), True), ((0, 1), True), ((1, 0), False), ((3, -1), True),
            ((-2, 2), True), ((0, 0), False), ((0, 0), True), ((1, -1), True),
        ]
        for (q, r), present in edits:
            assert board.set_road(q, r, present).valid

        for q, r in board.road_cells():
            assert board.road_tile(q, r) == classify(board.connections(q, r))
        assert set(board.road_tiles()) == set(board.road_cells())

    def test_order_of_edits_does_not_matter(self):
        cells = [(0, 0), (1, 0), (1, -1), (2, -1), (-1, 0), (-1, 1)]
        forward = SpatialBoard(radius=3)
        backward = SpatialBoard(radius=3)
        for q, r in cells:
            forward.set_road(q, r, True)
        for q, r in reversed(cells):
            backward.set_road(q, r, True)
        assert forward.road_tiles() == backward.road_tiles()

    def test_path_entry_exit_keys(self):
        """A winding road yields entry/exit sides from grid adjacency."""
        board = SpatialBoard(radius=3)
        path = [(-1, 0), (0, 0), (0, 1), (1, 1)]
        for q, r in path:
            board.set_road(q, r, True)

        prev, cell, nxt = path[0], path[1], path[2]
        entry = get_direction(*cell, *prev)
        exit_ = get_direction(*cell, *nxt)
        assert (entry, exit_) == (4, 2)  # e -> c

        resolution = board.resolve_asset(*cell, entry, exit_)
        assert resolution.key == "entry_e_exit_c"
        assert board.road_tile(*cell).shape == RoadShape.TURN120_LEFT

    @pytest.mark.parametrize("radius", [1, 3])
    def test_angle_and_delta_tables_agree_everywhere(self, radius):
        for q, r in hexes_in_radius(radius):
            for dq, dr in [(1, -1), (1, 0), (0, 1), (-1, 1), (-1, 0), (0, -1)]:
                angle = angle_between((q, r), (q + dq, r + dr))
                assert angle_to_side_index(angle) == neighbor_delta_to_side_index(dq, dr)
