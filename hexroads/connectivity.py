"""Road connectivity between neighboring cells."""

from typing import Container

from hexroads.hex_coords import get_all_neighbors


class ConnectivityResolver:
    """Finds which neighbor directions of a cell carry road.

    Reads road membership live from the given container, so it always
    reflects the current board.
    """

    def __init__(self, road_cells: Container[tuple[int, int]]):
        self.road_cells = road_cells

    def connections(self, q: int, r: int) -> list[int]:
        """Direction indices (ascending) whose neighbor is a road cell."""
        return [
            direction
            for nq, nr, direction in get_all_neighbors(q, r)
            if (nq, nr) in self.road_cells
        ]

    def degree(self, q: int, r: int) -> int:
        return len(self.connections(q, r))
