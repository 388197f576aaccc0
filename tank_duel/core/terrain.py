"""Destructible terrain stored as a boolean occupancy grid."""

from __future__ import annotations

import math
from typing import Iterable, List, Optional, Tuple


class TerrainField:
    """Solid/empty mask over the play area.

    The field is split into square cells of ``cell`` pixels. Cells only ever
    go from solid to empty while a match runs; :meth:`reset` restores the
    untouched ground for a new match.
    """

    def __init__(self, width: int, height: int, ground_y: float, cell: int = 4) -> None:
        self.width = width
        self.height = height
        self.ground_y = ground_y
        self.cell = max(1, int(cell))
        self.cols = int(math.ceil(width / self.cell))
        self.rows = int(math.ceil(height / self.cell))
        self._grid: List[bytearray] = []
        self.reset()

    # ------------------------------------------------------------------
    # Lifecycle
    def reset(self) -> None:
        first_solid = self._row_of(self.ground_y)
        self._grid = [
            bytearray(b"\x01" * self.cols if row >= first_solid else b"\x00" * self.cols)
            for row in range(self.rows)
        ]

    # ------------------------------------------------------------------
    # Queries
    def is_inside(self, x: float, y: float) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_solid(self, x: float, y: float) -> bool:
        if not self.is_inside(x, y):
            return False
        return bool(self._grid[int(y) // self.cell][int(x) // self.cell])

    def probe(self, x: float, y: float, radius: float) -> Optional[Tuple[float, float]]:
        """Return the first solid point of the centre-plus-four-cardinals ring."""

        for px, py in ring_points(x, y, radius):
            if self.is_solid(px, py):
                return px, py
        return None

    def surface_y(self, x: float) -> Optional[float]:
        """Top edge of the highest solid cell in the column containing ``x``."""

        if not 0 <= x < self.width:
            return None
        col = int(x) // self.cell
        for row in range(self.rows):
            if self._grid[row][col]:
                return float(row * self.cell)
        return None

    def solid_count(self) -> int:
        return sum(sum(row) for row in self._grid)

    def cell_is_solid(self, col: int, row: int) -> bool:
        return bool(self._grid[row][col])

    # ------------------------------------------------------------------
    # Destruction
    def carve(self, cx: float, cy: float, radius: float) -> int:
        """Clear every cell whose centre lies within the circle.

        Returns the number of cells that changed, so repeating a carve
        reports ``0``.
        """

        if radius <= 0:
            return 0
        cell = self.cell
        half = cell / 2.0
        col_start = max(0, int((cx - radius) // cell))
        col_end = min(self.cols - 1, int((cx + radius) // cell))
        row_start = max(0, int((cy - radius) // cell))
        row_end = min(self.rows - 1, int((cy + radius) // cell))
        limit = radius * radius
        cleared = 0
        for row in range(row_start, row_end + 1):
            line = self._grid[row]
            dy = row * cell + half - cy
            for col in range(col_start, col_end + 1):
                if not line[col]:
                    continue
                dx = col * cell + half - cx
                if dx * dx + dy * dy <= limit:
                    line[col] = 0
                    cleared += 1
        return cleared

    # ------------------------------------------------------------------
    # Utilities
    def iter_rows(self, scale: int = 1) -> Iterable[str]:
        """ASCII view of the grid, sampling every ``scale`` cells."""

        scale = max(1, scale)
        for row in range(0, self.rows, scale):
            line = self._grid[row]
            yield "".join("#" if line[col] else " " for col in range(0, self.cols, scale))

    def _row_of(self, y: float) -> int:
        return max(0, min(self.rows, int(math.ceil(y / self.cell))))


def ring_points(x: float, y: float, radius: float) -> Tuple[Tuple[float, float], ...]:
    return (
        (x, y),
        (x, y + radius),
        (x + radius, y),
        (x - radius, y),
        (x, y - radius),
    )


__all__ = ["TerrainField", "ring_points"]
