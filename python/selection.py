"""
Cursor and selection state.
"""

from __future__ import annotations

from dataclasses import dataclass

from grid_types import CellPosition, CursorStep, Grid


@dataclass(frozen=True)
class Selection:
    """
    The highlighted cell plus an armed flag.

    When armed, a piece is grabbed and the next directional input is a
    move instead of cursor travel.
    """

    position: CellPosition = CellPosition(0, 0)
    armed: bool = False

    def move(self, direction: CursorStep, grid: Grid) -> Selection:
        """Step the cursor one cell (diagonals included), clamped to the grid bounds (no wrap)."""
        dr, dc = direction.delta
        row = min(max(self.position.row + dr, 0), grid.rows - 1)
        col = min(max(self.position.col + dc, 0), grid.cols - 1)
        return Selection(CellPosition(row, col), self.armed)

    def toggle_arm(self) -> Selection:
        return Selection(self.position, not self.armed)

    def disarmed(self) -> Selection:
        return Selection(self.position, False)
