"""
Move engine: the swap rule.

An armed selection plus a direction exchanges the selected pipe with the
pipe next to it in that direction. The cursor follows the moved piece
and the selection is disarmed.
"""

from __future__ import annotations

from grid_types import Direction, Grid, IllegalMoveError, Pipe, Wall
from selection import Selection


def check_move(grid: Grid, selection: Selection, direction: Direction) -> None:
    """
    Validate a move without applying it.

    Raises:
        IllegalMoveError: If the selection is not armed, the selected cell is
            not a pipe, or the target is off-grid or a wall
    """
    source = selection.position
    if not selection.armed:
        raise IllegalMoveError("No piece selected")
    if not grid.in_bounds(source) or not isinstance(grid.get(source), Pipe):
        raise IllegalMoveError(f"Selected cell ({source.row}, {source.col}) is not a pipe")

    target = source.step(direction)
    if not grid.in_bounds(target):
        raise IllegalMoveError(
            f"Cannot move {direction.value} from ({source.row}, {source.col}): edge of grid"
        )
    if isinstance(grid.get(target), Wall):
        raise IllegalMoveError(
            f"Cannot move {direction.value} from ({source.row}, {source.col}): "
            f"wall at ({target.row}, {target.col})"
        )


def apply_move(grid: Grid, selection: Selection, direction: Direction) -> tuple[Grid, Selection]:
    """
    Swap the selected pipe with its neighbor in `direction`.

    Args:
        grid: The current grid (left unchanged)
        selection: An armed selection on a pipe
        direction: Which neighbor to swap with

    Returns:
        (new grid, disarmed selection on the target cell)

    Raises:
        IllegalMoveError: See `check_move`
    """
    check_move(grid, selection, direction)
    target = selection.position.step(direction)
    return grid.swap(selection.position, target), Selection(target, armed=False)
