"""
ASCII rendering for pipegrid boards.

Turns a RenderModel into coloured text: one glyph per cell, the cursor
highlighted, pipes coloured by whether they still have open ends.
"""

from __future__ import annotations

import logging
from typing import Callable

import simple_chalk as chalk  # type: ignore[import-untyped]

from grid_parser import PIPE_GLYPHS, WALL_GLYPH
from grid_types import CellPosition, Pipe, Wall
from session import RenderModel

logger = logging.getLogger(__name__)

SOLVED_MARK = "✓"


def cell_color(model: RenderModel, pos: CellPosition, open_positions: set[CellPosition]) -> Callable[[str], str]:
    """Pick the colour for one cell."""
    if pos == model.selection.position:
        return chalk.yellowBright if model.selection.armed else chalk.white
    cell = model.grid.cells[pos.row][pos.col]
    if isinstance(cell, Wall):
        return chalk.blue
    if pos in open_positions:
        return chalk.red
    if model.win.primary:
        return chalk.green
    return chalk.cyan


def render(model: RenderModel, color: bool = True) -> str:
    """
    Render the board of a RenderModel.

    Args:
        model: The session view to draw
        color: Emit ANSI colours; without colour the output is the level text
            minus its final newline

    Returns:
        The board, one line per row
    """
    open_positions = {end.position for end in model.win.open_ends}
    lines: list[str] = []
    for r, row in enumerate(model.grid.cells):
        chars: list[str] = []
        for c, cell in enumerate(row):
            match cell:
                case Wall():
                    glyph = WALL_GLYPH
                case Pipe(connectors=connectors):
                    glyph = PIPE_GLYPHS[connectors]
                case _:
                    raise ValueError(f"Unknown cell type: {cell}")
            if color:
                glyph = cell_color(model, CellPosition(r, c), open_positions)(glyph)
            chars.append(glyph)
        lines.append("".join(chars))
    logger.debug("render: %d rows, %d open ends", len(lines), len(model.win.open_ends))
    return "\n".join(lines)


def render_turn(model: RenderModel) -> str:
    """Turn counter line, with a check mark once there are no open ends."""
    return f"Turn: {model.turn}" + (f" {SOLVED_MARK}" if model.win.primary else "")


def render_status(model: RenderModel) -> str:
    """Goal summary for the status panel."""
    win = model.win
    open_count = len(win.open_ends)
    if win.primary:
        return "All pipes connected - no open ends!"
    if win.secondary:
        return f"One connected shape, {open_count} open end{'s' if open_count != 1 else ''} left"
    return f"{open_count} open end{'s' if open_count != 1 else ''}, {win.component_count} separate shapes"
