"""
Level and save file codec for pipegrid.

A level is row-major text, one glyph per cell, rows separated by line
breaks. The legend is a fixed bijection:

    █  wall
    ╵ ╶ ╷ ╴              single stub  (N, E, S, W)
    └ │ ┘ ┌ ─ ┐          two stubs    (NE, NS, NW, ES, EW, SW)
    ├ ┴ ┤ ┬              three stubs  (NES, NEW, NSW, ESW)
    ┼                    four stubs

Heavy-line and double-line box glyphs are not part of the legend and
are rejected.
"""

from __future__ import annotations

import logging
import re
import unicodedata

from grid_types import Cell, Direction, Grid, ParseError, Pipe, Wall

__all__ = ["WALL_GLYPH", "PIPE_GLYPHS", "parse_level", "format_level"]

logger = logging.getLogger(__name__)

N, E, S, W = Direction.N, Direction.E, Direction.S, Direction.W

WALL_GLYPH = "█"

PIPE_GLYPHS: dict[frozenset[Direction], str] = {
    frozenset({N}): "╵",
    frozenset({E}): "╶",
    frozenset({S}): "╷",
    frozenset({W}): "╴",
    frozenset({N, E}): "└",
    frozenset({N, S}): "│",
    frozenset({N, W}): "┘",
    frozenset({E, S}): "┌",
    frozenset({E, W}): "─",
    frozenset({S, W}): "┐",
    frozenset({N, E, S}): "├",
    frozenset({N, E, W}): "┴",
    frozenset({N, S, W}): "┤",
    frozenset({E, S, W}): "┬",
    frozenset({N, E, S, W}): "┼",
}

_GLYPH_TO_CELL: dict[str, Cell] = {glyph: Pipe(connectors) for connectors, glyph in PIPE_GLYPHS.items()}
_GLYPH_TO_CELL[WALL_GLYPH] = Wall()

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def _describe_unknown(char: str) -> str:
    name = unicodedata.name(char, "")
    if name.startswith("BOX DRAWINGS") and ("HEAVY" in name or "DOUBLE" in name):
        return f"'{char}' is a heavy/double box glyph ({name.lower()}); only light-line glyphs are supported"
    return f"'{char}' ({name.lower() or f'U+{ord(char):04X}'}) is not a level glyph"


def parse_level(text: str) -> Grid:
    """
    Parse level or save text into a Grid.

    Accepts \\n, \\r\\n and \\r line breaks. Trailing empty lines are ignored.

    Args:
        text: The level text

    Returns:
        The parsed grid

    Raises:
        ParseError: On an empty grid, an unknown glyph, or rows of unequal width
    """
    row_strings = _LINE_BREAK.split(text)
    while row_strings and row_strings[-1] == "":
        row_strings.pop()

    if not row_strings:
        raise ParseError("Empty level: expected at least one row of glyphs")

    rows: list[tuple[Cell, ...]] = []
    for row_idx, row_str in enumerate(row_strings):
        cells: list[Cell] = []
        for col_idx, char in enumerate(row_str):
            cell = _GLYPH_TO_CELL.get(char)
            if cell is None:
                raise ParseError(
                    f"Invalid glyph at row {row_idx}, column {col_idx}: {_describe_unknown(char)}\n"
                    f"  Row {row_idx}: \"{row_str}\"\n"
                    f"  Valid glyphs: {WALL_GLYPH} {' '.join(PIPE_GLYPHS.values())}"
                )
            cells.append(cell)
        rows.append(tuple(cells))

    cols = len(rows[0])
    if cols == 0:
        raise ParseError("Empty level: row 0 has no cells")
    mismatched = [(i, len(row)) for i, row in enumerate(rows) if len(row) != cols]
    if mismatched:
        error_msg = (
            f"Inconsistent row lengths\n"
            f"  Expected: {cols} columns (from row 0)\n"
            f"  Mismatched rows:\n"
        )
        for row_idx, actual_cols in mismatched:
            error_msg += f"    Row {row_idx}: {actual_cols} columns - \"{row_strings[row_idx]}\"\n"
        error_msg += "  All rows must have the same number of cells"
        raise ParseError(error_msg)

    logger.debug("parse_level: %dx%d grid", len(rows), cols)
    return Grid(tuple(rows))


def format_level(grid: Grid) -> str:
    """Encode a grid as level text, one line per row with a final newline."""
    lines: list[str] = []
    for row in grid.cells:
        chars: list[str] = []
        for cell in row:
            match cell:
                case Wall():
                    chars.append(WALL_GLYPH)
                case Pipe(connectors=connectors):
                    chars.append(PIPE_GLYPHS[connectors])
                case _:
                    raise ValueError(f"Unknown cell type: {cell}")
        lines.append("".join(chars))
    return "\n".join(lines) + "\n"
