"""
Shared type definitions for the pipegrid puzzle.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator


class Direction(Enum):
    """Cardinal direction for cursor travel, moves and connectors."""

    N = "N"  # Up (decreasing row)
    E = "E"  # Right (increasing col)
    S = "S"  # Down (increasing row)
    W = "W"  # Left (decreasing col)

    @property
    def delta(self) -> tuple[int, int]:
        """(row, col) offset of one step in this direction."""
        return _DELTAS[self]

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]


_DELTAS = {
    Direction.N: (-1, 0),
    Direction.E: (0, 1),
    Direction.S: (1, 0),
    Direction.W: (0, -1),
}

_OPPOSITES = {
    Direction.N: Direction.S,
    Direction.E: Direction.W,
    Direction.S: Direction.N,
    Direction.W: Direction.E,
}


class Diagonal(Enum):
    """Diagonal cursor step. Pieces and connectors only use `Direction`."""

    NE = (Direction.N, Direction.E)
    SE = (Direction.S, Direction.E)
    SW = (Direction.S, Direction.W)
    NW = (Direction.N, Direction.W)

    @property
    def delta(self) -> tuple[int, int]:
        vertical, horizontal = self.value
        return vertical.delta[0], horizontal.delta[1]


CursorStep = Direction | Diagonal


# =============================================================================
# Errors
# =============================================================================


class PipeGridError(Exception):
    """Base class for every recoverable puzzle error."""


class ParseError(PipeGridError, ValueError):
    """Malformed level or save text."""


class IllegalMoveError(PipeGridError):
    """A selection or move request broke the move rule."""


class NoHistoryError(PipeGridError):
    """Undo or redo was requested against an empty stack."""


# =============================================================================
# Grid Definition Types
# =============================================================================


@dataclass(frozen=True)
class Wall:
    """A wall cell. Never selectable, never moved."""

    pass


@dataclass(frozen=True)
class Pipe:
    """A pipe segment with a stub on each edge in `connectors`."""

    connectors: frozenset[Direction]

    def __post_init__(self) -> None:
        if not self.connectors:
            raise ValueError("A pipe needs at least one connector")

    def has(self, direction: Direction) -> bool:
        return direction in self.connectors


Cell = Wall | Pipe


@dataclass(frozen=True)
class CellPosition:
    """A (row, col) position within a grid."""

    row: int
    col: int

    def step(self, direction: Direction) -> CellPosition:
        dr, dc = direction.delta
        return CellPosition(self.row + dr, self.col + dc)


@dataclass(frozen=True)
class Grid:
    """
    A fixed-size 2D grid of cells.

    Grids are values: `with_connectors` and `swap` return a new grid and
    leave the receiver untouched, so a grid can be shared freely between
    the live session and any number of history entries.
    """

    cells: tuple[tuple[Cell, ...], ...]

    @property
    def rows(self) -> int:
        return len(self.cells)

    @property
    def cols(self) -> int:
        return len(self.cells[0]) if self.cells else 0

    def in_bounds(self, pos: CellPosition) -> bool:
        return 0 <= pos.row < self.rows and 0 <= pos.col < self.cols

    def get(self, pos: CellPosition) -> Cell:
        """
        Get the cell at a given position.

        Raises:
            IndexError: If the position lies outside the grid
        """
        if not self.in_bounds(pos):
            raise IndexError(f"Position ({pos.row}, {pos.col}) outside {self.rows}x{self.cols} grid")
        return self.cells[pos.row][pos.col]

    def positions(self) -> Iterator[CellPosition]:
        """Iterate over all positions in row-major order."""
        for r in range(self.rows):
            for c in range(self.cols):
                yield CellPosition(r, c)

    def pipe_positions(self) -> Iterator[CellPosition]:
        for pos in self.positions():
            if isinstance(self.cells[pos.row][pos.col], Pipe):
                yield pos

    def with_connectors(self, pos: CellPosition, connectors: frozenset[Direction]) -> Grid:
        """
        Return a new grid with the pipe at `pos` carrying `connectors`.

        Raises:
            IndexError: If the position lies outside the grid
            ValueError: If the cell is a wall or `connectors` is empty
        """
        if isinstance(self.get(pos), Wall):
            raise ValueError(f"Cannot set connectors on wall at ({pos.row}, {pos.col})")
        return self._replace({pos: Pipe(connectors)})

    def swap(self, a: CellPosition, b: CellPosition) -> Grid:
        """Return a new grid with the cells at `a` and `b` exchanged."""
        return self._replace({a: self.get(b), b: self.get(a)})

    def _replace(self, updates: dict[CellPosition, Cell]) -> Grid:
        mutable_cells = [list(row) for row in self.cells]
        for pos, cell in updates.items():
            mutable_cells[pos.row][pos.col] = cell
        return Grid(tuple(tuple(row) for row in mutable_cells))
