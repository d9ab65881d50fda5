"""
Win evaluation: open ends and connected components over pipe cells.

Two pipes are linked when they are edge-adjacent and each has a
connector pointing at the other. A connector is an open end when the
cell across that edge is off-grid, a wall, or a pipe without the
reciprocal connector.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Iterator

from grid_types import CellPosition, Direction, Grid, Pipe

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OpenEnd:
    """A connector on `position` pointing in `direction` with no partner."""

    position: CellPosition
    direction: Direction


@dataclass(frozen=True)
class WinState:
    """Derived goal status of a grid."""

    open_ends: tuple[OpenEnd, ...]
    component_count: int

    @property
    def primary(self) -> bool:
        """No open ends anywhere."""
        return not self.open_ends

    @property
    def secondary(self) -> bool:
        """All pipes form a single connected shape (vacuously true with no pipes)."""
        return self.component_count <= 1


def _is_linked(grid: Grid, pos: CellPosition, direction: Direction) -> bool:
    cell = grid.cells[pos.row][pos.col]
    if not isinstance(cell, Pipe) or not cell.has(direction):
        return False
    other = pos.step(direction)
    if not grid.in_bounds(other):
        return False
    neighbor = grid.get(other)
    return isinstance(neighbor, Pipe) and neighbor.has(direction.opposite)


def linked_neighbors(grid: Grid, pos: CellPosition) -> Iterator[CellPosition]:
    """Yield the pipes reciprocally connected to the pipe at `pos`."""
    for direction in Direction:
        if _is_linked(grid, pos, direction):
            yield pos.step(direction)


def find_open_ends(grid: Grid) -> tuple[OpenEnd, ...]:
    """List every unsatisfied connector, in row-major then N/E/S/W order."""
    open_ends: list[OpenEnd] = []
    for pos in grid.pipe_positions():
        match grid.get(pos):
            case Pipe(connectors=connectors):
                for direction in Direction:
                    if direction in connectors and not _is_linked(grid, pos, direction):
                        open_ends.append(OpenEnd(pos, direction))
    return tuple(open_ends)


def connected_components(grid: Grid) -> list[frozenset[CellPosition]]:
    """
    Partition pipe cells into components by breadth-first search over links.

    Components are returned in row-major order of their first cell.
    """
    seen: set[CellPosition] = set()
    components: list[frozenset[CellPosition]] = []

    for start in grid.pipe_positions():
        if start in seen:
            continue
        seen.add(start)
        component = {start}
        queue = deque([start])
        while queue:
            current = queue.popleft()
            for nxt in linked_neighbors(grid, current):
                if nxt not in seen:
                    seen.add(nxt)
                    component.add(nxt)
                    queue.append(nxt)
        components.append(frozenset(component))

    return components


def evaluate(grid: Grid) -> WinState:
    """Compute the primary and secondary goal status of a grid."""
    open_ends = find_open_ends(grid)
    components = connected_components(grid)
    logger.debug(
        "evaluate: open_ends=%d components=%d",
        len(open_ends),
        len(components),
    )
    return WinState(open_ends, len(components))
