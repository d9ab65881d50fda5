"""
Pipe-connecting grid puzzle.

Walls and pipe segments on a fixed grid; the player grabs a segment and
swaps it with a neighbor. Primary goal: no open ends. Secondary goal:
every pipe is part of one connected shape.

This module gathers the public API of the core modules.
"""

from __future__ import annotations

from connectivity import OpenEnd, WinState, connected_components, evaluate, find_open_ends, linked_neighbors
from grid_parser import PIPE_GLYPHS, WALL_GLYPH, format_level, parse_level
from grid_types import (
    Cell,
    CellPosition,
    CursorStep,
    Diagonal,
    Direction,
    Grid,
    IllegalMoveError,
    NoHistoryError,
    ParseError,
    Pipe,
    PipeGridError,
    Wall,
)
from history import DEFAULT_UNDO_LIMIT, History, HistoryEntry, HistoryState
from moves import apply_move, check_move
from selection import Selection
from session import (
    InputEvent,
    InputOutcome,
    Load,
    MoveCursor,
    Quit,
    Redo,
    RenderModel,
    Restart,
    Save,
    Session,
    SessionConfig,
    ToggleSelect,
    Undo,
    new_session,
)

__all__ = [
    "Cell",
    "CellPosition",
    "CursorStep",
    "Diagonal",
    "DEFAULT_UNDO_LIMIT",
    "Direction",
    "Grid",
    "History",
    "HistoryEntry",
    "HistoryState",
    "IllegalMoveError",
    "InputEvent",
    "InputOutcome",
    "Load",
    "MoveCursor",
    "NoHistoryError",
    "OpenEnd",
    "PIPE_GLYPHS",
    "ParseError",
    "Pipe",
    "PipeGridError",
    "Quit",
    "Redo",
    "RenderModel",
    "Restart",
    "Save",
    "Selection",
    "Session",
    "SessionConfig",
    "ToggleSelect",
    "Undo",
    "WALL_GLYPH",
    "Wall",
    "WinState",
    "apply_move",
    "check_move",
    "connected_components",
    "evaluate",
    "find_open_ends",
    "format_level",
    "linked_neighbors",
    "new_session",
    "parse_level",
]
