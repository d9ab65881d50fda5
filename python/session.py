"""
Puzzle session: one grid, one selection, one history.

All state changes go through `Session.handle_input`, which takes a closed
set of input events. Collaborators (renderer, terminal front end, file
I/O) read the published `RenderModel` and never touch session internals.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from connectivity import WinState, evaluate
from grid_parser import format_level, parse_level
from grid_types import CursorStep, Diagonal, Grid, IllegalMoveError, ParseError, PipeGridError, Wall
from history import DEFAULT_UNDO_LIMIT, History, HistoryEntry
from moves import apply_move
from selection import Selection

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionConfig:
    """Settings fixed for the lifetime of a session."""

    undo_limit: int = DEFAULT_UNDO_LIMIT


# =============================================================================
# Input Events
# =============================================================================


@dataclass(frozen=True)
class MoveCursor:
    """Cursor travel, or a move when a piece is armed."""

    direction: CursorStep


@dataclass(frozen=True)
class ToggleSelect:
    pass


@dataclass(frozen=True)
class Undo:
    pass


@dataclass(frozen=True)
class Redo:
    pass


@dataclass(frozen=True)
class Restart:
    """Back to the level the session started with; history is cleared."""

    pass


@dataclass(frozen=True)
class Save:
    pass


@dataclass(frozen=True)
class Load:
    text: str


@dataclass(frozen=True)
class Quit:
    pass


InputEvent = MoveCursor | ToggleSelect | Undo | Redo | Restart | Save | Load | Quit


@dataclass(frozen=True)
class InputOutcome:
    """What happened to an input event."""

    ok: bool
    message: str
    error: PipeGridError | None = None
    saved_text: str | None = None  # Set for Save
    quit: bool = False


@dataclass(frozen=True)
class RenderModel:
    """Read-only view published to renderers."""

    grid: Grid
    selection: Selection
    win: WinState
    turn: int


# =============================================================================
# Session
# =============================================================================


class Session:
    """The unit of core puzzle state."""

    def __init__(self, grid: Grid, config: SessionConfig | None = None) -> None:
        self.config = config or SessionConfig()
        self._initial = grid
        self._grid = grid
        self._selection = Selection()
        self._history = History(self.config.undo_limit)
        self._turn = 0
        self._win = evaluate(grid)

    @property
    def grid(self) -> Grid:
        return self._grid

    @property
    def selection(self) -> Selection:
        return self._selection

    @property
    def history(self) -> History:
        return self._history

    @property
    def win(self) -> WinState:
        return self._win

    @property
    def turn(self) -> int:
        return self._turn

    def render_model(self) -> RenderModel:
        return RenderModel(self._grid, self._selection, self._win, self._turn)

    def _snapshot(self) -> HistoryEntry:
        return HistoryEntry(self._grid, self._selection)

    def _set_grid(self, grid: Grid) -> None:
        was_solved = self._win.primary
        self._grid = grid
        self._win = evaluate(grid)
        if self._win.primary and not was_solved:
            logger.info("Level complete after %d turns", self._turn)

    def _restore(self, entry: HistoryEntry) -> None:
        self._selection = entry.selection.disarmed()
        self._set_grid(entry.grid)

    # -------------------------------------------------------------------------
    # Operations (raise on failure, state untouched)
    # -------------------------------------------------------------------------

    def move_cursor(self, direction: CursorStep) -> None:
        """
        Move the cursor, or swap the armed piece.

        Diagonal steps only move the cursor.

        Raises:
            IllegalMoveError: If the armed move breaks the move rule, or the
                step is diagonal while a piece is armed
        """
        if not self._selection.armed:
            self._selection = self._selection.move(direction, self._grid)
            logger.debug("cursor -> (%d, %d)", self._selection.position.row, self._selection.position.col)
            return
        if isinstance(direction, Diagonal):
            raise IllegalMoveError(f"Cannot move a piece diagonally ({direction.name})")

        new_grid, new_selection = apply_move(self._grid, self._selection, direction)
        self._history.push(self._snapshot())
        self._turn += 1
        self._selection = new_selection
        self._set_grid(new_grid)
        logger.info(
            "turn %d: moved %s to (%d, %d)",
            self._turn,
            direction.value,
            new_selection.position.row,
            new_selection.position.col,
        )

    def toggle_select(self) -> None:
        pos = self._selection.position
        if not self._selection.armed and isinstance(self._grid.get(pos), Wall):
            raise IllegalMoveError(f"Cannot select wall at ({pos.row}, {pos.col})")
        self._selection = self._selection.toggle_arm()

    def undo(self) -> None:
        self._restore(self._history.undo(self._snapshot()))
        self._turn -= 1

    def redo(self) -> None:
        self._restore(self._history.redo(self._snapshot()))
        self._turn += 1

    def restart(self) -> None:
        self._history.clear()
        self._turn = 0
        self._selection = Selection()
        self._set_grid(self._initial)
        logger.info("Restarted level")

    def save(self) -> str:
        return format_level(self._grid)

    def load(self, text: str) -> None:
        """
        Replace the board with a saved one and reset history.

        Raises:
            ParseError: If the text is malformed or its shape differs from
                the session grid; the session is left untouched
        """
        grid = parse_level(text)
        if (grid.rows, grid.cols) != (self._grid.rows, self._grid.cols):
            raise ParseError(
                f"Saved grid is {grid.rows}x{grid.cols}, "
                f"session grid is {self._grid.rows}x{self._grid.cols}"
            )
        self._history.clear()
        self._turn = 0
        self._selection = Selection()
        self._set_grid(grid)
        logger.info("Loaded %dx%d grid", grid.rows, grid.cols)

    # -------------------------------------------------------------------------
    # Single entry point
    # -------------------------------------------------------------------------

    def handle_input(self, event: InputEvent) -> InputOutcome:
        """
        Apply one input event.

        Errors from the requested operation are caught and reported in the
        outcome; the session is then exactly as it was before the call.
        """
        try:
            match event:
                case MoveCursor(direction=direction):
                    armed = self._selection.armed
                    self.move_cursor(direction)
                    return InputOutcome(True, f"Moved {direction.name}" if armed else "")
                case ToggleSelect():
                    self.toggle_select()
                    return InputOutcome(True, "Selected" if self._selection.armed else "Deselected")
                case Undo():
                    self.undo()
                    return InputOutcome(True, "Undone")
                case Redo():
                    self.redo()
                    return InputOutcome(True, "Redone")
                case Restart():
                    self.restart()
                    return InputOutcome(True, "Restarted")
                case Save():
                    return InputOutcome(True, "Saved", saved_text=self.save())
                case Load(text=text):
                    self.load(text)
                    return InputOutcome(True, "Loaded")
                case Quit():
                    return InputOutcome(True, "Quitting", quit=True)
                case _:
                    raise TypeError(f"Unknown input event: {event!r}")
        except PipeGridError as exc:
            logger.warning("Rejected %s: %s", type(event).__name__, exc)
            return InputOutcome(False, str(exc), error=exc)


def new_session(level_text: str, config: SessionConfig | None = None) -> Session:
    """
    Start a session from level text.

    Raises:
        ParseError: If the level text is malformed
    """
    grid = parse_level(level_text)
    logger.info("New session on %dx%d grid", grid.rows, grid.cols)
    return Session(grid, config)
