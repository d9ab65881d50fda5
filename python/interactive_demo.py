"""
Interactive terminal front end for pipegrid.
Display the board and play it with keyboard commands.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import readchar
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from ascii_render import render, render_status, render_turn
from pipegrid import (
    DEFAULT_UNDO_LIMIT,
    Diagonal,
    Direction,
    InputEvent,
    Load,
    MoveCursor,
    ParseError,
    Quit,
    Redo,
    Restart,
    Save,
    Session,
    SessionConfig,
    ToggleSelect,
    Undo,
    new_session,
)

logger = logging.getLogger(__name__)

KEY_BINDINGS: dict[str, InputEvent] = {
    readchar.key.UP: MoveCursor(Direction.N),
    readchar.key.RIGHT: MoveCursor(Direction.E),
    readchar.key.DOWN: MoveCursor(Direction.S),
    readchar.key.LEFT: MoveCursor(Direction.W),
    "8": MoveCursor(Direction.N),
    "6": MoveCursor(Direction.E),
    "2": MoveCursor(Direction.S),
    "4": MoveCursor(Direction.W),
    "7": MoveCursor(Diagonal.NW),
    "9": MoveCursor(Diagonal.NE),
    "1": MoveCursor(Diagonal.SW),
    "3": MoveCursor(Diagonal.SE),
    " ": ToggleSelect(),
    "5": ToggleSelect(),
    "\r": ToggleSelect(),
    "\n": ToggleSelect(),
    "u": Undo(),
    "r": Redo(),
    "n": Restart(),
    "q": Quit(),
}

SAVE_KEY = "s"
LOAD_KEY = "l"


def default_save_path(level_path: Path) -> Path:
    """`levels/01.lvl` -> `levels/01.sav`."""
    return level_path.with_suffix(".sav")


class InteractiveGame:
    """Interactive session driven by single key presses."""

    def __init__(self, session: Session, save_path: Path) -> None:
        self.session = session
        self.save_path = save_path
        self.console = Console()
        self.status_message = "Ready"

    def generate_display(self) -> Panel:
        """Generate the current display with board and status."""
        model = self.session.render_model()

        status = Text()
        status.append(Text.from_ansi(render(model)))
        status.append("\n\n")
        status.append(render_turn(model) + "\n", style="bold green" if model.win.primary else "bold")
        status.append(render_status(model) + "\n\n")

        status.append("Keys:\n", style="bold cyan")
        status.append("  Arrows / 8 6 2 4 - Move cursor (or the selected piece)\n")
        status.append("  7 9 1 3 - Move cursor diagonally\n")
        status.append("  Space / Enter / 5 - Select / deselect piece\n")
        status.append("  U / R - Undo / Redo\n")
        status.append("  N - Restart level\n")
        status.append("  S / L - Save / Load\n")
        status.append("  Q - Quit\n\n")

        # Status line at the bottom
        status.append("─" * 40 + "\n", style="dim")
        status.append("Status: ", style="bold")
        status.append(self.status_message)

        border = "green" if model.win.primary else "blue"
        return Panel(status, title="Pipegrid", border_style=border, width=80)

    def save(self) -> None:
        outcome = self.session.handle_input(Save())
        if outcome.saved_text is None:
            self.status_message = f"✗ {outcome.message}"
            return
        # Write beside the target, then rename over it
        tmp_path = self.save_path.with_suffix(".tmp")
        try:
            tmp_path.write_text(outcome.saved_text, encoding="utf-8")
            tmp_path.replace(self.save_path)
        except OSError as exc:
            logger.error("Save to %s failed: %s", self.save_path, exc)
            self.status_message = f"✗ Save failed: {exc}"
            return
        logger.info("Saved to %s", self.save_path)
        self.status_message = f"✓ Saved to {self.save_path}"

    def load(self) -> None:
        try:
            text = self.save_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Load from %s failed: %s", self.save_path, exc)
            self.status_message = f"✗ Load failed: {exc}"
            return
        outcome = self.session.handle_input(Load(text))
        self.status_message = (
            f"✓ Loaded {self.save_path}" if outcome.ok else f"✗ Load failed: {outcome.message}"
        )

    def handle_key(self, key: str) -> bool:
        """Handle one key press. Returns False once the game should stop."""
        lowered = key.lower() if len(key) == 1 else key
        if lowered == LOAD_KEY:
            self.load()
            return True
        if lowered == SAVE_KEY:
            self.save()
            return True

        event = KEY_BINDINGS.get(lowered)
        if event is None:
            self.status_message = f"Unknown key: {repr(key)}"
            return True

        outcome = self.session.handle_input(event)
        if outcome.quit:
            self.status_message = "Quitting..."
            return False
        if not outcome.ok:
            self.status_message = f"✗ {outcome.message}"
        elif outcome.message:
            self.status_message = f"✓ {outcome.message}"
        return True

    def run(self) -> None:
        """Run the game loop until quit."""
        with Live(self.generate_display(), console=self.console, refresh_per_second=4) as live:
            try:
                running = True
                while running:
                    live.update(self.generate_display())
                    running = self.handle_key(readchar.readkey())
                live.update(self.generate_display())
            except KeyboardInterrupt:
                self.status_message = "Interrupted by user"
                live.update(self.generate_display())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Pipegrid: connect every pipe")
    parser.add_argument("level", type=Path, help="Path to a .lvl file")
    parser.add_argument("-u", "--undo", type=int, default=DEFAULT_UNDO_LIMIT, help="Undo depth in turns")
    parser.add_argument("--save", type=Path, default=None, help="Save file (default: level path with .sav)")
    parser.add_argument("--log-file", type=Path, default=None, help="Write log records to this file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log at DEBUG level")
    return parser


def configure_logging(log_file: Path | None, verbose: bool) -> None:
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logging.basicConfig(
            filename=log_file,
            level=logging.DEBUG if verbose else logging.INFO,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
    else:
        # Warnings only; the live display owns the terminal
        logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format="%(levelname)s: %(message)s")


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file, args.verbose)

    try:
        level_text = args.level.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Cannot read level %s: %s", args.level, exc)
        print(f"Level `{args.level}` could not be read: {exc}")
        return 1

    try:
        session = new_session(level_text, SessionConfig(undo_limit=args.undo))
    except ParseError as exc:
        logger.error("Invalid level %s: %s", args.level, exc)
        print(f"Level `{args.level}` is invalid:\n{exc}")
        return 1
    except ValueError as exc:
        print(f"Invalid option: {exc}")
        return 2

    game = InteractiveGame(session, args.save or default_save_path(args.level))
    game.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
