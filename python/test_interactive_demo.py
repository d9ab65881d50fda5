"""Tests for the terminal front end (without the live display)."""

from pathlib import Path

import readchar

from grid_parser import parse_level
from grid_types import CellPosition, Diagonal, Direction
from interactive_demo import (
    KEY_BINDINGS,
    InteractiveGame,
    build_parser,
    default_save_path,
    main,
)
from session import MoveCursor, Quit, Redo, Restart, ToggleSelect, Undo, new_session

LEVEL = (
    "█████\n"
    "█─┌┐█\n"
    "█└┘─█\n"
    "█████\n"
)


def make_game(tmp_path: Path) -> InteractiveGame:
    return InteractiveGame(new_session(LEVEL), tmp_path / "level.sav")


class TestKeyBindings:
    """Tests for the key table."""

    def test_movement_keys(self) -> None:
        assert KEY_BINDINGS[readchar.key.UP] == MoveCursor(Direction.N)
        assert KEY_BINDINGS[readchar.key.RIGHT] == MoveCursor(Direction.E)
        assert KEY_BINDINGS[readchar.key.DOWN] == MoveCursor(Direction.S)
        assert KEY_BINDINGS[readchar.key.LEFT] == MoveCursor(Direction.W)
        assert KEY_BINDINGS["8"] == MoveCursor(Direction.N)
        assert KEY_BINDINGS["6"] == MoveCursor(Direction.E)
        assert KEY_BINDINGS["2"] == MoveCursor(Direction.S)
        assert KEY_BINDINGS["4"] == MoveCursor(Direction.W)

    def test_diagonal_keys(self) -> None:
        assert KEY_BINDINGS["7"] == MoveCursor(Diagonal.NW)
        assert KEY_BINDINGS["9"] == MoveCursor(Diagonal.NE)
        assert KEY_BINDINGS["1"] == MoveCursor(Diagonal.SW)
        assert KEY_BINDINGS["3"] == MoveCursor(Diagonal.SE)

    def test_command_keys(self) -> None:
        for key in (" ", "5", "\r", "\n"):
            assert KEY_BINDINGS[key] == ToggleSelect()
        assert KEY_BINDINGS["u"] == Undo()
        assert KEY_BINDINGS["r"] == Redo()
        assert KEY_BINDINGS["n"] == Restart()
        assert KEY_BINDINGS["q"] == Quit()

    def test_default_save_path(self) -> None:
        assert default_save_path(Path("levels/01-simple.lvl")) == Path("levels/01-simple.sav")


class TestHandleKey:
    """Tests for InteractiveGame.handle_key."""

    def test_move_and_undo(self, tmp_path: Path) -> None:
        game = make_game(tmp_path)
        for key in (readchar.key.DOWN, readchar.key.RIGHT, " ", readchar.key.RIGHT):
            assert game.handle_key(key)
        assert game.status_message == "✓ Moved E"
        assert game.session.turn == 1

        assert game.handle_key("U")
        assert game.status_message == "✓ Undone"
        assert game.session.grid == parse_level(LEVEL)

    def test_rejected_input(self, tmp_path: Path) -> None:
        game = make_game(tmp_path)
        assert game.handle_key("u")
        assert game.status_message == "✗ Nothing to undo"

    def test_unknown_key(self, tmp_path: Path) -> None:
        game = make_game(tmp_path)
        assert game.handle_key("z")
        assert game.status_message == "Unknown key: 'z'"

    def test_quit(self, tmp_path: Path) -> None:
        game = make_game(tmp_path)
        assert not game.handle_key("q")
        assert game.status_message == "Quitting..."

    def test_save_and_load(self, tmp_path: Path) -> None:
        game = make_game(tmp_path)
        for key in ("2", "6", "5", "6"):
            game.handle_key(key)
        moved = game.session.grid

        assert game.handle_key("s")
        assert game.status_message.startswith("✓ Saved")
        assert (tmp_path / "level.sav").read_text(encoding="utf-8") == "█████\n█┌─┐█\n█└┘─█\n█████\n"

        game.handle_key("n")
        assert game.session.grid == parse_level(LEVEL)

        assert game.handle_key("l")
        assert game.status_message.startswith("✓ Loaded")
        assert game.session.grid == moved
        assert game.session.selection.position == CellPosition(0, 0)

    def test_load_missing_file(self, tmp_path: Path) -> None:
        game = make_game(tmp_path)
        game.handle_key("l")
        assert game.status_message.startswith("✗ Load failed")
        assert game.session.grid == parse_level(LEVEL)

    def test_load_bad_file(self, tmp_path: Path) -> None:
        (tmp_path / "level.sav").write_text("┌┐\n", encoding="utf-8")
        game = make_game(tmp_path)
        game.handle_key("l")
        assert game.status_message.startswith("✗ Load failed: Saved grid is 1x2")

    def test_load_undecodable_file(self, tmp_path: Path) -> None:
        """Bytes that are not UTF-8 become a status message, not a crash."""
        (tmp_path / "level.sav").write_bytes(b"\xff\xfe\x00garbage\n")
        game = make_game(tmp_path)
        assert game.handle_key("l")
        assert game.status_message.startswith("✗ Load failed")
        assert game.session.grid == parse_level(LEVEL)

    def test_save_replaces_existing_file(self, tmp_path: Path) -> None:
        (tmp_path / "level.sav").write_text("stale\n", encoding="utf-8")
        game = make_game(tmp_path)
        game.handle_key("s")
        assert (tmp_path / "level.sav").read_text(encoding="utf-8") == LEVEL
        assert not (tmp_path / "level.tmp").exists()

    def test_diagonal_cursor_keys(self, tmp_path: Path) -> None:
        game = make_game(tmp_path)
        game.handle_key("3")
        game.handle_key("3")
        assert game.session.selection.position == CellPosition(2, 2)
        game.handle_key("7")
        assert game.session.selection.position == CellPosition(1, 1)

    def test_diagonal_rejected_while_armed(self, tmp_path: Path) -> None:
        game = make_game(tmp_path)
        for key in ("3", "5", "3"):
            assert game.handle_key(key)
        assert game.status_message.startswith("✗ Cannot move a piece diagonally")
        assert game.session.turn == 0
        assert game.session.grid == parse_level(LEVEL)

    def test_display_builds(self, tmp_path: Path) -> None:
        panel = make_game(tmp_path).generate_display()
        assert panel.title == "Pipegrid"


class TestCli:
    """Tests for argument parsing and main."""

    def test_parser_defaults(self) -> None:
        args = build_parser().parse_args(["levels/01-simple.lvl"])
        assert args.level == Path("levels/01-simple.lvl")
        assert args.undo == 100
        assert args.save is None
        assert args.log_file is None
        assert not args.verbose

    def test_parser_options(self) -> None:
        args = build_parser().parse_args(["a.lvl", "--undo", "250", "--save", "b.sav", "-v"])
        assert args.undo == 250
        assert args.save == Path("b.sav")
        assert args.verbose

    def test_missing_level(self, tmp_path: Path) -> None:
        assert main([str(tmp_path / "missing.lvl")]) == 1

    def test_invalid_level(self, tmp_path: Path) -> None:
        level = tmp_path / "bad.lvl"
        level.write_text("█?█\n", encoding="utf-8")
        assert main([str(level)]) == 1

    def test_undecodable_level(self, tmp_path: Path) -> None:
        level = tmp_path / "binary.lvl"
        level.write_bytes(b"\xff\xfe\x00")
        assert main([str(level)]) == 1

    def test_invalid_undo_limit(self, tmp_path: Path) -> None:
        level = tmp_path / "ok.lvl"
        level.write_text(LEVEL, encoding="utf-8")
        assert main([str(level), "--undo", "0"]) == 2
