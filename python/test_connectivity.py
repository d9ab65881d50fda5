"""Tests for the connectivity evaluator."""

from connectivity import OpenEnd, connected_components, evaluate, find_open_ends, linked_neighbors
from grid_parser import parse_level
from grid_types import CellPosition, Direction

N, E, S, W = Direction.N, Direction.E, Direction.S, Direction.W


class TestOpenEnds:
    """Tests for find_open_ends."""

    def test_facing_pair_has_no_open_ends(self) -> None:
        """1x2 grid: East stub next to West stub is satisfied."""
        grid = parse_level("╶╴")
        win = evaluate(grid)

        assert find_open_ends(grid) == ()
        assert win.primary
        assert win.secondary

    def test_same_direction_pair(self) -> None:
        """1x2 grid: two East stubs give two open ends and two components."""
        grid = parse_level("╶╶")
        win = evaluate(grid)

        assert set(win.open_ends) == {
            OpenEnd(CellPosition(0, 0), E),  # no reciprocal West
            OpenEnd(CellPosition(0, 1), E),  # off-grid
        }
        assert not win.primary
        assert not win.secondary
        assert win.component_count == 2

    def test_connector_into_wall(self) -> None:
        """A stub pointing at a wall is open."""
        grid = parse_level("╶█")
        assert find_open_ends(grid) == (OpenEnd(CellPosition(0, 0), E),)

    def test_connector_off_grid_in_every_direction(self) -> None:
        """A lone cross has four open ends."""
        grid = parse_level("┼")
        assert {end.direction for end in find_open_ends(grid)} == {N, E, S, W}

    def test_closed_loop(self) -> None:
        grid = parse_level("┌┐\n└┘\n")
        assert evaluate(grid).primary

    def test_unmatched_neighbor_stub(self) -> None:
        """A neighbor pointing at a cell without a stub back is open too."""
        grid = parse_level("│╴")
        assert set(find_open_ends(grid)) == {
            OpenEnd(CellPosition(0, 0), N),
            OpenEnd(CellPosition(0, 0), S),
            OpenEnd(CellPosition(0, 1), W),
        }


class TestComponents:
    """Tests for connected_components."""

    def test_connected_with_open_ends(self) -> None:
        """Secondary holds even while open ends remain."""
        grid = parse_level("┬┬")
        win = evaluate(grid)

        assert not win.primary
        assert win.secondary
        assert win.component_count == 1

    def test_walls_split_components(self) -> None:
        grid = parse_level("╶╴█╶╴")
        components = connected_components(grid)

        assert components == [
            frozenset({CellPosition(0, 0), CellPosition(0, 1)}),
            frozenset({CellPosition(0, 3), CellPosition(0, 4)}),
        ]
        win = evaluate(grid)
        assert win.primary
        assert not win.secondary

    def test_adjacent_without_links_are_separate(self) -> None:
        """Edge-adjacent pipes need reciprocal stubs to connect."""
        grid = parse_level("││")
        assert len(connected_components(grid)) == 2

    def test_linked_neighbors(self) -> None:
        grid = parse_level("┌┐\n└┘\n")
        assert set(linked_neighbors(grid, CellPosition(0, 0))) == {CellPosition(0, 1), CellPosition(1, 0)}

    def test_larger_shape(self) -> None:
        grid = parse_level(
            "███████\n"
            "█┌─┬─┐█\n"
            "█│█│█│█\n"
            "█└─┴─┘█\n"
            "███████\n"
        )
        win = evaluate(grid)
        assert win.primary
        assert win.secondary
        assert len(next(iter(connected_components(grid)))) == 13

    def test_walls_only(self) -> None:
        """No pipes: both goals hold vacuously."""
        win = evaluate(parse_level("██\n██\n"))
        assert win.primary
        assert win.secondary
        assert win.component_count == 0
