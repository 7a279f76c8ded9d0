"""Tests for the character-map grid world."""

import pytest
import numpy as np

from lazy_astar.graphs.grid import DEFAULT_COSTS, GridWorld, Tile
from lazy_astar.search.astar import Search, find_path


def solve(rows, costs=None):
    world = GridWorld.from_rows(rows, costs=costs)
    return world, find_path(world.start, world.goal, context=world)


class TestGridWorldParsing:
    """Test map parsing."""

    def test_from_rows(self):
        """Symbols become entry costs and markers become start and goal."""
        world = GridWorld.from_rows([
            "F.~",
            "MXT",
        ])

        assert world.shape == (2, 3)
        assert world.start == Tile(0, 0)
        assert world.goal == Tile(2, 1)
        np.testing.assert_array_equal(
            world.costs, [[1.0, 1.0, 2.0], [3.0, np.inf, 1.0]]
        )
        assert world.min_cost == 1.0

    def test_custom_costs(self):
        """A custom symbol table replaces the defaults."""
        world = GridWorld.from_rows(["F#T"], costs={'#': 0.5})
        assert world.cost_at(1, 0) == 0.5
        assert world.min_cost == 0.5

    def test_unknown_symbol(self):
        """Unknown symbols are rejected with their position."""
        with pytest.raises(ValueError, match=r"Unknown map symbol '\?' at \(1, 0\)"):
            GridWorld.from_rows(["F?T"])

    def test_ragged_rows(self):
        with pytest.raises(ValueError, match="same width"):
            GridWorld.from_rows(["F..", "T"])

    def test_empty_map(self):
        with pytest.raises(ValueError, match="no rows"):
            GridWorld.from_rows([])

    def test_negative_costs_rejected(self):
        with pytest.raises(ValueError, match="non-negative"):
            GridWorld(np.array([[1.0, -1.0]]))

    def test_passable(self):
        world = GridWorld.from_rows(["FXT"])
        assert world.passable(0, 0)
        assert not world.passable(1, 0)
        assert not world.passable(3, 0)
        assert not world.passable(0, -1)


class TestTile:
    """Test Tile as a Pather."""

    def test_structural_identity(self):
        """Tiles with equal coordinates are the same node."""
        assert Tile(1, 2) == Tile(1, 2)
        assert len({Tile(1, 2), Tile(1, 2)}) == 1

    def test_neighbors_skip_walls_and_edges(self):
        world = GridWorld.from_rows([
            "F.",
            "X.",
        ])
        neighbors = Tile(0, 0).path_neighbors(world, [])
        assert neighbors == [Tile(1, 0)]

    def test_neighbors_without_context(self):
        """Without a world to consult a tile has no neighbors."""
        assert Tile(0, 0).path_neighbors(None, []) == []
        assert Tile(0, 0).path_estimated_cost(None, Tile(3, 3)) == 0.0

    def test_cost_is_entry_cost(self):
        world = GridWorld.from_rows(["F~T"])
        assert Tile(0, 0).path_neighbor_cost(world, Tile(1, 0)) == 2.0
        assert Tile(1, 0).path_neighbor_cost(world, Tile(0, 0)) == 1.0

    def test_estimate_is_scaled_manhattan(self):
        world = GridWorld.from_rows(["F#", "#T"], costs={'#': 0.5})
        assert Tile(0, 0).path_estimated_cost(world, Tile(1, 1)) == 1.0


class TestGridSearch:
    """Test searching grid worlds."""

    def test_straight_line(self):
        world, (path, distance, found) = solve(["F.T"])
        assert found is True
        assert distance == 2.0
        assert path == (Tile(2, 0), Tile(1, 0), Tile(0, 0))

    def test_river_crossing_cheaper_than_detour(self):
        world, result = solve([
            "F~T",
            "...",
        ])
        assert result.distance == 3.0
        assert result.path == (Tile(2, 0), Tile(1, 0), Tile(0, 0))

    def test_detour_around_wall(self):
        world, result = solve([
            "FXT",
            "...",
        ])
        assert result.found is True
        assert result.distance == 4.0
        assert result.path_from_start() == [
            Tile(0, 0), Tile(0, 1), Tile(1, 1), Tile(2, 1), Tile(2, 0)
        ]

    def test_walled_off_goal(self):
        world, result = solve([
            "F.X.",
            "..XT",
        ])
        assert result.found is False

    def test_mountains_avoided(self):
        world, result = solve([
            "F.MMT",
            ".....",
        ])
        assert result.found is True
        assert result.distance == 6.0
        assert all(world.cost_at(t.x, t.y) < 3.0 for t in result.path)

    def test_winding_path(self):
        world, result = solve([
            "F.....",
            ".XXXX.",
            ".XTMX.",
            ".X.XX.",
            "......",
        ])
        assert result.found is True
        # Down the left side, along the bottom and up through the gap
        assert result.distance == 8.0
        assert result.path[1] == Tile(2, 3)

    def test_step_run_equivalence(self):
        """Manual stepping and the one-shot helper agree on a larger map."""
        rows = [
            "F..~~.....",
            ".X.~~.XXX.",
            ".X....X...",
            ".XXXX.X.M.",
            "......X..T",
        ]
        world = GridWorld.from_rows(rows)

        search = Search(world.start, world.goal, context=world)
        while not search.step():
            pass

        one_shot = find_path(world.start, world.goal, context=world)
        assert search.result().path == one_shot.path
        assert search.result().distance == one_shot.distance
        assert one_shot.found is True

    def test_render_path(self):
        world, result = solve([
            "FXT",
            "...",
        ])
        assert world.render_path(result.path) == "FXT\n***"
        assert world.render_path(result.path, path_marker='o') == "FXT\nooo"

    def test_render_without_rows(self):
        """Worlds built from a bare cost array render walls and floor."""
        costs = np.array([[1.0, np.inf], [1.0, 1.0]])
        world = GridWorld(costs, start=Tile(0, 0), goal=Tile(1, 1))
        result = find_path(world.start, world.goal, context=world)
        assert world.render_path(result.path) == ".X\n*."


def test_default_costs_table():
    """The stock symbol table matches the documented map legend."""
    assert DEFAULT_COSTS == {'.': 1.0, '~': 2.0, 'M': 3.0, 'X': None}


if __name__ == "__main__":
    pytest.main([__file__])
