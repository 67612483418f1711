"""Tests for the maze grid model."""

import pytest

from maze_types import (
    ALL_WALLS,
    NO_WALLS,
    Cell,
    Coordinate,
    InvalidDimensions,
    MazeError,
    MazeGrid,
    OutOfBounds,
    Wall,
    new_grid,
)


# =============================================================================
# Test Coordinates and Walls
# =============================================================================


class TestCoordinate:
    """Tests for Coordinate."""

    def test_structural_equality(self) -> None:
        """Coordinates with the same fields are equal and hash alike."""
        assert Coordinate(3, 4) == Coordinate(3, 4)
        assert Coordinate(3, 4) != Coordinate(4, 3)
        assert len({Coordinate(1, 1), Coordinate(1, 1), Coordinate(0, 1)}) == 2

    def test_offset(self) -> None:
        """Offsets follow z-up, x-right."""
        origin = Coordinate(2, 2)
        assert origin.offset(Wall.UP) == Coordinate(2, 3)
        assert origin.offset(Wall.DOWN) == Coordinate(2, 1)
        assert origin.offset(Wall.RIGHT) == Coordinate(3, 2)
        assert origin.offset(Wall.LEFT) == Coordinate(1, 2)

    def test_str(self) -> None:
        assert str(Coordinate(0, 2)) == "(0, 2)"


class TestWall:
    """Tests for the Wall flags."""

    def test_bit_values(self) -> None:
        """Flag values match the documented bitmask."""
        assert Wall.UP.value == 0x1
        assert Wall.DOWN.value == 0x2
        assert Wall.RIGHT.value == 0x4
        assert Wall.LEFT.value == 0x8
        assert ALL_WALLS.value == 0xF
        assert NO_WALLS.value == 0x0

    def test_opposites(self) -> None:
        assert Wall.UP.opposite == Wall.DOWN
        assert Wall.DOWN.opposite == Wall.UP
        assert Wall.RIGHT.opposite == Wall.LEFT
        assert Wall.LEFT.opposite == Wall.RIGHT

    def test_labels(self) -> None:
        assert [w.label for w in (Wall.UP, Wall.DOWN, Wall.RIGHT, Wall.LEFT)] == [
            "up",
            "down",
            "right",
            "left",
        ]


class TestCell:
    """Tests for Cell wall operations."""

    def test_new_cell_fully_walled(self) -> None:
        """A new cell has all four walls and is unvisited."""
        cell = Cell(Coordinate(0, 0))
        assert cell.walls == ALL_WALLS
        assert not cell.visited
        for wall in (Wall.UP, Wall.DOWN, Wall.RIGHT, Wall.LEFT):
            assert cell.has_wall(wall)

    def test_remove_wall(self) -> None:
        """Removing one wall leaves the others in place."""
        cell = Cell(Coordinate(0, 0))
        cell.remove_wall(Wall.RIGHT)
        assert not cell.has_wall(Wall.RIGHT)
        assert cell.has_wall(Wall.UP)
        assert cell.has_wall(Wall.DOWN)
        assert cell.has_wall(Wall.LEFT)
        assert cell.walls.value == 0xB

    def test_remove_all_walls(self) -> None:
        cell = Cell(Coordinate(0, 0))
        for wall in (Wall.UP, Wall.DOWN, Wall.RIGHT, Wall.LEFT):
            cell.remove_wall(wall)
        assert cell.walls == NO_WALLS


# =============================================================================
# Test Grid
# =============================================================================


class TestMazeGrid:
    """Tests for MazeGrid construction and access."""

    def test_new_grid(self) -> None:
        """Cells carry their own coordinates, all walls and no visits."""
        grid = new_grid(3, 2)
        assert grid.width == 3
        assert grid.height == 2
        assert grid.size == 6
        assert len(grid) == 6
        for x in range(3):
            for z in range(2):
                cell = grid.cell_at(x, z)
                assert cell.coords == Coordinate(x, z)
                assert cell.walls == ALL_WALLS
                assert not cell.visited

    def test_flat_addressing(self) -> None:
        """Cells are stored at z * width + x."""
        grid = new_grid(4, 3)
        assert grid.cells[2 * 4 + 1].coords == Coordinate(1, 2)

    def test_getitem(self) -> None:
        grid = new_grid(2, 2)
        assert grid[Coordinate(1, 0)] is grid.cell_at(1, 0)

    @pytest.mark.parametrize("width,height", [(0, 5), (5, 0), (-1, 3), (0, 0)])
    def test_invalid_dimensions(self, width: int, height: int) -> None:
        """Non-positive dimensions are rejected."""
        with pytest.raises(InvalidDimensions):
            MazeGrid(width, height)

    def test_errors_are_value_errors(self) -> None:
        with pytest.raises(ValueError):
            new_grid(0, 1)
        with pytest.raises(MazeError):
            new_grid(1, 0)

    @pytest.mark.parametrize("x,z", [(-1, 0), (0, -1), (3, 0), (0, 2), (3, 2)])
    def test_out_of_bounds(self, x: int, z: int) -> None:
        """Access outside [0, width) x [0, height) fails."""
        grid = new_grid(3, 2)
        with pytest.raises(OutOfBounds):
            grid.cell_at(x, z)

    def test_out_of_bounds_is_index_error(self) -> None:
        grid = new_grid(1, 1)
        with pytest.raises(IndexError):
            grid[Coordinate(1, 0)]

    def test_iteration_is_column_major(self) -> None:
        """Iteration walks x outer, z inner."""
        grid = new_grid(2, 3)
        coords = [cell.coords for cell in grid]
        assert coords == [
            Coordinate(0, 0),
            Coordinate(0, 1),
            Coordinate(0, 2),
            Coordinate(1, 0),
            Coordinate(1, 1),
            Coordinate(1, 2),
        ]

    def test_neighbor(self) -> None:
        """Neighbours inside the grid are returned, outside gives None."""
        grid = new_grid(2, 2)
        assert grid.neighbor(Coordinate(0, 0), Wall.UP) is grid.cell_at(0, 1)
        assert grid.neighbor(Coordinate(0, 0), Wall.RIGHT) is grid.cell_at(1, 0)
        assert grid.neighbor(Coordinate(0, 0), Wall.DOWN) is None
        assert grid.neighbor(Coordinate(0, 0), Wall.LEFT) is None

    def test_neighbors_counts(self) -> None:
        """Corners have 2 neighbours, edges 3, interior 4."""
        grid = new_grid(3, 3)
        assert len(grid.neighbors(Coordinate(0, 0))) == 2
        assert len(grid.neighbors(Coordinate(1, 0))) == 3
        assert len(grid.neighbors(Coordinate(1, 1))) == 4
        assert grid.neighbors(Coordinate(0, 0)) == [
            (Wall.UP, grid.cell_at(0, 1)),
            (Wall.RIGHT, grid.cell_at(1, 0)),
        ]

    def test_single_cell_has_no_neighbors(self) -> None:
        grid = new_grid(1, 1)
        assert grid.neighbors(Coordinate(0, 0)) == []


class TestOpenWall:
    """Tests for carving a passage between two cells."""

    def test_clears_both_sides(self) -> None:
        """Opening Up clears Up here and Down on the neighbour."""
        grid = new_grid(2, 2)
        other = grid.open_wall(Coordinate(0, 0), Wall.UP)
        assert other is grid.cell_at(0, 1)
        assert not grid.cell_at(0, 0).has_wall(Wall.UP)
        assert not grid.cell_at(0, 1).has_wall(Wall.DOWN)
        # Untouched edges
        assert grid.cell_at(0, 0).has_wall(Wall.RIGHT)
        assert grid.cell_at(0, 1).has_wall(Wall.UP)
        assert grid.cell_at(1, 0).walls == ALL_WALLS

    def test_left_and_right(self) -> None:
        grid = new_grid(2, 1)
        grid.open_wall(Coordinate(1, 0), Wall.LEFT)
        assert not grid.cell_at(1, 0).has_wall(Wall.LEFT)
        assert not grid.cell_at(0, 0).has_wall(Wall.RIGHT)

    def test_refuses_boundary(self) -> None:
        """No passage is ever opened toward the outside."""
        grid = new_grid(2, 2)
        with pytest.raises(OutOfBounds):
            grid.open_wall(Coordinate(1, 1), Wall.RIGHT)
        assert grid.cell_at(1, 1).walls == ALL_WALLS


class TestBitmasks:
    """Tests for the bitmask view and reset."""

    def test_fresh_grid(self) -> None:
        grid = new_grid(2, 3)
        assert grid.bitmasks() == ((15, 15, 15), (15, 15, 15))

    def test_indexed_x_then_z(self) -> None:
        grid = new_grid(2, 2)
        grid.open_wall(Coordinate(0, 0), Wall.RIGHT)
        masks = grid.bitmasks()
        assert masks[0][0] == 0xB
        assert masks[1][0] == 0x7
        assert masks[0][1] == 0xF

    def test_reset(self) -> None:
        """Reset restores walls and clears visits."""
        grid = new_grid(2, 2)
        grid.open_wall(Coordinate(0, 0), Wall.UP)
        grid.cell_at(1, 1).visited = True
        grid.reset()
        assert all(cell.walls == ALL_WALLS for cell in grid)
        assert not any(cell.visited for cell in grid)
