"""
Shared type definitions for the maze generator.

A maze is a rectangular grid of cells. Each cell carries a set of wall flags;
a cleared flag is an open passage to the neighbour on that side.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Flag
from typing import Iterator

__all__ = [
    "ALL_WALLS",
    "NO_WALLS",
    "Cell",
    "Coordinate",
    "InvalidCoordinate",
    "InvalidDimensions",
    "MazeError",
    "MazeGrid",
    "OutOfBounds",
    "Position",
    "Wall",
    "new_grid",
]


# =============================================================================
# Errors
# =============================================================================


class MazeError(ValueError):
    """Base class for maze construction and access errors."""


class InvalidDimensions(MazeError):
    """Grid width or height is not a positive integer."""


class InvalidCoordinate(MazeError):
    """A designated cell (start or finish) lies outside the grid."""


class OutOfBounds(MazeError, IndexError):
    """Direct cell access outside the grid."""


# =============================================================================
# Coordinates and walls
# =============================================================================


@dataclass(frozen=True)
class Coordinate:
    """A cell position: column x, row z."""

    x: int
    z: int

    def offset(self, wall: Wall) -> Coordinate:
        """The coordinate across the given edge (may be outside any grid)."""
        dx, dz = _OFFSETS[wall]
        return Coordinate(self.x + dx, self.z + dz)

    def __str__(self) -> str:
        return f"({self.x}, {self.z})"


# World-space (x, y, z); y is the vertical axis.
Position = tuple[float, float, float]


class Wall(Flag):
    """Edge flags of a cell. A set flag is a wall, a cleared flag a passage."""

    UP = 0x1  # z + 1
    DOWN = 0x2  # z - 1
    RIGHT = 0x4  # x + 1
    LEFT = 0x8  # x - 1

    @property
    def opposite(self) -> Wall:
        return _OPPOSITES[self]

    @property
    def label(self) -> str:
        return (self.name or "none").lower()


ALL_WALLS = Wall.UP | Wall.DOWN | Wall.RIGHT | Wall.LEFT
NO_WALLS = Wall(0)

_OFFSETS: dict[Wall, tuple[int, int]] = {
    Wall.UP: (0, 1),
    Wall.DOWN: (0, -1),
    Wall.RIGHT: (1, 0),
    Wall.LEFT: (-1, 0),
}

_OPPOSITES: dict[Wall, Wall] = {
    Wall.UP: Wall.DOWN,
    Wall.DOWN: Wall.UP,
    Wall.RIGHT: Wall.LEFT,
    Wall.LEFT: Wall.RIGHT,
}


# =============================================================================
# Cells and grid
# =============================================================================


@dataclass
class Cell:
    """One grid unit. `visited` is only meaningful during generation."""

    coords: Coordinate
    walls: Wall = ALL_WALLS
    visited: bool = False

    def has_wall(self, wall: Wall) -> bool:
        return (self.walls & wall) == wall

    def remove_wall(self, wall: Wall) -> None:
        self.walls = self.walls & ~wall


@dataclass
class MazeGrid:
    """
    A width x height grid of cells, stored flat and addressed by z * width + x.

    Cells never reference each other; neighbours are found by coordinate.
    """

    width: int
    height: int
    cells: list[Cell] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if (
            not isinstance(self.width, int)
            or not isinstance(self.height, int)
            or self.width < 1
            or self.height < 1
        ):
            raise InvalidDimensions(
                f"Invalid maze dimensions: {self.width}x{self.height}\n"
                f"  Width and height must both be integers >= 1"
            )
        self.cells = [
            Cell(Coordinate(x, z))
            for z in range(self.height)
            for x in range(self.width)
        ]

    @property
    def size(self) -> int:
        return self.width * self.height

    def in_bounds(self, coord: Coordinate) -> bool:
        return 0 <= coord.x < self.width and 0 <= coord.z < self.height

    def cell_at(self, x: int, z: int) -> Cell:
        """Return the cell at (x, z), raising OutOfBounds outside the grid."""
        if not (0 <= x < self.width and 0 <= z < self.height):
            raise OutOfBounds(
                f"Cell ({x}, {z}) is outside the grid\n"
                f"  Valid x: 0..{self.width - 1}, valid z: 0..{self.height - 1}"
            )
        return self.cells[z * self.width + x]

    def __getitem__(self, coord: Coordinate) -> Cell:
        return self.cell_at(coord.x, coord.z)

    def __iter__(self) -> Iterator[Cell]:
        return self.iter_cells()

    def __len__(self) -> int:
        return self.size

    def iter_cells(self) -> Iterator[Cell]:
        """Yield cells column by column (x outer, z inner)."""
        for x in range(self.width):
            for z in range(self.height):
                yield self.cells[z * self.width + x]

    def neighbor(self, coord: Coordinate, wall: Wall) -> Cell | None:
        """The cell across `wall` from `coord`, or None at the grid edge."""
        target = coord.offset(wall)
        if not self.in_bounds(target):
            return None
        return self.cells[target.z * self.width + target.x]

    def neighbors(self, coord: Coordinate) -> list[tuple[Wall, Cell]]:
        """In-bounds neighbours of `coord` as (edge, cell) pairs."""
        result: list[tuple[Wall, Cell]] = []
        for wall in _OFFSETS:
            cell = self.neighbor(coord, wall)
            if cell is not None:
                result.append((wall, cell))
        return result

    def open_wall(self, coord: Coordinate, wall: Wall) -> Cell:
        """
        Carve a passage through `wall` of the cell at `coord`.

        Clears the flag on this cell and the opposite flag on the neighbour.
        Returns the neighbour.
        """
        cell = self[coord]
        other = self.neighbor(coord, wall)
        if other is None:
            raise OutOfBounds(
                f"Cannot open {wall.label} wall of cell {coord}\n"
                f"  The neighbour {coord.offset(wall)} is outside the "
                f"{self.width}x{self.height} grid"
            )
        cell.remove_wall(wall)
        other.remove_wall(wall.opposite)
        return other

    def reset(self) -> None:
        """Restore every cell to fully walled and unvisited."""
        for cell in self.cells:
            cell.walls = ALL_WALLS
            cell.visited = False

    def bitmasks(self) -> tuple[tuple[int, ...], ...]:
        """Wall bitmasks indexed [x][z]."""
        return tuple(
            tuple(self.cells[z * self.width + x].walls.value for z in range(self.height))
            for x in range(self.width)
        )


def new_grid(width: int, height: int) -> MazeGrid:
    """Allocate a fully walled, unvisited width x height grid."""
    return MazeGrid(width, height)
