"""
World-space placement for a generated maze.

Maps grid coordinates to positions centred on the maze origin and turns wall
flags into wall segments, emitting each shared edge only once.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from maze_config import MazeConfig
from maze_types import Coordinate, MazeGrid, Position, Wall

__all__ = [
    "MarkerPositions",
    "WallSegment",
    "cell_position",
    "marker_positions",
    "placement_walls",
    "wall_segments",
]


def cell_position(
    coord: Coordinate,
    width: int,
    height: int,
    cell_scale: float = 1,
    origin: Position = (0.0, 0.0, 0.0),
) -> Position:
    """
    World position of a cell's centre.

    The grid is shifted by half its dimensions (integer division) so it sits
    around the origin, then moved half a cell to the centre, scaled by the
    corridor width, and finally translated by `origin`.
    """
    x = coord.x - width // 2 + 0.5
    z = coord.z - height // 2 + 0.5
    y = 0.0
    if cell_scale != 1:
        x, y, z = x * cell_scale, y * cell_scale, z * cell_scale
    return (x + origin[0], y + origin[1], z + origin[2])


def placement_walls(grid: MazeGrid, coord: Coordinate) -> Wall:
    """
    Walls the cell at `coord` is responsible for drawing.

    Each cell draws its Up and Right walls; the bottom row also draws Down
    and the leftmost column also draws Left.
    """
    walls = grid[coord].walls
    if coord.x > 0:
        walls &= ~Wall.LEFT
    if coord.z > 0:
        walls &= ~Wall.DOWN
    return walls


@dataclass(frozen=True)
class WallSegment:
    """One wall piece to be placed by a renderer."""

    coords: Coordinate
    wall: Wall
    position: Position
    rotation: float  # degrees about the vertical axis
    name: str


# Emission order per cell, with the unit offset from the cell centre and the
# rotation of the piece
_SEGMENT_LAYOUT: tuple[tuple[Wall, tuple[int, int], float], ...] = (
    (Wall.DOWN, (0, -1), 90.0),
    (Wall.LEFT, (-1, 0), 0.0),
    (Wall.RIGHT, (1, 0), 0.0),
    (Wall.UP, (0, 1), 90.0),
)


def wall_segments(
    grid: MazeGrid,
    cell_scale: float = 1,
    origin: Position = (0.0, 0.0, 0.0),
) -> Iterator[WallSegment]:
    """
    Yield every wall piece of the maze, column by column.

    Pieces sit half a corridor away from the cell centre on the side of the
    wall they represent.
    """
    half = cell_scale / 2
    for cell in grid.iter_cells():
        walls = placement_walls(grid, cell.coords)
        cx, cy, cz = cell_position(cell.coords, grid.width, grid.height, cell_scale, origin)
        for wall, (dx, dz), rotation in _SEGMENT_LAYOUT:
            if (walls & wall) != wall:
                continue
            yield WallSegment(
                coords=cell.coords,
                wall=wall,
                position=(cx + dx * half, cy, cz + dz * half),
                rotation=rotation,
                name=f"Cell {cell.coords}, wall {wall.label}",
            )


@dataclass(frozen=True)
class MarkerPositions:
    """Where the start/finish markers and the player go."""

    start: Position
    finish: Position
    player: Position


def marker_positions(config: MazeConfig) -> MarkerPositions:
    def place(coord: Coordinate) -> Position:
        return cell_position(
            coord, config.width, config.height, config.corridor_width, config.origin
        )

    start = place(config.start)
    return MarkerPositions(start=start, finish=place(config.finish), player=start)
