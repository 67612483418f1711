"""
ASCII rendering for generated mazes.

Provides two views:
1. Wall drawing - box-drawn corridors with start/finish markers, optionally coloured
2. Bitmask dump - one hex digit per cell showing the raw wall flags
"""

from __future__ import annotations

import logging
from typing import Callable

import simple_chalk as chalk  # type: ignore[import-untyped]

from maze_layout import placement_walls
from maze_types import Coordinate, MazeGrid, Wall

logger = logging.getLogger(__name__)

__all__ = ["render", "render_bitmasks"]

CELL_WIDTH = 3


def _plain(s: str) -> str:
    return s


def render(
    grid: MazeGrid,
    start: Coordinate | None = None,
    finish: Coordinate | None = None,
    color: bool = True,
) -> str:
    """
    Render a maze as text, highest row first.

    Walls are drawn with the same ownership rule a renderer uses: every cell
    draws its Up and Right edges, the bottom row adds Down and the left
    column adds Left.

    Args:
        grid: The maze to draw
        start: Optional cell to mark with S
        finish: Optional cell to mark with F (* when it is also the start)
        color: Emit ANSI colours via chalk

    Returns:
        Rendered string, one line per text row
    """
    wall_fn: Callable[[str], str] = chalk.white if color else _plain
    start_fn: Callable[[str], str] = chalk.green if color else _plain
    finish_fn: Callable[[str], str] = chalk.red if color else _plain

    horizontal = wall_fn("-" * CELL_WIDTH)
    vertical = wall_fn("|")
    corner = wall_fn("+")
    gap = " " * CELL_WIDTH

    def content(coord: Coordinate) -> str:
        if coord == start and coord == finish:
            return finish_fn(" * ")
        if coord == start:
            return start_fn(" S ")
        if coord == finish:
            return finish_fn(" F ")
        return gap

    def has(coord: Coordinate, wall: Wall) -> bool:
        return (placement_walls(grid, coord) & wall) == wall

    lines: list[str] = []
    for z in reversed(range(grid.height)):
        top = corner
        middle = ""
        for x in range(grid.width):
            coord = Coordinate(x, z)
            top += (horizontal if has(coord, Wall.UP) else gap) + corner
            if x == 0:
                middle += vertical if has(coord, Wall.LEFT) else " "
            middle += content(coord)
            middle += vertical if has(coord, Wall.RIGHT) else " "
        lines.append(top)
        lines.append(middle)

    bottom = corner
    for x in range(grid.width):
        bottom += (horizontal if has(Coordinate(x, 0), Wall.DOWN) else gap) + corner
    lines.append(bottom)

    logger.debug("render: %dx%d maze -> %d lines", grid.width, grid.height, len(lines))
    return "\n".join(lines)


def render_bitmasks(grid: MazeGrid) -> str:
    """
    Dump the wall bitmask of every cell as a hex digit, highest row first.

    Bits: 1 = up, 2 = down, 4 = right, 8 = left.
    """
    masks = grid.bitmasks()
    return "\n".join(
        " ".join(f"{masks[x][z]:X}" for x in range(grid.width))
        for z in reversed(range(grid.height))
    )
