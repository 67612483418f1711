"""
Perfect maze generation over a rectangular grid.

Randomized depth-first search (recursive backtracker) with an explicit stack:
carving starts at the finish cell and wanders until every reachable cell has
been visited and backtracked out of.
"""

from __future__ import annotations

import logging
import random
from collections import deque

from maze_config import MazeConfig
from maze_types import (
    ALL_WALLS,
    NO_WALLS,
    Cell,
    Coordinate,
    InvalidCoordinate,
    InvalidDimensions,
    MazeError,
    MazeGrid,
    OutOfBounds,
    Wall,
    new_grid,
)

logger = logging.getLogger(__name__)

__all__ = [
    "ALL_WALLS",
    "ATTEMPTS_PER_CELL",
    "DRAW_ORDER",
    "NO_WALLS",
    "Cell",
    "Coordinate",
    "InvalidCoordinate",
    "InvalidDimensions",
    "MazeError",
    "MazeGrid",
    "MazeSession",
    "OutOfBounds",
    "Wall",
    "attempt_budget",
    "carve",
    "count_passages",
    "dead_ends",
    "generate",
    "generate_from_config",
    "is_fully_connected",
    "is_perfect",
    "make_rng",
    "new_grid",
    "open_walls",
    "reachable_from",
    "walls_consistent",
]

# Direction picked by each value of rng.randrange(4)
DRAW_ORDER: tuple[Wall, ...] = (Wall.UP, Wall.DOWN, Wall.RIGHT, Wall.LEFT)

ATTEMPTS_PER_CELL = 10


# =============================================================================
# Generation
# =============================================================================


def make_rng(seed: int) -> random.Random:
    """Seeded generator; seed 0 asks for a non-deterministic one."""
    return random.Random(seed) if seed != 0 else random.Random()


def attempt_budget(width: int, height: int) -> int:
    """Iteration cap for carving a width x height grid."""
    return width * height * ATTEMPTS_PER_CELL


def _check_coordinate(grid: MazeGrid, name: str, coord: Coordinate) -> None:
    if not grid.in_bounds(coord):
        raise InvalidCoordinate(
            f"The {name} cell {coord} is outside the grid\n"
            f"  Grid size: {grid.width}x{grid.height}\n"
            f"  Valid x: 0..{grid.width - 1}, valid z: 0..{grid.height - 1}"
        )


def carve(
    grid: MazeGrid,
    root: Coordinate,
    rng: random.Random,
    max_attempts: int | None = None,
) -> int:
    """
    Carve a maze into `grid` in place, starting from `root`.

    Each iteration looks at the top of the path stack. A cell with no
    unvisited neighbours is popped. Otherwise one of the four directions is
    drawn at random; if it leads off the grid or into a visited cell the
    iteration does nothing and the next one draws again.

    The loop stops when the stack is empty or after `max_attempts`
    iterations (default: ATTEMPTS_PER_CELL per cell). Running out of attempts
    leaves a partial maze that is still acyclic and wall-consistent.

    Args:
        grid: Grid to carve; reset to fully walled and unvisited first
        root: Cell the carving starts from
        rng: Source of direction draws, one randrange(4) per non-backtracking
            iteration
        max_attempts: Optional override of the iteration budget

    Returns:
        The number of iterations consumed
    """
    _check_coordinate(grid, "root", root)
    budget = attempt_budget(grid.width, grid.height) if max_attempts is None else max_attempts
    if budget < 0:
        raise ValueError(f"Attempt budget must be >= 0, got {budget}")

    grid.reset()
    path: list[Coordinate] = [root]
    attempts = 0
    while path and attempts < budget:
        attempts += 1
        current = path[-1]
        cell = grid[current]
        cell.visited = True

        remaining = sum(1 for _, other in grid.neighbors(current) if not other.visited)
        if remaining == 0:
            # Backtrack
            path.pop()
            continue

        wall = DRAW_ORDER[rng.randrange(4)]
        other = grid.neighbor(current, wall)
        if other is None or other.visited:
            continue

        grid.open_wall(current, wall)
        path.append(other.coords)

    if path:
        logger.warning(
            "carve: attempt budget of %d exhausted with %d cells still on the path",
            budget,
            len(path),
        )
    return attempts


def generate(
    width: int,
    height: int,
    start: Coordinate,
    finish: Coordinate,
    seed: int = 0,
    max_attempts: int | None = None,
) -> MazeGrid:
    """
    Generate a perfect maze.

    Carving runs from `finish`; `start` is only validated, since the result
    is an unrooted spanning tree and any cell would do as the root.

    Args:
        width: Number of columns (>= 1)
        height: Number of rows (>= 1)
        start: Start cell, must lie inside the grid
        finish: Finish cell and carving root, must lie inside the grid
        seed: Random seed; 0 uses system entropy
        max_attempts: Optional override of the iteration budget

    Returns:
        A new grid whose cells carry the final wall flags

    Raises:
        InvalidDimensions: If width or height is below 1
        InvalidCoordinate: If start or finish is outside the grid
    """
    grid = new_grid(width, height)
    _check_coordinate(grid, "start", start)
    _check_coordinate(grid, "finish", finish)

    attempts = carve(grid, finish, make_rng(seed), max_attempts)
    logger.info(
        "generate: %dx%d seed=%d attempts=%d reached=%d/%d",
        width,
        height,
        seed,
        attempts,
        sum(1 for cell in grid.cells if cell.visited),
        grid.size,
    )
    return grid


def generate_from_config(config: MazeConfig, max_attempts: int | None = None) -> MazeGrid:
    return generate(
        config.width, config.height, config.start, config.finish, config.seed, max_attempts
    )


# =============================================================================
# Analysis
# =============================================================================


def open_walls(grid: MazeGrid, coord: Coordinate) -> list[Wall]:
    """Directions in which the cell at `coord` has a passage."""
    cell = grid[coord]
    return [wall for wall in DRAW_ORDER if not cell.has_wall(wall)]


def reachable_from(grid: MazeGrid, root: Coordinate) -> set[Coordinate]:
    """Flood fill over open passages from `root`."""
    seen = {root}
    queue: deque[Coordinate] = deque([root])
    while queue:
        coord = queue.popleft()
        for wall in open_walls(grid, coord):
            other = grid.neighbor(coord, wall)
            if other is None or other.has_wall(wall.opposite):
                continue
            if other.coords not in seen:
                seen.add(other.coords)
                queue.append(other.coords)
    return seen


def count_passages(grid: MazeGrid) -> int:
    """Number of shared edges open on both sides."""
    count = 0
    for cell in grid.cells:
        for wall in (Wall.UP, Wall.RIGHT):
            other = grid.neighbor(cell.coords, wall)
            if other is None:
                continue
            if not cell.has_wall(wall) and not other.has_wall(wall.opposite):
                count += 1
    return count


def walls_consistent(grid: MazeGrid) -> bool:
    """
    Check the wall invariants: shared edges agree on both sides and no
    boundary cell is open toward the outside.
    """
    for cell in grid.cells:
        for wall in DRAW_ORDER:
            other = grid.neighbor(cell.coords, wall)
            if other is None:
                if not cell.has_wall(wall):
                    return False
            elif cell.has_wall(wall) != other.has_wall(wall.opposite):
                return False
    return True


def is_fully_connected(grid: MazeGrid, root: Coordinate) -> bool:
    return len(reachable_from(grid, root)) == grid.size


def is_perfect(grid: MazeGrid) -> bool:
    """True if the open passages form a spanning tree of the whole grid."""
    return (
        walls_consistent(grid)
        and count_passages(grid) == grid.size - 1
        and is_fully_connected(grid, Coordinate(0, 0))
    )


def dead_ends(grid: MazeGrid) -> list[Coordinate]:
    """Cells with exactly one passage, in column-major order."""
    return [cell.coords for cell in grid.iter_cells() if len(open_walls(grid, cell.coords)) == 1]


# =============================================================================
# Rounds
# =============================================================================


class MazeSession:
    """
    Successive mazes for a game.

    Every round replaces the grid wholesale; anything built from the previous
    grid must be thrown away by the caller.
    """

    def __init__(self, config: MazeConfig | None = None) -> None:
        self.config = config if config is not None else MazeConfig()
        self.grid: MazeGrid | None = None
        self.round = 0

    def new_game(self) -> MazeGrid:
        """Generate a fresh maze for the current settings."""
        self.grid = generate_from_config(self.config)
        self.round += 1
        logger.info(
            "round %d: start=%s finish=%s",
            self.round,
            self.config.start,
            self.config.finish,
        )
        return self.grid

    def finish_reached(self) -> MazeGrid:
        """Swap start and finish and begin the next round."""
        self.config = self.config.swapped()
        return self.new_game()

    def reseed(self, seed: int) -> MazeGrid:
        self.config = self.config.with_seed(seed)
        return self.new_game()
