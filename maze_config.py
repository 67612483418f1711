"""
Maze settings: geometry, designated cells, seed and world placement.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from maze_types import Coordinate, InvalidCoordinate, InvalidDimensions, Position

__all__ = ["MazeConfig", "PRESETS"]


@dataclass(frozen=True)
class MazeConfig:
    """Everything needed to generate and place one maze."""

    width: int = 10  # cells
    height: int = 10  # cells
    corridor_width: float = 1  # world units per cell
    # Start and finish sit on opposite sides, 2 in from the corner rows
    start: Coordinate = field(default_factory=lambda: Coordinate(0, 2))
    finish: Coordinate = field(default_factory=lambda: Coordinate(9, 7))
    seed: int = 0  # 0 = non-deterministic
    origin: Position = (0.0, 0.0, 0.0)

    def __post_init__(self) -> None:
        if self.width < 1 or self.height < 1:
            raise InvalidDimensions(
                f"Invalid maze dimensions: {self.width}x{self.height}\n"
                f"  Width and height must both be >= 1"
            )
        if self.corridor_width <= 0:
            raise ValueError(f"Corridor width must be positive, got {self.corridor_width}")
        for name, coord in (("start", self.start), ("finish", self.finish)):
            if not (0 <= coord.x < self.width and 0 <= coord.z < self.height):
                raise InvalidCoordinate(
                    f"The {name} cell {coord} is outside the "
                    f"{self.width}x{self.height} grid"
                )

    def swapped(self) -> MazeConfig:
        """The same maze settings with start and finish exchanged."""
        return replace(self, start=self.finish, finish=self.start)

    def with_seed(self, seed: int) -> MazeConfig:
        return replace(self, seed=seed)


PRESETS: dict[str, MazeConfig] = dict(
    default=MazeConfig(),
    small=MazeConfig(width=5, height=5, start=Coordinate(0, 0), finish=Coordinate(4, 4)),
    wide=MazeConfig(width=24, height=8, start=Coordinate(0, 1), finish=Coordinate(23, 6)),
    large=MazeConfig(
        width=30, height=20, corridor_width=2, start=Coordinate(0, 0), finish=Coordinate(29, 19)
    ),
    seeded=MazeConfig(seed=42),
)
