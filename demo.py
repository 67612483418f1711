"""
Terminal demo for the maze generator.

    python demo.py [preset]          browse mazes interactively
    python demo.py print [preset]    print one maze with its statistics
"""

import logging
import random
import sys

import readchar
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from ascii_render import render, render_bitmasks
from maze_config import PRESETS, MazeConfig
from maze_layout import marker_positions, wall_segments
from mazegen import (
    MazeSession,
    count_passages,
    dead_ends,
    is_fully_connected,
)


class MazeDemo:
    """Interactive maze browser: new rounds, reseeding and quitting by key."""

    def __init__(self, config: MazeConfig) -> None:
        self.session = MazeSession(config)
        self.console = Console()
        self.status_message = "Ready"
        self.session.new_game()

    def generate_display(self) -> Panel:
        """Build the panel for the current round."""
        grid = self.session.grid
        config = self.session.config
        assert grid is not None

        status = Text()
        status.append("Round: ", style="bold")
        status.append(f"{self.session.round}\n")
        status.append("Size: ", style="bold")
        status.append(f"{grid.width}x{grid.height}  ")
        status.append("Seed: ", style="bold")
        status.append(f"{config.seed or 'random'}\n")
        status.append("Start: ", style="bold green")
        status.append(f"{config.start}  ")
        status.append("Finish: ", style="bold red")
        status.append(f"{config.finish}\n\n")

        maze_text = render(grid, config.start, config.finish)
        status.append(Text.from_ansi(maze_text))
        status.append("\n\n")
        status.append("Keys:\n", style="bold cyan")
        status.append("  N - Next round (swap start and finish)\n")
        status.append("  R - Regenerate with a new random seed\n")
        status.append("  Q - Quit\n\n")

        status.append("─" * 40 + "\n", style="dim")
        status.append("Status: ", style="bold")
        status.append(self.status_message)

        return Panel(status, title="Maze Generator Demo", border_style="green")

    def next_round(self) -> None:
        self.session.finish_reached()
        self.status_message = f"Round {self.session.round}: start and finish swapped"

    def regenerate(self) -> None:
        seed = random.randint(1, 2**31 - 1)
        self.session.reseed(seed)
        self.status_message = f"Regenerated with seed {seed}"

    def run(self) -> None:
        with Live(self.generate_display(), console=self.console, refresh_per_second=4) as live:
            try:
                while True:
                    live.update(self.generate_display())

                    key = readchar.readkey()

                    if key.lower() == "q":
                        self.status_message = "Quitting..."
                        live.update(self.generate_display())
                        break
                    elif key.lower() == "n":
                        self.next_round()
                    elif key.lower() == "r":
                        self.regenerate()
                    else:
                        self.status_message = f"Unknown key: {repr(key)}"

            except KeyboardInterrupt:
                self.status_message = "Interrupted by user"
                live.update(self.generate_display())


def print_maze(config: MazeConfig) -> None:
    """Generate one maze and print it with some statistics."""
    session = MazeSession(config)
    grid = session.new_game()
    markers = marker_positions(config)
    segments = list(wall_segments(grid, config.corridor_width, config.origin))

    print(render(grid, config.start, config.finish))
    print()
    print(render_bitmasks(grid))
    print()
    print(f"Passages:    {count_passages(grid)} (cells: {grid.size})")
    print(f"Connected:   {is_fully_connected(grid, config.finish)}")
    print(f"Dead ends:   {len(dead_ends(grid))}")
    print(f"Wall pieces: {len(segments)}")
    print(f"Start at {markers.start}, finish at {markers.finish}")


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] == "print":
        logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
        print_maze(PRESETS[sys.argv[2] if len(sys.argv) > 2 else "default"])
    else:
        MazeDemo(PRESETS[sys.argv[1] if len(sys.argv) > 1 else "default"]).run()
