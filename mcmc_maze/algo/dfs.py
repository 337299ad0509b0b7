import logging
import random
from typing import Iterator, List, Set
from mcmc_maze.core.maze import Cell, Maze
from mcmc_maze.algo.base import Generator

logger = logging.getLogger(__name__)

class RecursiveBacktracker(Generator):
    def run(self) -> Iterator[str]:
        maze = self.maze
        rng = self.rng

        # Uniformly random start cell
        start = Cell(rng.randrange(maze.rows), rng.randrange(maze.cols))
        logger.debug(f"Backtracker start = {tuple(start)}")

        visited: Set[Cell] = {start}
        stack: List[Cell] = [start]

        while stack:
            cell = stack[-1]

            # Grid neighbours we haven't reached yet (edges are irrelevant here)
            neighbors = [n for n in maze.neighbors(cell) if n not in visited]

            if neighbors:
                neighbor = rng.choice(neighbors)

                maze.carve(cell, neighbor)
                visited.add(neighbor)

                stack.append(neighbor)
                self.step_count += 1

                # Yield every N steps to keep UI responsive without spamming
                if self.step_count % 100 == 0:
                    yield f"Carving... Stack: {len(stack)}"
            else:
                # Backtrack
                stack.pop()

        logger.debug(f"Backtracker carved {self.step_count} edges over {len(visited)} cells")
        yield "Done"

def generate(rng: random.Random, rows: int, cols: int) -> Maze:
    """Builds a perfect maze (spanning tree) of the given size. Deterministic for a seeded rng."""
    maze = Maze(rows, cols)
    RecursiveBacktracker(maze, rng).run_all()
    return maze
