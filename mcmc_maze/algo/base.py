import random
from abc import ABC, abstractmethod
from typing import Iterator

class Generator(ABC):
    def __init__(self, maze, rng: random.Random):
        self.maze = maze
        self.rng = rng
        self.step_count = 0

    @abstractmethod
    def run(self) -> Iterator[str]:
        """
        Yields status strings or progress updates.
        The actual edge carving happens in-place on self.maze.
        """
        pass

    def run_all(self):
        """Helper to run the generator to completion."""
        for _ in self.run():
            pass
