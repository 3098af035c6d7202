import random
from abc import ABC, abstractmethod
from typing import Iterator, Optional
from fractal_maze.core.maze import Maze

class Generator(ABC):
    def __init__(self, maze: Maze, seed: Optional[int] = None, rng: Optional[random.Random] = None):
        self.maze = maze
        self.seed = seed
        self.rng = rng if rng is not None else random.Random(seed)
        self.step_count = 0

    @abstractmethod
    def run(self) -> Iterator[str]:
        """
        Yields status strings or progress updates.
        The actual maze modifications happen in-place on self.maze.
        """
        pass

    def run_all(self):
        """Helper to run the generator to completion."""
        for _ in self.run():
            pass
