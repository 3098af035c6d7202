import random
from array import array
from typing import Iterator, List, Tuple
from fractal_maze.core.maze import Maze, Cell
from fractal_maze.algo.base import Generator

UNCLAIMED = -1

Bounds = Tuple[int, int, int, int]

class RegionCarver(Generator):
    """
    Randomized depth-first carver confined to a bounding box.

    bounds = (x1, y1, x2, y2) is exclusive on every side. Several carvers can
    share one maze and one ownership map: a carver only ever opens a wall into
    a cell that is still fully walled and strictly inside its own box, so it
    never disturbs cells another carver already claimed.
    """
    ACTIVE = "active"
    EXHAUSTED = "exhausted"

    def __init__(self, gen_id: int, maze: Maze, owners: array, rng: random.Random,
                 seed_cell: Cell, bounds: Bounds):
        super().__init__(maze, rng=rng)
        self.gen_id = gen_id
        self.owners = owners
        self.x1, self.y1, self.x2, self.y2 = bounds
        self.state = self.ACTIVE

        # Stack of cell keys along the current DFS branch
        self.stack: List[int] = [seed_cell.key]
        self.owners[seed_cell.key] = gen_id

    @property
    def exhausted(self) -> bool:
        return self.state == self.EXHAUSTED

    def contains(self, x: int, y: int) -> bool:
        return self.x1 < x < self.x2 and self.y1 < y < self.y2

    def advance(self) -> bool:
        """Carve one passage. Returns False once the region is exhausted."""
        maze = self.maze
        width = maze.width
        while self.stack:
            key = self.stack[-1]

            offset = self.rng.randrange(4)
            for i in range(4):
                direction = Maze.DIRECTIONS[(offset + i) % 4]
                n_key = maze.try_relative_key(key, direction)
                if n_key is None:
                    continue
                if not self.contains(n_key % width, n_key // width):
                    continue
                if not Cell(maze, n_key).is_inactive():
                    continue

                maze.set_wall_at(key, direction, False)
                self.owners[n_key] = self.gen_id
                self.stack.append(n_key)
                self.step_count += 1
                return True

            # Dead end, backtrack
            self.stack.pop()

        self.state = self.EXHAUSTED
        return False

    def run(self) -> Iterator[str]:
        while self.advance():
            if self.step_count % 100 == 0:
                yield f"Carving... Stack: {len(self.stack)}"
        yield "Done"

    def claimed_cells(self) -> Iterator[Cell]:
        """Cells owned by this carver, row-major inside its box."""
        maze = self.maze
        for y in range(self.y1 + 1, self.y2):
            for x in range(self.x1 + 1, self.x2):
                key = maze.try_position_to_key(x, y)
                if key is not None and self.owners[key] == self.gen_id:
                    yield Cell(maze, key)


def new_owner_map(maze: Maze) -> array:
    return array('i', [UNCLAIMED] * (maze.width * maze.height))
