import logging
import random
from typing import Iterator, List, Optional, Tuple
from fractal_maze.core.maze import Maze, Cell
from fractal_maze.algo.base import Generator
from fractal_maze.algo.dfs import RegionCarver, new_owner_map

logger = logging.getLogger(__name__)

class ExpansionError(RuntimeError):
    """The expanded maze could not be connected. The source was not a perfect maze
    or the regions are inconsistent with the scale factor."""


class MazeExpander(Generator):
    """
    Grows a perfect maze out of a smaller perfect maze.

    Every source cell becomes a region of roughly factor x factor cells carved
    by its own RegionCarver. The carvers share one ownership map and one rng
    and are stepped round-robin, one passage per carver per sweep, so the
    layout for a given seed depends on that interleaving. Afterwards each open
    source edge is turned into exactly one passage between the two regions.
    """

    def __init__(self, source: Maze, factor: int, seed: Optional[int] = None,
                 rng: Optional[random.Random] = None):
        if factor < 1:
            raise ValueError(f"Scale factor must be at least 1, got {factor}")
        if source.width * source.height == 0:
            raise ValueError("Cannot expand an empty maze")
        super().__init__(Maze(source.width * factor, source.height * factor), seed=seed, rng=rng)
        self.source = source
        self.factor = factor
        self.owners = new_owner_map(self.maze)
        self.carvers: List[RegionCarver] = []
        self.sweeps = 0
        self.welds = 0

    @classmethod
    def expand(cls, source: Maze, factor: int, seed: Optional[int] = None,
               rng: Optional[random.Random] = None) -> Maze:
        expander = cls(source, factor, seed=seed, rng=rng)
        expander.run_all()
        return expander.maze

    def run(self) -> Iterator[str]:
        src = self.source
        logger.info(f"Expanding {src.width}x{src.height} maze by {self.factor} "
                     f"to {self.maze.width}x{self.maze.height}")

        self.spawn()
        yield f"Spawned {len(self.carvers)} regions"

        logger.info("Generating")
        while self.sweep():
            if self.sweeps % 100 == 0:
                logger.debug(f"Sweep {self.sweeps}: {self.step_count} passages carved")
            yield f"Carving... Sweep: {self.sweeps}"

        logger.info("Welding")
        for a_key, b_key in self.source_edges():
            self.weld(self.carvers[a_key], self.carvers[b_key])
        yield f"Welded {self.welds} regions"

        logger.info("Finding start/end")
        self.maze.start = self.find_start_exit(self.carvers[src.start_key])
        self.maze.end = self.find_start_exit(self.carvers[src.end_key])
        yield "Done"

    def spawn(self):
        """One carver per source cell, id == source key."""
        f = self.factor
        offset = f // 2
        for y in range(self.source.height):
            for x in range(self.source.width):
                center = self.maze[x * f + offset, y * f + offset]
                # Box edges sit on the neighbouring centres, which stay excluded
                bounds = ((x - 1) * f + offset, (y - 1) * f + offset,
                          (x + 1) * f + offset, (y + 1) * f + offset)
                self.carvers.append(RegionCarver(len(self.carvers), self.maze, self.owners,
                                                 self.rng, center, bounds))

    def sweep(self) -> bool:
        """Advance every carver once. False when none made progress."""
        has_more = False
        for carver in self.carvers:
            if carver.advance():
                self.step_count += 1
                has_more = True
        self.sweeps += 1
        return has_more

    def source_edges(self) -> Iterator[Tuple[int, int]]:
        """Open internal walls of the source, each edge once."""
        src = self.source
        for key in range(src.width * src.height):
            for direction in Maze.UL_DIRECTIONS:
                other = src.try_relative_key(key, direction)
                if other is not None and not src.has_wall_at(key, direction):
                    yield key, other

    def weld(self, a: RegionCarver, b: RegionCarver):
        maze = self.maze
        owners = self.owners
        possible = []
        for c1 in a.claimed_cells():
            for direction in Maze.DIRECTIONS:
                n_key = maze.try_relative_key(c1.key, direction)
                if n_key is not None and owners[n_key] == b.gen_id:
                    possible.append((c1, Cell(maze, n_key)))

        if not possible:
            raise ExpansionError(f"Cannot weld region {a.gen_id} to region {b.gen_id}")

        c1, c2 = self.rng.choice(possible)
        c1.clear_mutual_wall(c2)
        self.welds += 1

    def find_start_exit(self, carver: RegionCarver) -> Cell:
        for cell in carver.claimed_cells():
            return cell
        raise ExpansionError(f"Region {carver.gen_id} claimed no cells")
