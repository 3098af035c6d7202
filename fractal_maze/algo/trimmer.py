import logging
from typing import List, Optional, Tuple
from fractal_maze.core.maze import Maze, Cell

logger = logging.getLogger(__name__)

class MazeTrimmer:
    """
    Reduces a perfect maze to the path between its start and end by sealing
    dead ends until none are left apart from start and end themselves.
    """

    @staticmethod
    def trim(source: Maze) -> Maze:
        maze, _ = MazeTrimmer.trim_with_count(source)
        return maze

    @staticmethod
    def trim_with_count(source: Maze) -> Tuple[Maze, int]:
        """Returns the trimmed copy and the number of walls sealed."""
        maze = source.copy()
        stack: List[Cell] = []

        logger.info("Trimming maze")
        # Phase 1: queue every tail that is neither start nor end
        for cell in maze.cells():
            if not MazeTrimmer.is_special(cell) and MazeTrimmer.is_tail(cell):
                stack.append(cell)

        # Phase 2: seal tails, following each dead end back to its junction
        sealed = 0
        while stack:
            cell = stack.pop()
            # Two tails facing each other: the first pop already sealed this one
            direction = MazeTrimmer.tail_direction(cell)
            if direction is None:
                continue
            cell.set_wall(direction, True)
            sealed += 1
            other = cell.move(direction)
            if MazeTrimmer.is_tail(other) and not MazeTrimmer.is_special(other):
                stack.append(other)

        logger.debug(f"Sealed {sealed} walls")
        return maze, sealed

    @staticmethod
    def tail_direction(cell: Cell) -> Optional[int]:
        """The only open direction of a dead end, None for any other cell."""
        open_dirs = list(cell.open_directions())
        if len(open_dirs) == 1:
            return open_dirs[0]
        return None

    @staticmethod
    def is_tail(cell: Cell) -> bool:
        return MazeTrimmer.tail_direction(cell) is not None

    @staticmethod
    def is_special(cell: Cell) -> bool:
        maze = cell.maze
        return cell.key == maze.start_key or cell.key == maze.end_key
