import logging
from fractal_maze.core.maze import Maze

logger = logging.getLogger(__name__)

N, E, S, W = Maze.NORTH, Maze.EAST, Maze.SOUTH, Maze.WEST

class LabyrinthConverter:
    """
    Doubles a maze in both axes. Each source cell becomes a 2x2 block whose
    corridors follow the source walls: an open side turns into a straight
    corridor out of the block, a closed side into a corridor running along it.
    """

    @staticmethod
    def convert(source: Maze) -> Maze:
        maze = Maze(source.width * 2, source.height * 2)

        logger.info(f"Converting {source.width}x{source.height} maze to labyrinth")
        for y in range(source.height):
            for x in range(source.width):
                sc = source[x, y]
                bx, by = x * 2, y * 2

                if not sc.has_wall(N):
                    maze[bx, by].clear_wall(N)
                    maze[bx + 1, by].clear_wall(N)
                else:
                    maze[bx, by].clear_wall(E)

                if not sc.has_wall(E):
                    maze[bx + 1, by].clear_wall(E)
                    maze[bx + 1, by + 1].clear_wall(E)
                else:
                    maze[bx + 1, by].clear_wall(S)

                if not sc.has_wall(S):
                    maze[bx, by + 1].clear_wall(S)
                    maze[bx + 1, by + 1].clear_wall(S)
                else:
                    maze[bx, by + 1].clear_wall(E)

                if not sc.has_wall(W):
                    maze[bx, by].clear_wall(W)
                    maze[bx, by + 1].clear_wall(W)
                else:
                    maze[bx, by].clear_wall(S)

        if maze.width * maze.height:
            # Entrance and exit share the first block, split by a wall
            maze[0, 0].set_wall(E, True)
            maze.start = maze[0, 0]
            maze.end = maze[1, 0]
        return maze
