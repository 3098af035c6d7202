from abc import ABC, abstractmethod
from array import array
from collections import deque
from typing import Iterator, List, Tuple
from fractal_maze.core.maze import Maze

class Solver(ABC):
    def __init__(self, maze: Maze):
        self.maze = maze
        self.path: List[Tuple[int, int]] = []
        self.visited_count = 0

    @abstractmethod
    def run(self, start: Tuple[int, int], end: Tuple[int, int]) -> Iterator[str]:
        pass

class BFS(Solver):
    @classmethod
    def solve(cls, maze: Maze) -> List[Tuple[int, int]]:
        """Path from the maze's start to its end, empty if they are disconnected."""
        solver = cls(maze)
        for _ in solver.run(maze.start.position, maze.end.position):
            pass
        return solver.path

    def run(self, start: Tuple[int, int], end: Tuple[int, int]) -> Iterator[str]:
        maze = self.maze
        start_key = maze.position_to_key(*start)
        end_key = maze.position_to_key(*end)

        # Dense parent array: direction back towards the parent, 0 = unvisited
        self.parents = array('B', [0] * (maze.width * maze.height))
        visited = bytearray(maze.width * maze.height)
        visited[start_key] = 1
        self.visited_count = 1

        queue = deque([start_key])
        while queue:
            key = queue.popleft()
            if key == end_key:
                break

            for direction in Maze.DIRECTIONS:
                if maze.has_wall_at(key, direction):
                    continue
                n_key = maze.try_relative_key(key, direction)
                if visited[n_key]:
                    continue
                visited[n_key] = 1
                self.visited_count += 1
                self.parents[n_key] = Maze.OPPOSITE[direction]
                queue.append(n_key)

            if self.visited_count % 100 == 0:
                yield f"Visited: {self.visited_count}"

        if visited[end_key]:
            self.reconstruct_path(start_key, end_key)
        yield "Solved"

    def reconstruct_path(self, start_key: int, end_key: int):
        maze = self.maze
        key = end_key
        while key != start_key:
            self.path.append(maze.key_to_position(key))
            key = maze.try_relative_key(key, self.parents[key])
        self.path.append(maze.key_to_position(start_key))
        self.path.reverse()
