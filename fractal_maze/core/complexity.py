from collections import deque
from typing import Any, Dict, Set
from fractal_maze.core.maze import Maze

class MazeStats:
    @staticmethod
    def open_count(maze: Maze, key: int) -> int:
        c = 0
        for direction in Maze.DIRECTIONS:
            if not maze.has_wall_at(key, direction):
                c += 1
        return c

    @staticmethod
    def count_passages(maze: Maze) -> int:
        """Open internal walls. Each passage is counted once via its NORTH/WEST owner."""
        passages = 0
        for key in range(maze.width * maze.height):
            for direction in Maze.UL_DIRECTIONS:
                if not maze.has_wall_at(key, direction):
                    passages += 1
        return passages

    @staticmethod
    def reachable(maze: Maze, key: int) -> Set[int]:
        seen = {key}
        queue = deque([key])
        while queue:
            current = queue.popleft()
            for direction in Maze.DIRECTIONS:
                if maze.has_wall_at(current, direction):
                    continue
                n_key = maze.try_relative_key(current, direction)
                if n_key not in seen:
                    seen.add(n_key)
                    queue.append(n_key)
        return seen

    @staticmethod
    def is_perfect(maze: Maze) -> bool:
        """A spanning tree: cells - 1 passages and every cell connected."""
        total = maze.width * maze.height
        if total == 0:
            return False
        if MazeStats.count_passages(maze) != total - 1:
            return False
        return len(MazeStats.reachable(maze, 0)) == total

    @staticmethod
    def calculate(maze: Maze) -> Dict[str, Any]:
        dead_ends = 0
        corridors = 0
        junctions = 0
        inactive = 0

        for key in range(maze.width * maze.height):
            exits = MazeStats.open_count(maze, key)
            if exits == 0: inactive += 1
            elif exits == 1: dead_ends += 1
            elif exits == 2: corridors += 1
            else: junctions += 1

        total = maze.width * maze.height
        return {
            "cells": total,
            "open_passages": MazeStats.count_passages(maze),
            "dead_ends": dead_ends,
            "corridors": corridors,
            "junctions": junctions,
            "inactive": inactive,
            "dead_end_percent": (dead_ends / total) * 100 if total > 0 else 0
        }
