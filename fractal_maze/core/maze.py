from typing import Iterator, Optional, Tuple
from fractal_maze.core.bitlist import BitList

class Maze:
    """
    Rectangular maze storing one NORTH and one WEST wall flag per cell.

    A cell's SOUTH wall is the NORTH flag of the cell below it and its EAST
    wall is the WEST flag of the cell to its right. Walls facing the outer
    boundary are implicit and can never be cleared.
    """
    # Direction bitmasks
    NORTH = 0b0001
    EAST  = 0b0010
    SOUTH = 0b0100
    WEST  = 0b1000

    # Iteration order decides carve/weld tie-breaks
    DIRECTIONS = (NORTH, EAST, SOUTH, WEST)
    # Each internal edge exactly once
    UL_DIRECTIONS = (NORTH, WEST)

    DX = {NORTH: 0, SOUTH: 0, EAST: 1, WEST: -1}
    DY = {NORTH: -1, SOUTH: 1, EAST: 0, WEST: 0}
    OPPOSITE = {NORTH: SOUTH, SOUTH: NORTH, EAST: WEST, WEST: EAST}
    NAMES = {NORTH: "north", EAST: "east", SOUTH: "south", WEST: "west"}

    __slots__ = ('width', 'height', 'north_walls', 'west_walls', 'start_key', 'end_key')

    def __init__(self, width: int, height: int):
        if width < 0 or height < 0:
            raise ValueError(f"Maze dimensions must be non-negative, got {width}x{height}")
        self.width = width
        self.height = height
        # Fully walled
        self.north_walls = BitList(width * height, True)
        self.west_walls = BitList(width * height, True)
        self.start_key = 0
        self.end_key = 0

    @classmethod
    def from_parts(cls, width: int, height: int, north_walls: BitList, west_walls: BitList,
                   start_key: int, end_key: int) -> "Maze":
        total = width * height
        if len(north_walls) != total or len(west_walls) != total:
            raise ValueError(
                f"Wall lists ({len(north_walls)}, {len(west_walls)}) do not match {width}x{height} maze")
        if total > 0:
            for name, key in (("Start", start_key), ("End", end_key)):
                if not 0 <= key < total:
                    raise ValueError(f"{name} key {key} out of range for {width}x{height} maze")
        maze = cls(0, 0)
        maze.width = width
        maze.height = height
        maze.north_walls = north_walls
        maze.west_walls = west_walls
        maze.start_key = start_key
        maze.end_key = end_key
        return maze

    def copy(self) -> "Maze":
        return Maze.from_parts(self.width, self.height, self.north_walls.copy(),
                               self.west_walls.copy(), self.start_key, self.end_key)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Maze):
            return NotImplemented
        return (self.width == other.width and self.height == other.height
                and self.start_key == other.start_key and self.end_key == other.end_key
                and self.north_walls == other.north_walls and self.west_walls == other.west_walls)

    __hash__ = None

    def __repr__(self) -> str:
        return f"Maze({self.width}x{self.height}, start={self.start_key}, end={self.end_key})"

    # --- Addressing ---

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def try_position_to_key(self, x: int, y: int) -> Optional[int]:
        if not self.in_bounds(x, y):
            return None
        return y * self.width + x

    def position_to_key(self, x: int, y: int) -> int:
        if 0 <= x < self.width and 0 <= y < self.height:
            return y * self.width + x
        raise IndexError(f"Coordinate ({x}, {y}) out of bounds")

    def key_to_position(self, key: int) -> Tuple[int, int]:
        if not 0 <= key < self.width * self.height:
            raise IndexError(f"Key {key} out of bounds for {self.width}x{self.height} maze")
        y, x = divmod(key, self.width)
        return x, y

    def try_relative_key(self, key: int, direction: int) -> Optional[int]:
        """Key of the neighbour in 'direction', or None at the boundary."""
        if direction == self.NORTH:
            new_key = key - self.width
            return new_key if new_key >= 0 else None
        if direction == self.SOUTH:
            new_key = key + self.width
            return new_key if new_key < self.width * self.height else None
        if direction == self.WEST:
            return key - 1 if key % self.width > 0 else None
        if direction == self.EAST:
            return key + 1 if key % self.width < self.width - 1 else None
        raise ValueError(f"Unknown direction {direction}")

    def try_get_adjacent_direction(self, source: int, destination: int) -> Optional[int]:
        """Direction of 'destination' as seen from 'source', or None if not adjacent."""
        diff = source - destination
        if diff == -self.width:
            return self.SOUTH
        if diff == self.width:
            return self.NORTH
        if diff == -1 or diff == 1:
            # Horizontal neighbours must share a row
            if source // self.width != destination // self.width:
                return None
            return self.EAST if diff == -1 else self.WEST
        return None

    # --- Cells ---

    def __getitem__(self, pos: Tuple[int, int]) -> "Cell":
        x, y = pos
        return Cell(self, self.position_to_key(x, y))

    def cell(self, key: int) -> "Cell":
        if not 0 <= key < self.width * self.height:
            raise IndexError(f"Key {key} out of bounds for {self.width}x{self.height} maze")
        return Cell(self, key)

    def cells(self) -> Iterator["Cell"]:
        for key in range(self.width * self.height):
            yield Cell(self, key)

    @property
    def start(self) -> "Cell":
        return Cell(self, self.start_key)

    @start.setter
    def start(self, cell: "Cell"):
        self.start_key = self._own_key(cell)

    @property
    def end(self) -> "Cell":
        return Cell(self, self.end_key)

    @end.setter
    def end(self, cell: "Cell"):
        self.end_key = self._own_key(cell)

    def _own_key(self, cell: "Cell") -> int:
        if cell.maze is not self:
            raise ValueError("Cell belongs to a different maze")
        return cell.key

    # --- Walls ---

    def has_wall_at(self, key: int, direction: int) -> bool:
        neighbour = self.try_relative_key(key, direction)
        if neighbour is None:
            return True
        if direction == self.NORTH:
            return self.north_walls[key]
        if direction == self.WEST:
            return self.west_walls[key]
        if direction == self.SOUTH:
            return self.north_walls[neighbour]
        return self.west_walls[neighbour]

    def set_wall_at(self, key: int, direction: int, state: bool):
        neighbour = self.try_relative_key(key, direction)
        if neighbour is None:
            x, y = self.key_to_position(key)
            raise ValueError(f"Fixed wall on the {self.NAMES[direction]} side of ({x}, {y})")
        if direction == self.NORTH:
            self.north_walls[key] = state
        elif direction == self.WEST:
            self.west_walls[key] = state
        elif direction == self.SOUTH:
            self.north_walls[neighbour] = state
        else:
            self.west_walls[neighbour] = state


class Cell:
    """Reference to one cell of a maze. Holds no wall state of its own."""

    __slots__ = ('maze', 'key')

    def __init__(self, maze: Maze, key: int):
        self.maze = maze
        self.key = key

    def __eq__(self, other) -> bool:
        if not isinstance(other, Cell):
            return NotImplemented
        return self.maze is other.maze and self.key == other.key

    def __hash__(self) -> int:
        return hash((id(self.maze), self.key))

    def __repr__(self) -> str:
        if not 0 <= self.key < self.maze.width * self.maze.height:
            return f"Cell(key={self.key})"
        x, y = self.position
        return f"Cell({x}, {y})"

    @property
    def position(self) -> Tuple[int, int]:
        return self.maze.key_to_position(self.key)

    @property
    def x(self) -> int:
        return self.position[0]

    @property
    def y(self) -> int:
        return self.position[1]

    def has_wall(self, direction: int) -> bool:
        return self.maze.has_wall_at(self.key, direction)

    def set_wall(self, direction: int, state: bool):
        self.maze.set_wall_at(self.key, direction, state)

    def clear_wall(self, direction: int):
        self.maze.set_wall_at(self.key, direction, False)

    def is_inactive(self) -> bool:
        """True when untouched by carving, i.e. walled on all four sides."""
        for direction in Maze.DIRECTIONS:
            if not self.maze.has_wall_at(self.key, direction):
                return False
        return True

    def open_directions(self) -> Iterator[int]:
        for direction in Maze.DIRECTIONS:
            if not self.maze.has_wall_at(self.key, direction):
                yield direction

    def try_move(self, direction: int) -> Optional["Cell"]:
        key = self.maze.try_relative_key(self.key, direction)
        if key is None:
            return None
        return Cell(self.maze, key)

    def move(self, direction: int) -> "Cell":
        cell = self.try_move(direction)
        if cell is None:
            raise ValueError(f"No cell to the {Maze.NAMES[direction]} of {self!r}")
        return cell

    def try_get_adjacent_direction(self, other: "Cell") -> Optional[int]:
        if self.maze is not other.maze:
            raise ValueError("Cells belong to different mazes")
        return self.maze.try_get_adjacent_direction(self.key, other.key)

    def set_mutual_wall(self, other: "Cell", state: bool):
        direction = self.try_get_adjacent_direction(other)
        if direction is None:
            raise ValueError(f"{self!r} and {other!r} are not adjacent")
        self.set_wall(direction, state)

    def clear_mutual_wall(self, other: "Cell"):
        self.set_mutual_wall(other, False)
