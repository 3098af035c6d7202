import io
import struct
import sys
from array import array
from typing import BinaryIO
from fractal_maze.core.bitlist import BitList
from fractal_maze.core.maze import Maze

class MazeSerializer:
    """
    Binary maze record, little-endian:
    - WIDTH (int32)
    - HEIGHT (int32)
    - START_KEY (int64)
    - END_KEY (int64)
    - NORTH WALLS (bit record)
    - WEST WALLS (bit record)

    Bit record: COUNT (int64) followed by ceil(COUNT / 64) uint64 words,
    bit i stored in word i // 64.
    """
    HEADER = struct.Struct("<iiqq")
    COUNT = struct.Struct("<q")

    @staticmethod
    def _read_exact(stream: BinaryIO, size: int) -> bytes:
        data = stream.read(size)
        if len(data) != size:
            raise ValueError(f"Truncated maze stream: expected {size} bytes, got {len(data)}")
        return data

    @staticmethod
    def write_bits(stream: BinaryIO, bits: BitList):
        stream.write(MazeSerializer.COUNT.pack(len(bits)))
        words = bits.words
        if sys.byteorder != "little":
            words.byteswap()
        stream.write(words.tobytes())

    @staticmethod
    def read_bits(stream: BinaryIO) -> BitList:
        count, = MazeSerializer.COUNT.unpack(MazeSerializer._read_exact(stream, MazeSerializer.COUNT.size))
        if count < 0:
            raise ValueError(f"Invalid bit count {count}")
        n_words = (count + 63) // 64
        words = array('Q')
        words.frombytes(MazeSerializer._read_exact(stream, n_words * 8))
        if sys.byteorder != "little":
            words.byteswap()
        return BitList.from_words(count, words)

    @staticmethod
    def write(maze: Maze, stream: BinaryIO):
        stream.write(MazeSerializer.HEADER.pack(maze.width, maze.height, maze.start_key, maze.end_key))
        MazeSerializer.write_bits(stream, maze.north_walls)
        MazeSerializer.write_bits(stream, maze.west_walls)

    @staticmethod
    def read(stream: BinaryIO) -> Maze:
        header = MazeSerializer._read_exact(stream, MazeSerializer.HEADER.size)
        width, height, start_key, end_key = MazeSerializer.HEADER.unpack(header)
        if width < 0 or height < 0:
            raise ValueError(f"Invalid maze dimensions {width}x{height}")
        north_walls = MazeSerializer.read_bits(stream)
        west_walls = MazeSerializer.read_bits(stream)
        return Maze.from_parts(width, height, north_walls, west_walls, start_key, end_key)

    @staticmethod
    def to_bytes(maze: Maze) -> bytes:
        buf = io.BytesIO()
        MazeSerializer.write(maze, buf)
        return buf.getvalue()

    @staticmethod
    def from_bytes(data: bytes) -> Maze:
        return MazeSerializer.read(io.BytesIO(data))

    @staticmethod
    def save(maze: Maze, filepath: str):
        with open(filepath, "wb") as f:
            MazeSerializer.write(maze, f)

    @staticmethod
    def load(filepath: str) -> Maze:
        with open(filepath, "rb") as f:
            return MazeSerializer.read(f)
