import logging
import cv2
import numpy as np
from fractal_maze.core.maze import Maze

logger = logging.getLogger(__name__)

COLOR_BG = (0, 0, 0)
COLOR_OPEN = (255, 255, 255)
COLOR_START = (0, 128, 0)
COLOR_END = (255, 0, 0)

def wall_thickness(scale: int) -> int:
    return (scale + 3) // 4

def image_size(maze: Maze, scale: int):
    """(width, height) in pixels."""
    walls = wall_thickness(scale)
    total = scale + walls
    return maze.width * total + walls, maze.height * total + walls

def rasterize(maze: Maze, scale: int) -> np.ndarray:
    """
    RGB image of the maze. Each cell is a scale x scale square separated by
    wall bands of ceil(scale / 4) pixels; an open NORTH or WEST side paints
    the band between the two cells in the cell's colour.
    """
    if scale < 1:
        raise ValueError(f"Scale must be at least 1, got {scale}")
    walls = wall_thickness(scale)
    total = scale + walls
    img_w, img_h = image_size(maze, scale)

    pixels = np.zeros((img_h, img_w, 3), dtype=np.uint8)
    pixels[:, :] = COLOR_BG

    for cell in maze.cells():
        if cell.key == maze.end_key:
            color = COLOR_END
        elif cell.key == maze.start_key:
            color = COLOR_START
        elif cell.is_inactive():
            continue
        else:
            color = COLOR_OPEN

        x, y = cell.position
        px = x * total + walls
        py = y * total + walls
        pixels[py:py + scale, px:px + scale] = color
        if not cell.has_wall(Maze.NORTH):
            pixels[py - walls:py, px:px + scale] = color
        if not cell.has_wall(Maze.WEST):
            pixels[py:py + scale, px - walls:px] = color

    return pixels

def render_png(maze: Maze, scale: int, filename: str):
    logger.info(f"Writing {filename}")
    pixels = rasterize(maze, scale)
    # OpenCV expects BGR
    if not cv2.imwrite(filename, cv2.cvtColor(pixels, cv2.COLOR_RGB2BGR)):
        raise OSError(f"Could not write image {filename}")
