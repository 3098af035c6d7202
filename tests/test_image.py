import unittest
import sys
import os
import shutil
import tempfile
import cv2
import numpy as np

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from fractal_maze.core.maze import Maze
from fractal_maze.algo.labyrinth import LabyrinthConverter
from fractal_maze.viz import image
from fractal_maze.viz.image import rasterize, render_png, image_size

class TestRasterize(unittest.TestCase):
    def test_size(self):
        # T = ceil(S / 4); size = W*(S+T)+T by H*(S+T)+T
        maze = Maze(3, 2)
        self.assertEqual(image_size(maze, 4), (3 * 5 + 1, 2 * 5 + 1))
        self.assertEqual(image_size(maze, 5), (3 * 7 + 2, 2 * 7 + 2))
        self.assertEqual(rasterize(maze, 5).shape, (2 * 7 + 2, 3 * 7 + 2, 3))

    def test_labyrinth_seed(self):
        maze = LabyrinthConverter.convert(Maze(1, 1))
        pixels = rasterize(maze, 4)
        self.assertEqual(pixels.shape, (11, 11, 3))
        self.assertEqual(pixels.dtype, np.uint8)

        # Start (0,0) and end (1,0)
        self.assertTrue((pixels[1:5, 1:5] == image.COLOR_START).all())
        self.assertTrue((pixels[1:5, 6:10] == image.COLOR_END).all())
        # Wall between start and end stays background
        self.assertTrue((pixels[1:5, 5] == image.COLOR_BG).all())
        # (0,1) is open to the north: the band above it takes its colour
        self.assertTrue((pixels[5, 1:5] == image.COLOR_OPEN).all())
        self.assertTrue((pixels[6:10, 1:5] == image.COLOR_OPEN).all())
        # Outer frame
        self.assertTrue((pixels[0, :] == image.COLOR_BG).all())
        self.assertTrue((pixels[:, 10] == image.COLOR_BG).all())

    def test_inactive_cells_stay_dark(self):
        maze = Maze(2, 1)
        pixels = rasterize(maze, 4)
        # Start and end share cell 0; end colour wins
        self.assertTrue((pixels[1:5, 1:5] == image.COLOR_END).all())
        self.assertTrue((pixels[1:5, 6:10] == image.COLOR_BG).all())

    def test_invalid_scale(self):
        with self.assertRaises(ValueError):
            rasterize(Maze(1, 1), 0)

class TestRenderPng(unittest.TestCase):
    def setUp(self):
        self.out_dir = tempfile.mkdtemp(prefix="fractal_maze_")

    def tearDown(self):
        shutil.rmtree(self.out_dir, ignore_errors=True)

    def test_writes_png(self):
        maze = LabyrinthConverter.convert(Maze(1, 1))
        path = os.path.join(self.out_dir, "seed.png")
        render_png(maze, 4, path)

        self.assertTrue(os.path.exists(path))
        img = cv2.imread(path)
        self.assertEqual(img.shape, (11, 11, 3))
        # Read back as BGR
        self.assertEqual(tuple(int(v) for v in img[2, 7]), tuple(reversed(image.COLOR_END)))
        self.assertEqual(tuple(int(v) for v in img[2, 2]), tuple(reversed(image.COLOR_START)))

class TestViewer(unittest.TestCase):
    def test_fit_to_screen(self):
        from fractal_maze.viz.renderer import Renderer
        renderer = Renderer(Maze(10, 5), width=240, height=200)
        renderer.fit_to_screen()
        # min((240 - 80) / 10, (200 - 80) / 5)
        self.assertAlmostEqual(renderer.cell_size, 16.0)
        self.assertAlmostEqual(renderer.offset_x, 40.0)
        self.assertAlmostEqual(renderer.offset_y, 60.0)
        self.assertEqual(renderer.screen_to_world(*renderer.world_to_screen(3, 2)), (3, 2))
        self.assertEqual(renderer.visible_range(), (0, 0, 10, 5))

    def test_finish_runs_generator(self):
        from fractal_maze.viz.renderer import Renderer
        from fractal_maze.algo.expander import MazeExpander
        from fractal_maze.core.complexity import MazeStats
        expander = MazeExpander(LabyrinthConverter.convert(Maze(1, 1)), 2, seed=0)
        renderer = Renderer(Maze(1, 1), generator=expander)
        self.assertIs(renderer.maze, expander.maze)
        renderer.finish()
        self.assertEqual(renderer.status, "Done")
        self.assertTrue(MazeStats.is_perfect(expander.maze))

if __name__ == '__main__':
    unittest.main()
