import unittest
import sys
import os
import shutil
import tempfile

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from fractal_maze.core.complexity import MazeStats
from fractal_maze.io.serializer import MazeSerializer
from fractal_maze.interpreter import MazeInterpreter, InterpreterError
from fractal_maze import main as cli

class TestInterpreter(unittest.TestCase):
    def setUp(self):
        self.out_dir = tempfile.mkdtemp(prefix="fractal_maze_")

    def tearDown(self):
        shutil.rmtree(self.out_dir, ignore_errors=True)

    def test_seed(self):
        maze = MazeInterpreter().execute(["seed"])
        self.assertEqual((maze.width, maze.height), (2, 2))
        self.assertEqual(maze.end, maze[1, 0])

    def test_gen_and_lab(self):
        maze = MazeInterpreter(seed=1).execute(["seed", "3", "gen", "lab", "2", "gen"])
        self.assertEqual((maze.width, maze.height), (24, 24))
        self.assertTrue(MazeStats.is_perfect(maze))

    def test_trim(self):
        interp = MazeInterpreter(seed=4)
        interp.execute(["seed", "3", "gen"])
        full = interp.maze
        trimmed = interp.execute(["trim"])
        self.assertLess(MazeStats.count_passages(trimmed), MazeStats.count_passages(full))
        self.assertFalse(trimmed.start.is_inactive())

    def test_deterministic_with_seed(self):
        tokens = ["seed", "3", "gen", "2", "gen"]
        self.assertEqual(MazeInterpreter(seed=7).execute(tokens), MazeInterpreter(seed=7).execute(tokens))

    def test_operands_are_pushed(self):
        interp = MazeInterpreter()
        interp.execute(["a", "b"])
        self.assertEqual(interp.stack, ["a", "b"])
        self.assertIsNone(interp.maze)

    def test_save_load_render(self):
        maze_path = os.path.join(self.out_dir, "m.maze")
        png_path = os.path.join(self.out_dir, "m.png")
        saved = MazeInterpreter(seed=2).execute(["seed", "2", "gen", maze_path, "save", png_path, "3", "render"])

        self.assertTrue(os.path.exists(png_path))
        self.assertEqual(MazeSerializer.load(maze_path), saved)
        loaded = MazeInterpreter().execute([maze_path, "load"])
        self.assertEqual(loaded, saved)

    def test_errors(self):
        with self.assertRaises(InterpreterError):
            MazeInterpreter().execute(["seed", "gen"])
        with self.assertRaises(InterpreterError):
            MazeInterpreter().execute(["lab"])
        with self.assertRaises(InterpreterError):
            MazeInterpreter().execute(["seed", "x", "gen"])
        self.assertTrue(issubclass(InterpreterError, ValueError))

class TestMain(unittest.TestCase):
    def setUp(self):
        self.out_dir = tempfile.mkdtemp(prefix="fractal_maze_")

    def tearDown(self):
        shutil.rmtree(self.out_dir, ignore_errors=True)

    def test_run_tokens(self):
        path = os.path.join(self.out_dir, "out.maze")
        self.assertEqual(cli.main(["--seed", "1", "seed", "2", "gen", "stats", "solve", path, "save"]), 0)
        maze = MazeSerializer.load(path)
        self.assertEqual((maze.width, maze.height), (4, 4))

    def test_failure_exit_code(self):
        self.assertEqual(cli.main(["gen"]), 1)

    def test_no_tokens_prints_help(self):
        self.assertEqual(cli.main([]), 0)

if __name__ == '__main__':
    unittest.main()
