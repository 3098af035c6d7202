import logging
import random
from typing import Callable, Dict, Iterable, List, Optional
from fractal_maze.core.maze import Maze
from fractal_maze.core.complexity import MazeStats
from fractal_maze.algo.expander import MazeExpander
from fractal_maze.algo.labyrinth import LabyrinthConverter
from fractal_maze.algo.trimmer import MazeTrimmer
from fractal_maze.algo.solvers import BFS
from fractal_maze.io.serializer import MazeSerializer

logger = logging.getLogger(__name__)

class InterpreterError(ValueError):
    pass


class MazeInterpreter:
    """
    Runs a postfix token program against a current maze.

    Command tokens act on the current maze and pop their operands from the
    stack; every other token is pushed. For example
    ``seed 3 gen 2 gen out.png 4 render`` seeds a labyrinth, expands it twice
    and renders it at 4 pixels per cell.
    """

    def __init__(self, seed: Optional[int] = None):
        self.stack: List[str] = []
        self.maze: Optional[Maze] = None
        self.rng = random.Random(seed)
        self.commands: Dict[str, Callable[[], None]] = {
            "seed": self.seed,
            "lab": self.lab,
            "gen": self.gen,
            "watch": self.watch,
            "trim": self.trim,
            "render": self.render,
            "save": self.save,
            "load": self.load,
            "stats": self.stats,
            "solve": self.solve,
            "view": self.view,
        }

    def execute(self, tokens: Iterable[str]) -> Optional[Maze]:
        for token in tokens:
            action = self.commands.get(token)
            if action is None:
                self.stack.append(token)
            else:
                logger.debug(f"Running '{token}' (stack: {self.stack})")
                action()
        return self.maze

    # --- Operands ---

    def pop(self, command: str) -> str:
        if not self.stack:
            raise InterpreterError(f"'{command}' is missing an operand")
        return self.stack.pop()

    def pop_int(self, command: str) -> int:
        token = self.pop(command)
        try:
            return int(token)
        except ValueError:
            raise InterpreterError(f"'{command}' expects an integer, got '{token}'") from None

    def current(self, command: str) -> Maze:
        if self.maze is None:
            raise InterpreterError(f"'{command}' needs a maze; start with 'seed' or 'load'")
        return self.maze

    # --- Commands ---

    def seed(self):
        self.maze = LabyrinthConverter.convert(Maze(1, 1))

    def lab(self):
        self.maze = LabyrinthConverter.convert(self.current("lab"))

    def gen(self):
        factor = self.pop_int("gen")
        self.maze = MazeExpander.expand(self.current("gen"), factor, rng=self.rng)

    def watch(self):
        """Like 'gen', but shows the expansion live in the viewer."""
        from fractal_maze.viz.renderer import Renderer
        factor = self.pop_int("watch")
        expander = MazeExpander(self.current("watch"), factor, rng=self.rng)
        renderer = Renderer(expander.maze, generator=expander)
        renderer.init_window()
        renderer.run_loop()
        renderer.finish()
        self.maze = expander.maze

    def trim(self):
        self.maze = MazeTrimmer.trim(self.current("trim"))

    def render(self):
        from fractal_maze.viz.image import render_png
        scale = self.pop_int("render")
        filename = self.pop("render")
        render_png(self.current("render"), scale, filename)

    def save(self):
        filename = self.pop("save")
        MazeSerializer.save(self.current("save"), filename)
        logger.info(f"Saved maze to {filename}")

    def load(self):
        filename = self.pop("load")
        self.maze = MazeSerializer.load(filename)
        logger.info(f"Loaded {self.maze.width}x{self.maze.height} maze from {filename}")

    def stats(self):
        logger.info(f"Stats: {MazeStats.calculate(self.current('stats'))}")

    def solve(self):
        path = BFS.solve(self.current("solve"))
        if path:
            logger.info(f"Solution length: {len(path)}")
        else:
            logger.info("No solution: start and end are not connected")

    def view(self):
        from fractal_maze.viz.renderer import Renderer
        renderer = Renderer(self.current("view"))
        renderer.init_window()
        renderer.run_loop()
