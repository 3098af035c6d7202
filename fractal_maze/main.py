import argparse
import sys
import os
import time
import logging

# Ensure project root is in path so we can import 'fractal_maze' package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

COMMAND_HELP = """commands:
  seed              start from a 2x2 labyrinth
  lab               convert the maze to a labyrinth (doubles each axis)
  FACTOR gen        expand the maze by FACTOR
  FACTOR watch      expand the maze by FACTOR in the viewer
  trim              keep only the path between start and end
  FILE SCALE render write a PNG with SCALE pixels per cell
  FILE save         write the maze to FILE
  FILE load         read the maze from FILE
  stats             log maze statistics
  solve             log the start-to-end path length
  view              open the maze in the viewer

example: seed 5 gen 3 gen maze.png 4 render trim solution.png 4 render
"""

def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Fractal Maze: self-similar perfect maze generator",
        epilog=COMMAND_HELP,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    parser.add_argument("--seed", type=int, default=None, help="Random Seed")
    parser.add_argument("tokens", nargs="*", help="Program tokens (see commands below)")
    return parser

def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    logger = logging.getLogger("fractal_maze")

    if not args.tokens:
        parser.print_help()
        return 0

    from fractal_maze.interpreter import MazeInterpreter
    from fractal_maze.algo.expander import ExpansionError

    interpreter = MazeInterpreter(seed=args.seed)
    t0 = time.time()
    try:
        interpreter.execute(args.tokens)
    except (ValueError, IndexError, ExpansionError, OSError) as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1
    logger.info(f"Time: {(time.time() - t0) * 1000:.0f} ms")
    return 0

if __name__ == "__main__":
    sys.exit(main())
