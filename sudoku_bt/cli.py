from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .config import Settings, resolve_settings
from .engine import BacktrackingSolver
from .errors import SudokuError
from .grid_io import format_grid, format_grids, load_grid, save_grids
from .rules import validate_grid
from .shaker import generate

log = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_USAGE = 1
EXIT_SUDOKU = 2
EXIT_IO = 3

DEMO_RETAINED = 20


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sudoku-bt",
        description=(
            "Generate and solve Sudoku grids. Grid files hold space separated "
            "digits, one row per line, 0 for empty cells. Without a command, "
            f"generates a {DEMO_RETAINED}-clue puzzle and solves it."
        ),
    )
    parser.add_argument("--verbose", action="store_true", help="Be verbose")
    parser.add_argument(
        "--size", type=int, default=settings.default_size,
        help="Block edge N; the grid is N*N by N*N (default: %(default)s)")
    subparsers = parser.add_subparsers(dest="command", help="Append --help for more help")

    p_gen = subparsers.add_parser("generate", help="Generate a new puzzle")
    p_gen.add_argument("retained", type=int, help="Number of filled cells to keep")
    p_gen.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    p_gen.add_argument(
        "--output", default=settings.grid_path,
        help="Where to write the puzzle (default: %(default)s)")
    p_gen.add_argument("--show-solution", action="store_true", help="Also print the full grid")

    p_solve = subparsers.add_parser("solve", help="Solve a grid file")
    p_solve.add_argument(
        "--input", default=settings.grid_path,
        help="Grid file to read (default: %(default)s)")
    p_solve.add_argument(
        "--output", default=settings.solutions_path,
        help="Where to write the solutions (default: %(default)s)")
    p_solve.add_argument(
        "--max-solutions", type=int, default=settings.default_bound,
        help="Stop after this many solutions (default: %(default)s)")

    p_check = subparsers.add_parser("check", help="Check a grid file against the rules")
    p_check.add_argument(
        "--input", default=settings.grid_path,
        help="Grid file to read (default: %(default)s)")

    return parser


def _cmd_demo(args: argparse.Namespace) -> int:
    puzzle = generate(args.size, DEMO_RETAINED).puzzle
    print(format_grid(puzzle, args.size))
    print()
    solutions = BacktrackingSolver(puzzle, args.size).solve()
    print(format_grids(solutions, args.size))
    return EXIT_SUCCESS


def _cmd_generate(args: argparse.Namespace) -> int:
    result = generate(args.size, args.retained, seed=args.seed)
    print(format_grid(result.puzzle, args.size))
    if args.show_solution:
        print()
        print(format_grid(result.solution, args.size))
    log.info("Writing puzzle to %s", args.output)
    save_grids([result.puzzle], args.output, args.size)
    return EXIT_SUCCESS


def _cmd_solve(args: argparse.Namespace) -> int:
    log.info("Reading %s", args.input)
    grid = load_grid(args.input, args.size)
    solver = BacktrackingSolver(grid, args.size, args.max_solutions)
    solutions = solver.solve()
    if solutions is None:
        log.error("The grid submitted admits no solutions.")
        return EXIT_SUDOKU
    log.info("Found %d solution(s)", len(solutions))
    print(format_grids(solutions, args.size))
    log.info("Writing solutions to %s", args.output)
    save_grids(solutions, args.output, args.size)
    return EXIT_SUCCESS


def _cmd_check(args: argparse.Namespace) -> int:
    grid = load_grid(args.input, args.size)
    ok, msg = validate_grid(grid, args.size)
    print(msg)
    return EXIT_SUCCESS if ok else EXIT_SUDOKU


COMMANDS = {
    None: _cmd_demo,
    "generate": _cmd_generate,
    "solve": _cmd_solve,
    "check": _cmd_check,
}


def main(argv: Optional[List[str]] = None) -> int:
    settings = resolve_settings()
    parser = build_parser(settings)
    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        return EXIT_SUCCESS if e.code == 0 else EXIT_USAGE

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        return COMMANDS[args.command](args)
    except OSError as e:
        log.error("File error: %s", e)
        return EXIT_IO
    except SudokuError as e:
        log.error("%s", e)
        return EXIT_SUDOKU


if __name__ == "__main__":
    sys.exit(main())
