"""CLI entrypoint for the backtracking Sudoku solver."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict

from sudoku.core.constants import CandidateOrder, SolveStatus
from sudoku.core.exceptions import CheckpointError, PuzzleFormatError
from sudoku.engine.search import SearchConfig, SearchEngine
from sudoku.engine.validator import BoardValidator
from sudoku.io.checkpoint import load_checkpoint, save_checkpoint
from sudoku.io.literal import CLASSIC_PUZZLE, load_puzzle, parse_puzzle
from sudoku.utils.logger import LEVEL_NAMES, configure_logging, get_logger
from sudoku.utils.pretty import TerminalPresenter, pretty_print_board, print_solve_stats


LOGGER = get_logger("sudoku.cli")

EXIT_NO_SOLUTION = 1
EXIT_PAUSED = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Solve a 9x9 Sudoku by exhaustive backtracking search",
    )
    parser.add_argument(
        "puzzle_file",
        nargs="?",
        type=Path,
        help="File with 81 whitespace-separated digits (0 = empty). Defaults to a classic puzzle",
    )
    parser.add_argument("--puzzle", type=str, help="Puzzle literal given inline")
    parser.add_argument(
        "--order",
        type=str,
        choices=[order.value for order in CandidateOrder],
        default=CandidateOrder.DESCENDING.value,
        help="Order in which candidate digits are tried",
    )
    parser.add_argument(
        "--animate",
        action="store_true",
        help="Redraw the board in the terminal after every search step",
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=0.01,
        help="Seconds to pause between animation frames (default 0.01)",
    )
    parser.add_argument("--stats", action="store_true", help="Print search statistics")
    parser.add_argument(
        "--max-steps",
        type=int,
        help="Pause the search after this many steps",
    )
    parser.add_argument(
        "--checkpoint",
        type=Path,
        metavar="FILE",
        help="Where to save the search state when it pauses",
    )
    parser.add_argument(
        "--resume",
        type=Path,
        metavar="FILE",
        help="Resume a search from a checkpoint file",
    )
    parser.add_argument("--output", type=Path, help="Optional path to JSON output")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LEVEL_NAMES,
        default="WARNING",
        help="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if args.puzzle_file and args.puzzle:
        parser.error("give either a puzzle file or --puzzle, not both")
    if args.resume and (args.puzzle_file or args.puzzle):
        parser.error("--resume cannot be combined with a puzzle")
    if args.max_steps is not None and args.max_steps < 0:
        parser.error("--max-steps must be non-negative")

    presenter = TerminalPresenter(delay_seconds=args.delay) if args.animate else None
    config = SearchConfig(
        candidate_order=CandidateOrder(args.order),
        max_steps=args.max_steps,
    )

    try:
        if args.resume:
            engine = load_checkpoint(args.resume, config=config, observer=presenter)
        else:
            if args.puzzle_file:
                board = load_puzzle(args.puzzle_file)
            else:
                board = parse_puzzle(args.puzzle or CLASSIC_PUZZLE)
            engine = SearchEngine(board, config=config, observer=presenter)
    except (PuzzleFormatError, CheckpointError) as exc:
        parser.error(str(exc))

    result = engine.run()

    if result.status == SolveStatus.PAUSED:
        if args.checkpoint:
            save_checkpoint(engine, args.checkpoint)
        else:
            LOGGER.warning("Search paused at depth %d; pass --checkpoint to keep it", engine.depth)
        if args.stats:
            print_solve_stats(result)
        return EXIT_PAUSED

    if not result.solved:
        LOGGER.warning("Puzzle has no solution")
        if args.stats:
            print_solve_stats(result)
        return EXIT_NO_SOLUTION

    validation = BoardValidator().validate(result.board)
    for message in validation.messages:
        LOGGER.warning("Solution check: %s", message)

    if presenter is not None:
        presenter.render(result.board)
    else:
        pretty_print_board(result.board)
    if args.stats:
        print_solve_stats(result)

    if args.output:
        payload: Dict[str, Any] = {
            "status": result.status.value,
            "solution": result.board.to_jsonable(),
            "valid": validation.ok,
            "stats": result.stats.__dict__,
        }
        args.output.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
