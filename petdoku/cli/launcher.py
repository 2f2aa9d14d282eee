"""Launch the petdoku game from the command line."""
import argparse
import asyncio
import os
import sys
from typing import Optional

from petdoku.common.config import Config, load_config
from petdoku.common.constants import MoveResult
from petdoku.engine.clock import GameClock
from petdoku.engine.game import SudokuGame
from petdoku.engine.generator import SudokuGenerator
from petdoku.engine.render import render_board, render_legend
from petdoku.utils.log import get_logger

logger = get_logger(__name__)

PLAY_HELP = """Commands:
  s <symbol>       select a pet (1-9)
  c <row> <col>    click a cell (rows and columns 1-9)
  n [fill]         start a new game, optionally with a new fill percentage
  h                show this help and the pet legend
  q                quit"""


def _build_config(args: argparse.Namespace) -> Config:
    config = load_config(args.config) if getattr(args, "config", None) else Config()
    if getattr(args, "fill", None) is not None:
        config.game.fill_percentage = args.fill
    if getattr(args, "seed", None) is not None:
        config.game.seed = args.seed
    if getattr(args, "port", None) is not None:
        config.service.port = args.port
    config.check_and_update()
    os.environ.update(config.get_envs())
    get_logger(level=config.log.level)
    return config


def generate(args: argparse.Namespace) -> None:
    config = _build_config(args)
    generator = SudokuGenerator(
        seed=config.game.seed, max_attempts=config.game.max_generate_attempts
    )
    puzzle, solution = generator.generate(
        config.game.fill_percentage, deriver=config.game.deriver_type
    )
    icons = not args.digits
    print("Puzzle:")
    print(render_board(puzzle, icons=icons))
    print("\nSolution:")
    print(render_board(solution, icons=icons))


def _handle_command(game: SudokuGame, line: str, icons: bool) -> Optional[str]:
    """Apply one command line to the game and return the message to print.

    Returns None when the player asked to quit.
    """
    parts = line.split()
    if not parts:
        return ""
    cmd, args = parts[0].lower(), parts[1:]
    try:
        if cmd == "q":
            return None
        if cmd == "h":
            return PLAY_HELP + "\n\n" + render_legend(icons)
        if cmd == "s" and len(args) == 1:
            if not game.select_symbol(int(args[0])):
                return "The game is over, start a new one with `n`."
            return f"Selected {args[0]}."
        if cmd == "c" and len(args) == 2:
            result = game.interact_cell(int(args[0]) - 1, int(args[1]) - 1)
            if result == MoveResult.IGNORED:
                return "Select a pet first." if not game.is_won else "The game is over."
            if result == MoveResult.REJECTED:
                return "That pet does not fit there."
            if game.is_won:
                return f"Congratulations! You won in {game.elapsed}!"
            return ""
        if cmd == "n" and len(args) <= 1:
            game.start_new_game(int(args[0]) if args else None)
            return "New game."
    except ValueError as e:
        return f"Invalid input: {e}"
    return "Unknown command, type `h` for help."


async def _play_loop(game: SudokuGame, clock: GameClock, icons: bool) -> None:
    print(PLAY_HELP)
    try:
        while True:
            print()
            print(render_board(game.board, icons=icons))
            selected = game.selected_symbol if game.selected_symbol is not None else "-"
            print(f"Time: {game.elapsed}  Selected: {selected}")
            try:
                line = await asyncio.to_thread(input, "> ")
            except EOFError:
                break
            message = _handle_command(game, line, icons)
            clock.sync()
            if message is None:
                break
            if message:
                print(message)
    finally:
        await clock.stop()


def play(args: argparse.Namespace) -> None:
    config = _build_config(args)
    game = SudokuGame.from_config(config.game)
    clock = GameClock(game, tick_interval=config.clock.tick_interval)
    asyncio.run(_play_loop(game, clock, icons=not args.digits))


def serve(args: argparse.Namespace) -> None:
    from petdoku.service.service import GameService

    config = _build_config(args)
    service = GameService(config)
    try:
        asyncio.run(service.serve())
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down.")


def main(argv=None) -> None:
    """The main entrypoint."""
    parser = argparse.ArgumentParser(prog="petdoku", description="Sudoku with pets.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser("generate", help="Print a puzzle and its solution.")
    generate_parser.add_argument("--config", type=str, default=None, help="Path to the config file.")
    generate_parser.add_argument("--fill", type=int, default=None, help="Fill percentage, 0-100.")
    generate_parser.add_argument("--seed", type=int, default=None, help="Random seed.")
    generate_parser.add_argument("--digits", action="store_true", help="Print digits, not pets.")
    generate_parser.set_defaults(func=generate)

    play_parser = subparsers.add_parser("play", help="Play in the terminal.")
    play_parser.add_argument("--config", type=str, default=None, help="Path to the config file.")
    play_parser.add_argument("--fill", type=int, default=None, help="Fill percentage, 0-100.")
    play_parser.add_argument("--seed", type=int, default=None, help="Random seed.")
    play_parser.add_argument("--digits", action="store_true", help="Show digits, not pets.")
    play_parser.set_defaults(func=play)

    serve_parser = subparsers.add_parser("serve", help="Serve the game over HTTP.")
    serve_parser.add_argument("--config", type=str, default=None, help="Path to the config file.")
    serve_parser.add_argument("--fill", type=int, default=None, help="Fill percentage, 0-100.")
    serve_parser.add_argument("--seed", type=int, default=None, help="Random seed.")
    serve_parser.add_argument("--port", type=int, default=None, help="Port to listen on.")
    serve_parser.set_defaults(func=serve)

    args = parser.parse_args(argv)
    try:
        args.func(args)
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
