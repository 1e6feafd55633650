#!/usr/bin/env python3
"""
Minesweeper - Main entry point.

Usage:
    python main.py play [--height H] [--width W] [--mines N] [--emoji]
    python main.py random [--games N] [--max-steps S]
"""
import argparse
import logging
import sys
from typing import Dict, List, Optional

from minesweeper import (
    ASCII,
    EMOJI,
    GameOptions,
    MarkStyle,
    MineSweeper,
    MineSweeperEnv,
    MineSweeperError,
    render_game,
)

logger = logging.getLogger(__name__)

HELP_TEXT = """Commands:
  s X Y   sweep a block
  f X Y   mark a block as mine
  q X Y   mark a block as questioned
  u X Y   remove a mark
  e X Y   explore around a revealed count
  r       restart
  exit    leave the game"""

MARK_COMMANDS: Dict[str, MarkStyle] = {
    "f": MarkStyle.MINE,
    "q": MarkStyle.QUESTION,
    "u": MarkStyle.UNMARKED,
}


def _options_from_args(args: argparse.Namespace) -> GameOptions:
    """Build game options from command line arguments."""
    return GameOptions(
        height=args.height,
        width=args.width,
        mine_quantity=args.mines,
        show_mines_only_on_failed=args.show_mines_only,
    )


def run_command(game: MineSweeper, words: List[str]) -> Optional[str]:
    """
    Apply one interactive command to a game.

    Args:
        game: Game to act on.
        words: Command split into words, e.g. ["s", "3", "4"].

    Returns:
        Error message for an unusable command, None otherwise.
    """
    if not words:
        return None
    command = words[0].lower()

    if command == "r":
        game.restart()
        return None

    if command not in MARK_COMMANDS and command not in ("s", "e"):
        return f"Unknown command: {command}"
    if len(words) != 3:
        return f"Usage: {command} X Y"
    try:
        x, y = int(words[1]), int(words[2])
    except ValueError:
        return f"Coordinates must be integers: {words[1]} {words[2]}"

    if command == "s":
        game.sweep(x, y)
    elif command == "e":
        game.explore(x, y)
    elif not game.mark(x, y, MARK_COMMANDS[command]):
        return f"Cannot mark ({x}, {y})"
    return None


def play(args: argparse.Namespace) -> None:
    """Play interactively on the terminal."""
    game = MineSweeper(_options_from_args(args))
    symbols = EMOJI if args.emoji else ASCII

    print(HELP_TEXT)
    print(render_game(game, symbols))

    while True:
        try:
            line = input("> ")
        except EOFError:
            break
        words = line.split()
        if words and words[0].lower() == "exit":
            break

        error = run_command(game, words)
        if error:
            print(error)
            continue
        print(render_game(game, symbols))


def play_random(args: argparse.Namespace) -> None:
    """Play games with random valid actions and print statistics."""
    env = MineSweeperEnv(options=_options_from_args(args))
    wins = 0
    total_steps = 0

    for episode in range(args.games):
        env.reset(seed=None if args.seed is None else args.seed + episode)
        done = False
        steps = 0

        while not done and steps < args.max_steps:
            mask = env.get_action_mask().astype("int8")
            action = env.action_space.sample(mask=mask)
            _, _, terminated, truncated, _ = env.step(action)
            done = terminated or truncated
            steps += 1

        total_steps += steps
        if env.game.is_won:
            wins += 1
        logger.debug("Episode %d finished: %s after %d steps",
                     episode + 1, env.game.get_status().name, steps)

    print(f"Games played: {args.games}")
    print(f"  Win rate: {wins / args.games:.1%}")
    print(f"  Avg steps: {total_steps / args.games:.1f}")


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="Minesweeper - play on the terminal or watch random play"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--height", type=int, default=10, help="Number of rows")
    common.add_argument("--width", type=int, default=10, help="Number of columns")
    common.add_argument("--mines", type=int, default=9, help="Number of mines")
    common.add_argument(
        "--show-mines-only",
        action="store_true",
        help="On a loss, show only the mines",
    )

    # Play command
    play_parser = subparsers.add_parser(
        "play", parents=[common], help="Play interactively"
    )
    play_parser.add_argument(
        "--emoji", action="store_true", help="Render with emoji symbols"
    )

    # Random command
    random_parser = subparsers.add_parser(
        "random", parents=[common], help="Play random games"
    )
    random_parser.add_argument(
        "--games", type=int, default=100, help="Number of games to play"
    )
    random_parser.add_argument(
        "--max-steps", type=int, default=500, help="Step limit per game"
    )
    random_parser.add_argument(
        "--seed", type=int, default=None, help="Seed of the first game"
    )

    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        if args.command == "play":
            play(args)
        elif args.command == "random":
            play_random(args)
        else:
            parser.print_help()
    except MineSweeperError as error:
        print(f"Error: {error}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
