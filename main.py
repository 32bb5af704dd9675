#!/usr/bin/env python3
"""
Minefield - command line entry point.

Usage:
    python main.py play [--preset beginner] [--seed N]
    python main.py demo [--games N] [--delay S]
    python main.py evaluate [--games N] [--mark-mines]
"""
import argparse
import logging
import os
import random
import time
from typing import Optional

from minefield import (
    PRESETS,
    BoardConfig,
    Button,
    FirstClick,
    Game,
    MinefieldError,
    MinesweeperEnv,
    can_restart,
    intent_for_click,
)
from sweepers import LogicAgent


PLAY_HELP = """Commands:
  o ROW COL   open (primary click: reveal, or chord on a number)
  f ROW COL   flag (secondary click: toggle mark, or chord on a number)
  r           restart (once the game is over)
  q           quit"""


def clear_screen() -> None:
    os.system('cls' if os.name == 'nt' else 'clear')


def build_config(args: argparse.Namespace) -> BoardConfig:
    """Board configuration from --preset or --width/--height/--mines."""
    if args.preset:
        return PRESETS[args.preset]
    return BoardConfig(args.width, args.height, args.mines)


def build_rng(args: argparse.Namespace) -> random.Random:
    return random.Random(args.seed) if args.seed is not None else random.Random()


def print_status(game: Game) -> None:
    snapshot = game.snapshot()
    print(f"Mines left: {snapshot.mines_remaining}   Phase: {snapshot.phase.name}\n")
    print(snapshot.render())


# ============================================================================
# Commands
# ============================================================================

def play(args: argparse.Namespace) -> None:
    """Play an interactive game in the terminal."""
    first_click = FirstClick[args.first_click.upper()]
    game = Game(build_config(args), build_rng(args), first_click)
    print(PLAY_HELP)

    while True:
        print()
        print_status(game)
        if game.is_won:
            print("\n*** WIN! ***")
        elif game.is_lost:
            print("\n*** LOST (hit mine) ***")

        try:
            line = input("> ").strip().lower()
        except EOFError:
            break
        if not line:
            continue

        command, *coords = line.split()
        if command == "q":
            break
        if command == "r":
            if can_restart(game.snapshot()):
                game.restart()
            else:
                print("Restart is only available once the game is over")
            continue
        if command not in ("o", "f") or len(coords) != 2:
            print(PLAY_HELP)
            continue

        try:
            row, col = int(coords[0]), int(coords[1])
            button = Button.PRIMARY if command == "o" else Button.SECONDARY
            intent = intent_for_click(game.snapshot(), row, col, button)
            if intent is not None:
                game.dispatch(intent, row, col)
        except (ValueError, MinefieldError) as error:
            print(f"Invalid move: {error}")


def demo(args: argparse.Namespace) -> None:
    """Watch the logic agent play."""
    config = build_config(args)
    env = MinesweeperEnv(config=config, render_mode="ansi")
    agent = LogicAgent(config.height, config.width, total_mines=config.num_mines,
                       mark_mines=args.mark_mines)

    print(f"Board: {config.width}x{config.height} with {config.num_mines} mines "
          f"({100 * config.num_mines / config.cell_count:.1f}% density)")
    time.sleep(args.delay)

    wins = 0
    for game_number in range(args.games):
        obs, _ = env.reset(seed=None if args.seed is None else args.seed + game_number)
        agent.reset()
        done = False
        step = 0

        while not done:
            action = agent.select_action(obs, env.get_action_mask())
            intent, row, col = env.decode_action(action)
            obs, _, terminated, truncated, info = env.step(action)
            done = terminated or truncated
            step += 1

            clear_screen()
            print(f"=== Game {game_number + 1}/{args.games} | Step {step} ===")
            print(f"Wins so far: {wins}")
            print(f"Last move: {intent.name.lower()} ({row}, {col})\n")
            print(env.render())

            if done:
                if info.get("game_state") == "WON":
                    wins += 1
                    print("\n*** WIN! ***")
                else:
                    print("\n*** LOST (hit mine) ***")
            time.sleep(args.delay)

    print(f"\n=== Final: {wins}/{args.games} wins ({100 * wins / args.games:.0f}%) ===")


def evaluate(args: argparse.Namespace) -> None:
    """Measure the logic agent's win rate without rendering."""
    config = build_config(args)
    env = MinesweeperEnv(config=config)
    agent = LogicAgent(config.height, config.width, total_mines=config.num_mines,
                       mark_mines=args.mark_mines)

    wins = 0
    total_steps = 0
    for game_number in range(args.games):
        obs, _ = env.reset(seed=None if args.seed is None else args.seed + game_number)
        agent.reset()
        done = False
        while not done:
            action = agent.select_action(obs, env.get_action_mask())
            obs, _, terminated, truncated, info = env.step(action)
            done = terminated or truncated
        total_steps += info["steps"]
        if info["game_state"] == "WON":
            wins += 1

    print(f"Results over {args.games} games:")
    print(f"  Win rate: {wins / args.games:.1%}")
    print(f"  Avg steps: {total_steps / args.games:.1f}")


# ============================================================================
# Argument Parsing
# ============================================================================

def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def add_board_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--width", type=int, default=9, help="Number of columns")
    parser.add_argument("--height", type=int, default=9, help="Number of rows")
    parser.add_argument("--mines", type=int, default=10, help="Number of mines")
    parser.add_argument(
        "--preset", choices=sorted(PRESETS), default=None,
        help="Use a preset board instead of --width/--height/--mines",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed mine placement")


def main(argv: Optional[list] = None) -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(description="Minefield - play or watch minesweeper")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log engine moves")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    add_board_arguments(play_parser)
    play_parser.add_argument(
        "--first-click",
        choices=[policy.name.lower() for policy in FirstClick],
        default=FirstClick.SAFE_AREA.name.lower(),
        help="Protection for the first revealed cell",
    )

    demo_parser = subparsers.add_parser("demo", help="Watch the logic agent play")
    add_board_arguments(demo_parser)
    demo_parser.add_argument("--games", type=positive_int, default=5, help="Number of games")
    demo_parser.add_argument("--delay", type=float, default=0.3, help="Delay between moves")
    demo_parser.add_argument("--mark-mines", action="store_true", help="Mark deduced mines")

    eval_parser = subparsers.add_parser("evaluate", help="Measure the logic agent")
    add_board_arguments(eval_parser)
    eval_parser.add_argument("--games", type=positive_int, default=100, help="Number of games")
    eval_parser.add_argument("--mark-mines", action="store_true", help="Mark deduced mines")

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        if args.command == "play":
            play(args)
        elif args.command == "demo":
            demo(args)
        elif args.command == "evaluate":
            evaluate(args)
        else:
            parser.print_help()
    except MinefieldError as error:
        parser.error(str(error))


if __name__ == "__main__":
    main()
