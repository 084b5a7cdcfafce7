#!/usr/bin/env python3
"""
Minefield - Main entry point.

Usage:
    python main.py presets
    python main.py leaderboard [--difficulty NAME] [--limit N] [--store PATH]
    python main.py simulate [--difficulty NAME] [--games N] [--seed S]
"""
import argparse
import logging
from typing import Dict, Optional

import numpy as np

from minefield import Command, ConfigurationError, MinesweeperEnv
from session import (
    DIFFICULTIES,
    JsonRecordStore,
    RecordStoreError,
    get_difficulty,
)


DEFAULT_STORE = "minesweeper_records.json"


def presets(args: argparse.Namespace) -> None:
    """List the difficulty presets."""
    print(f"{'Difficulty':<12} {'Board':<10} {'Mines':>5}")
    print("-" * 29)
    for preset in DIFFICULTIES.values():
        board = f"{preset.rows}x{preset.cols}"
        print(f"{preset.label:<12} {board:<10} {preset.num_mines:>5}")


def leaderboard(args: argparse.Namespace) -> None:
    """Print the fastest records per difficulty."""
    store = JsonRecordStore(args.store)
    labels = [args.difficulty] if args.difficulty else list(DIFFICULTIES)

    for label in labels:
        label = get_difficulty(label).label
        records = store.get_best_records(label, args.limit)
        print(f"\n{label}")
        print("=" * 30)
        if not records:
            print("  No records yet")
            continue
        for rank, record in enumerate(records, start=1):
            print(
                f"{rank:>3}. {record.player_name:<18} "
                f"{record.time_in_seconds:>5}s"
            )


def simulate(args: argparse.Namespace) -> None:
    """Play random valid moves and report the outcome."""
    if args.games < 1:
        raise ConfigurationError("--games must be at least 1")
    difficulty = get_difficulty(args.difficulty)
    env = MinesweeperEnv(config=difficulty.config, placer=args.placement)
    rng = np.random.default_rng(args.seed)
    safe_cells = difficulty.config.safe_cells

    print(
        f"Simulating {args.games} {difficulty.label} games "
        f"({difficulty.rows}x{difficulty.cols}, {difficulty.num_mines} mines)"
    )

    results = run_random_games(env, rng, args.games, args.seed)
    revealed_share = results["avg_revealed"] / safe_cells

    print(f"Results:")
    print(f"  Win rate: {results['win_rate']:.1%}")
    print(f"  Avg steps: {results['avg_steps']:.1f}")
    print(
        f"  Avg revealed: {results['avg_revealed']:.1f}/{safe_cells} "
        f"safe cells ({revealed_share:.1%})"
    )


def run_random_games(
    env: MinesweeperEnv,
    rng: np.random.Generator,
    num_games: int,
    seed: Optional[int] = None,
) -> Dict[str, float]:
    """
    Play games choosing uniformly among reveal and chord moves.

    Every such move opens at least one cell, so each game ends within
    safe_cells steps.
    """
    cells = env.config.total_cells
    toggles = slice(
        Command.TOGGLE_MARK * cells, (Command.TOGGLE_MARK + 1) * cells
    )
    wins = 0
    total_steps = 0
    total_revealed = 0

    for game in range(num_games):
        game_seed = None if seed is None else seed + game
        env.reset(seed=game_seed)
        terminated = False
        info = {}

        while not terminated:
            mask = env.get_action_mask()
            mask[toggles] = False
            action = int(rng.choice(np.flatnonzero(mask)))
            _, _, terminated, _, info = env.step(action)
            total_steps += 1

        if info.get("game_state") == "WON":
            wins += 1
        total_revealed += info.get("revealed", 0)

    return {
        "win_rate": wins / num_games,
        "avg_steps": total_steps / num_games,
        "avg_revealed": total_revealed / num_games,
    }


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="Minefield - Minesweeper engine tools"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Presets command
    subparsers.add_parser("presets", help="List difficulty presets")

    # Leaderboard command
    board_parser = subparsers.add_parser(
        "leaderboard", help="Show best times"
    )
    board_parser.add_argument(
        "--difficulty", default=None, help="Only show this difficulty"
    )
    board_parser.add_argument(
        "--limit", type=int, default=10, help="Records per difficulty"
    )
    board_parser.add_argument(
        "--store", default=DEFAULT_STORE, help="Path of the record file"
    )

    # Simulate command
    sim_parser = subparsers.add_parser(
        "simulate", help="Play random games through the engine"
    )
    sim_parser.add_argument(
        "--difficulty", default="Easy", help="Difficulty to play"
    )
    sim_parser.add_argument(
        "--games", type=int, default=100, help="Number of games to play"
    )
    sim_parser.add_argument(
        "--seed", type=int, default=None, help="Seed for boards and moves"
    )
    sim_parser.add_argument(
        "--placement",
        choices=["shuffle", "rejection"],
        default="shuffle",
        help="Mine placement strategy",
    )

    args = parser.parse_args()
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "presets":
            presets(args)
        elif args.command == "leaderboard":
            leaderboard(args)
        elif args.command == "simulate":
            simulate(args)
        else:
            parser.print_help()
    except ConfigurationError as exc:
        parser.error(str(exc))
    except RecordStoreError as exc:
        parser.exit(1, f"error: {exc}\n")


if __name__ == "__main__":
    main()
