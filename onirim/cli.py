"""
Onirim CLI - Command-line interface for the engine.

Usage:
    onirim play [--seed N]                   Play a game in the terminal
    onirim simulate [--games N] [--policy P] Run bot games
    onirim deck [--seed N]                   Show a shuffled deck and opening hand
"""

import argparse
import logging
import random
import sys

from .config import GameConfig


def setup_logging(level: str = "WARNING", verbose: bool = False) -> None:
    """Configure the root logger.

    Args:
        level: Default level name (from config)
        verbose: Force DEBUG logging
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Onirim - solitaire card game engine",
        prog="onirim",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a game in the terminal")
    play_parser.add_argument("--seed", type=int, help="Shuffle seed (replays a game)")

    # Simulate command
    simulate_parser = subparsers.add_parser("simulate", help="Run bot games")
    simulate_parser.add_argument("--games", type=int, default=100, help="Number of games")
    simulate_parser.add_argument(
        "--policy", choices=["random", "first", "greedy"], default="greedy", help="Bot policy"
    )
    simulate_parser.add_argument("--seed", type=int, default=0, help="Seed of the first game")

    # Deck command
    deck_parser = subparsers.add_parser("deck", help="Show a shuffled deck and opening hand")
    deck_parser.add_argument("--seed", type=int, help="Shuffle seed")

    args = parser.parse_args(argv)
    config = GameConfig.from_env(seed=getattr(args, "seed", None))
    setup_logging(config.log_level, args.verbose)

    if args.command == "play":
        return cmd_play(config)
    elif args.command == "simulate":
        return cmd_simulate(args)
    elif args.command == "deck":
        return cmd_deck(config)
    else:
        parser.print_help()
        return 1


def cmd_play(config: GameConfig) -> int:
    """Play one game interactively."""
    from .interact import TerminalInteraction
    from .session import play_game

    print(f"Seed: {config.seed} (use --seed {config.seed} to replay)")
    try:
        result = play_game(TerminalInteraction(), config=config)
    except (EOFError, KeyboardInterrupt):
        print("\nGame abandoned.")
        return 1

    print(f"\nDoors: {result.doors}  Turns: {result.turns}  Cards left: {result.cards_remaining}")
    return 0 if result.won else 2


def cmd_simulate(args) -> int:
    """Run bot games and print a summary."""
    from .bots import POLICIES, RandomPolicy
    from .session import simulate

    policy_cls = POLICIES[args.policy]

    def factory(seed: int):
        if policy_cls is RandomPolicy:
            # Decouple the bot's choices from the deck shuffle
            return RandomPolicy(seed=random.Random(seed).getrandbits(32))
        return policy_cls()

    summary = simulate(factory, games=args.games, seed=args.seed)
    print(f"Policy:  {summary.policy}")
    print(f"Games:   {summary.games}")
    print(f"Wins:    {summary.wins} ({summary.win_rate:.1%})")
    print(f"Doors:   {summary.average_doors:.2f} per game")
    return 0


def cmd_deck(config: GameConfig) -> int:
    """Show a shuffled deck and the hand drawn from it."""
    from .engine_core import make_deck, draw_hand
    from .errors import EmptyPileError

    rng = random.Random(config.seed)
    deck = make_deck(rng)
    print(f"Deck ({deck.count}): {deck}")
    try:
        hand, _ = draw_hand(deck, rng, hand_size=config.hand_size)
    except EmptyPileError as e:
        print(e)
        return 1
    print(f"Hand: {hand}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
