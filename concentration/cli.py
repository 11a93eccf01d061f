"""
Concentration CLI - Command-line interface for the engine.

Usage:
    concentration play [--seed N] [--delay S]    Play in the terminal
    concentration serve [--host H] [--port P]    Run the REST API
    concentration deck [--seed N]                Print a shuffled deck
"""

from typing import Callable
import argparse
import random
import sys
import time

from pydantic import ValidationError
import yaml


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Concentration - Memory Game Engine",
        prog="concentration",
    )
    parser.add_argument("--config", "-c", help="Path to YAML config file")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override logging level",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a game in the terminal")
    play_parser.add_argument("--seed", type=int, help="Seed for a reproducible deck")
    play_parser.add_argument("--delay", type=float, help="Seconds a mismatch stays visible")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the REST API")
    serve_parser.add_argument("--host", help="Bind address")
    serve_parser.add_argument("--port", type=int, help="Bind port")

    # Deck command
    deck_parser = subparsers.add_parser("deck", help="Print a freshly shuffled deck")
    deck_parser.add_argument("--seed", type=int, help="Seed for a reproducible deck")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    config = _load_config_or_exit(args.config)

    from .utils.logger import setup_logging
    setup_logging(args.log_level or config.logging.level)

    if args.command == "play":
        cmd_play(args, config)
    elif args.command == "serve":
        cmd_serve(args, config)
    elif args.command == "deck":
        cmd_deck(args, config)


def _load_config_or_exit(path):
    from .config import load_config

    try:
        return load_config(path)
    except (yaml.YAMLError, ValidationError) as e:
        print(f"Error: Invalid config file {path}: {e}")
        sys.exit(1)


def cmd_play(args, config):
    """Play games in the terminal until the player stops."""
    from .session import ManualScheduler, MemoryGame
    from .utils.logger import BoardDisplay

    game_config = config.game
    if args.delay is not None:
        game_config = game_config.model_copy(update={"mismatch_delay": args.delay})
    seed = args.seed if args.seed is not None else game_config.seed

    scheduler = ManualScheduler()
    game = MemoryGame(scheduler=scheduler, config=game_config, rng=random.Random(seed))
    display = BoardDisplay()

    while True:
        moves = play_game(game, scheduler, display)
        if moves is None:
            break
        answer = _read("Play again? [y/N] ")
        if answer is None or answer.strip().lower() not in ("y", "yes"):
            break
        game.reset()

    game.close()


def _read(prompt: str, read: Callable[[str], str] = input) -> str | None:
    try:
        return read(prompt)
    except EOFError:
        return None


def play_game(game, scheduler, display, read=input, sleep=time.sleep) -> int | None:
    """
    Run one game to completion.

    Returns:
        Move count when the game is won, None if the player quit
    """
    from .engine_core import InvalidCardError

    while not game.won:
        display.print_board(game.snapshot())
        line = _read("Card (q to quit): ", read)
        if line is None or line.strip().lower() == "q":
            return None

        try:
            card_id = int(line.strip())
        except ValueError:
            display.print_message(f"Not a card number: {line.strip()!r}")
            continue

        try:
            result = game.select(card_id)
        except InvalidCardError:
            display.print_message(f"Pick a card between 0 and {game.state.size - 1}")
            continue

        if result.ignored:
            continue

        if result.pending_resolution:
            display.print_board(game.snapshot())
            display.print_mismatch()
            delay = game.config.mismatch_delay
            sleep(delay)
            scheduler.advance(delay)
        elif not game.state.selection:
            display.print_match(game.state.card(card_id).symbol)

    display.print_board(game.snapshot())
    display.print_win(game.move_count)
    return game.move_count


def cmd_serve(args, config):
    """Run the REST API with uvicorn."""
    import uvicorn
    from .api import create_app

    host = args.host or config.server.host
    port = args.port or config.server.port
    uvicorn.run(create_app(config=config), host=host, port=port)


def cmd_deck(args, config):
    """Print a freshly shuffled deck."""
    from .engine_core import create_deck

    seed = args.seed if args.seed is not None else config.game.seed
    deck = create_deck(rng=random.Random(seed), shuffle=config.game.shuffle)
    for card in deck:
        print(f"{card.id:2d}  {card.symbol}")


if __name__ == "__main__":
    main()
