"""
Deckhand CLI - Command-line interface for the engine.

Usage:
    deckhand deal --seed 42                  Show the four hands dealt from a seed
    deckhand simulate --seed 42 -o game.json Play a full game with automated seats
    deckhand replay game.json --viewer p1    Rebuild a stored session
"""

import argparse
import json
import logging
import sys

from pydantic import ValidationError

from .bots import AutomatedPlayer, FirstLegalPolicy, RandomPolicy, SpadesPolicy
from .config import Settings
from .engine_core.errors import EngineError
from .engine_core.state import GameState, Player
from .engine_core.view import visible_cards
from .games import get_reducer
from .games.spades import tricks_won
from .logging_config import setup_logging
from .session import Session, replay
from .session.wire import session_from_record, session_to_record

logger = logging.getLogger(__name__)

POLICIES = {
    "spades": lambda seed: SpadesPolicy(),
    "random": lambda seed: RandomPolicy(seed),
    "first": lambda seed: FirstLegalPolicy(),
}


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Deckhand - Deterministic card-game engine",
        prog="deckhand",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Deal command
    deal_parser = subparsers.add_parser("deal", help="Show the hands dealt from a seed")
    deal_parser.add_argument("--seed", type=int, default=None, help="Deal seed")

    # Simulate command
    simulate_parser = subparsers.add_parser("simulate", help="Play a game with automated seats")
    simulate_parser.add_argument("--seed", type=int, default=None, help="Deal seed")
    simulate_parser.add_argument(
        "--policy", choices=sorted(POLICIES), default="spades", help="Policy for every seat"
    )
    simulate_parser.add_argument("--output", "-o", help="Write the session record here")

    # Replay command
    replay_parser = subparsers.add_parser("replay", help="Rebuild a stored session")
    replay_parser.add_argument("record_file", help="Path to a session record (JSON)")
    replay_parser.add_argument("--viewer", help="Show the game as this player sees it")

    args = parser.parse_args(argv)

    settings = Settings.from_env()
    setup_logging(settings.log_dir, settings.log_level)

    commands = {
        "deal": cmd_deal,
        "simulate": cmd_simulate,
        "replay": cmd_replay,
    }
    if args.command not in commands:
        parser.print_help()
        sys.exit(1)

    try:
        commands[args.command](args, settings)
    except EngineError as e:
        print(f"Error: {e}")
        sys.exit(1)


def default_players() -> tuple[Player, ...]:
    return tuple(
        Player(player_id=f"p{i}", name=f"Seat {i}", is_ai=True)
        for i in range(1, 5)
    )


def _resolve_seed(seed, settings: Settings) -> int:
    if seed is not None:
        return seed
    if settings.default_seed is not None:
        return settings.default_seed
    return 0


def cmd_deal(args, settings: Settings):
    """Show the hands dealt from a seed."""
    seed = _resolve_seed(args.seed, settings)
    state = get_reducer("spades").initial_state(seed, default_players())

    print(f"Seed: {seed}")
    for player, hand in zip(state.players, state.payload.hands):
        print(f"  {player.player_id}: {' '.join(str(c) for c in hand)}")


def cmd_simulate(args, settings: Settings):
    """Play a full game with automated seats and print the result."""
    seed = _resolve_seed(args.seed, settings)
    players = default_players()
    reducer = get_reducer("spades")

    bots = {
        p.player_id: AutomatedPlayer(reducer, p.player_id, POLICIES[args.policy](seed))
        for p in players
    }
    state = reducer.initial_state(seed, players)
    while not state.is_game_over:
        state = bots[state.current_player_id].take_turn(state)

    logger.info("Simulated %s: %d actions", state.game_id, len(state.action_history))
    print_summary(state)

    if args.output:
        session = Session(
            game_id=state.game_id,
            player_id=players[0].player_id,
            seed=seed,
            players=players,
            action_history=state.action_history,
        )
        with open(args.output, "w", encoding="utf-8") as f:
            json.dump(session_to_record(session), f, indent=2)
        print(f"Session written to {args.output}")


def cmd_replay(args, settings: Settings):
    """Rebuild a stored session and print it."""
    try:
        with open(args.record_file, "r", encoding="utf-8") as f:
            record = json.load(f)
    except FileNotFoundError:
        print(f"Error: File not found: {args.record_file}")
        sys.exit(1)

    try:
        session = session_from_record(record)
    except ValidationError as e:
        print(f"Error: Invalid session record: {e.error_count()} error(s)")
        sys.exit(1)

    reducer = get_reducer(session.game_type)
    state = replay(reducer, session)

    if args.viewer:
        view = reducer.player_view(state, args.viewer)
        if view.get_player(args.viewer) is not None:
            hand = visible_cards(view.payload.hands[view.seat_of(args.viewer)])
            print(f"{args.viewer} holds: {' '.join(str(c) for c in hand)}")
        state = view

    print_summary(state)


def print_summary(state: GameState):
    gs = state.payload
    print(f"Game: {state.game_id} (seed {state.seed})")
    print(f"Phase: {gs.phase.value}, {len(state.action_history)} action(s)")

    won = tricks_won(state)
    for player in state.players:
        bid = gs.bid_of(player.player_id)
        print(
            f"  {player.player_id}: bid {'-' if bid is None else bid}, "
            f"tricks {won[player.player_id]}"
        )

    if state.is_game_over:
        print(f"Winner: {state.winner}")
    else:
        print(f"To play: {state.current_player_id}")


if __name__ == "__main__":
    main()
