"""Simple bot arena for Tarneeb."""

from __future__ import annotations

import argparse
import logging
from typing import Callable, Dict, Iterable, Optional, Sequence

from engine.game import GameSession, Player
from engine.rules_schema import RuleSet, load_rules

from .base import BotStrategy
from .heuristic import HeuristicBot
from .random_bot import RandomBot

BOT_REGISTRY: Dict[str, Callable[[RuleSet], BotStrategy]] = {
    "heuristic": lambda rules: HeuristicBot(rules),
    "random": lambda rules: RandomBot(rules=rules),
}


def build_session(bots: Sequence[BotStrategy], *, seed: Optional[int] = None, rules: Optional[RuleSet] = None) -> GameSession:
    if len(bots) != 4:
        raise ValueError("Exactly four bots are required, one per seat.")
    players = [Player(seat=seat, name=f"{bot.name} {seat}") for seat, bot in enumerate(bots, start=1)]
    strategies = {seat: bot for seat, bot in enumerate(bots, start=1)}
    return GameSession(players=players, seed=seed, rules=rules or RuleSet(), strategies=strategies)


def play_round(session: GameSession) -> dict:
    session.start_round()
    session.run_ai_turns()
    state = session.state
    assert state is not None
    bid = state.bid
    result = session.finish_round()
    return {
        "bid": {"seat": bid.seat, "amount": bid.amount},
        "bid_made": result.bid_made,
        "tricks": result.tricks,
        "scores": (result.new_scores.team_a, result.new_scores.team_b),
    }


def run_match(
    bots: Sequence[BotStrategy],
    *,
    n_rounds: Optional[int] = 10,
    seed: Optional[int] = None,
    rules: Optional[RuleSet] = None,
) -> dict:
    """Play ``n_rounds`` rounds, or until a team reaches the target score when ``n_rounds`` is None."""
    session = build_session(bots, seed=seed, rules=rules)
    history = []
    while n_rounds is None or len(history) < n_rounds:
        history.append(play_round(session))
        if n_rounds is None and session.match_winner() is not None:
            break
    winner = session.match_winner()
    return {
        "scores": (session.scores.team_a, session.scores.team_b),
        "history": history,
        "redeals": session.redeals,
        "winner": str(winner) if winner is not None else None,
    }


def main(argv: Iterable[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Run a Tarneeb bot match.")
    parser.add_argument("--team-a", default="heuristic", choices=BOT_REGISTRY.keys(), help="Bot for seats 1 and 3.")
    parser.add_argument("--team-b", default="random", choices=BOT_REGISTRY.keys(), help="Bot for seats 2 and 4.")
    parser.add_argument("--n", type=int, default=10, help="Number of rounds to play; 0 plays to the target score.")
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--rules", default=None, help="Path to a JSON rules file.")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    rules = load_rules(args.rules)
    team_a = BOT_REGISTRY[args.team_a]
    team_b = BOT_REGISTRY[args.team_b]
    bots = [team_a(rules), team_b(rules), team_a(rules), team_b(rules)]
    results = run_match(bots, n_rounds=args.n or None, seed=args.seed, rules=rules)

    print(f"Scores after {len(results['history'])} rounds: {results['scores']}")
    made = sum(1 for entry in results["history"] if entry["bid_made"])
    print(f"Bids made: {made}/{len(results['history'])}")
    print(f"Redeals: {results['redeals']}")
    if results["winner"]:
        print(f"Winner: {results['winner']}")


if __name__ == "__main__":
    main()
