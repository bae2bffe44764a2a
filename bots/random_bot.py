"""Random baseline bot, handy for shaking out engine edge cases."""

from __future__ import annotations

import random
from typing import Optional

from engine.actions import Action, legal_actions
from engine.rules_schema import DEFAULT_RULES, RuleSet
from engine.state import RoundState

from .base import BotStrategy


class RandomBot(BotStrategy):
    name = "Random"

    def __init__(self, seed: Optional[int] = None, *, bid_probability: float = 0.3, rules: RuleSet = DEFAULT_RULES) -> None:
        self._rng = random.Random(seed)
        self.bid_probability = bid_probability
        self.rules = rules

    def decide(self, state: RoundState, seat: int) -> Action:
        options = legal_actions(state, self.rules)
        if not options:
            raise RuntimeError("No legal actions available for bot.")
        bids = [action for action in options if action.amount is not None]
        if bids and self._rng.random() >= self.bid_probability:
            return Action.pass_(seat)
        return self._rng.choice(options)
