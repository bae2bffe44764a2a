"""Common bot strategy interfaces."""

from __future__ import annotations

from engine.actions import Action
from engine.cards import Card, Suit
from engine.mechanics import legal_moves
from engine.state import Phase, RoundState


class BotStrategy:
    """Base class for bot policies.

    Bots read the round state and return a decision; they never build the
    next state themselves. ``decide`` wraps the decision as an ``Action`` for
    ``GameSession`` to apply.
    """

    name: str = "BaseBot"

    def offer_bid(self, state: RoundState, seat: int) -> int:
        """Return a bid amount, or 0 to pass."""
        return 0

    def choose_trump(self, state: RoundState, seat: int) -> Suit:
        return Suit.SPADES

    def play_card(self, state: RoundState, seat: int) -> Card:
        legal = legal_moves(state.hand(seat), state.current_trick)
        if not legal:
            raise RuntimeError("No legal plays available for bot.")
        return legal[0]

    def decide(self, state: RoundState, seat: int) -> Action:
        if state.phase is Phase.BIDDING:
            return Action.bid(seat, self.offer_bid(state, seat))
        if state.phase is Phase.TRUMP_SELECTION:
            return Action.trump(seat, self.choose_trump(state, seat))
        if state.phase is Phase.PLAYING:
            return Action.play(seat, self.play_card(state, seat))
        raise RuntimeError(f"Nothing to decide in phase {state.phase}.")
