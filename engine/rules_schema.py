"""Validation schema for Tarneeb rules configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator

SUIT_NAMES = ("hearts", "diamonds", "clubs", "spades")


def _validate_suit(value: str) -> str:
    normalized = value.lower()
    if normalized not in SUIT_NAMES:
        raise ValueError(f"Unknown suit: {value!r}")
    return normalized


class AIConfig(BaseModel):
    discount: float = Field(0.85, gt=0, le=1, description="Uncertainty discount applied to raw trick counts.")
    min_confidence: int = Field(5, ge=0, le=13, description="Minimum estimated tricks before the AI will bid.")
    default_trump: str = Field("spades", description="Trump picked when no suit beats a zero estimate.")
    delay_seconds: float = Field(0.0, ge=0, description="Pause before each AI decision, for UI pacing.")

    @field_validator("default_trump")
    @classmethod
    def validate_default_trump(cls, value: str) -> str:
        return _validate_suit(value)


class RuleSet(BaseModel):
    min_bid: int = Field(7, ge=1, le=13)
    max_bid: int = Field(13, ge=1, le=13)
    target_score: int = Field(31, gt=0, description="Match ends once a team reaches this score.")
    all_pass_policy: Literal["redeal", "force_minimum"] = Field(
        "redeal",
        description="What happens when all four seats pass without any bid.",
    )
    invalid_bid_policy: Literal["reject", "skip"] = Field(
        "skip",
        description="Skip the bidder's turn on a non-raising bid, or reject the bid outright.",
    )
    ai: AIConfig = Field(default_factory=AIConfig)

    @model_validator(mode="after")
    def ensure_bid_range(self) -> "RuleSet":
        if self.min_bid > self.max_bid:
            raise ValueError("min_bid must not exceed max_bid.")
        return self


DEFAULT_RULES = RuleSet()


def load_rules(path: Optional[Union[str, Path]] = None) -> RuleSet:
    """Return the default rules, or the rules stored as JSON at ``path``."""
    if path is None:
        return RuleSet()
    return RuleSet.model_validate_json(Path(path).read_text(encoding="utf-8"))
