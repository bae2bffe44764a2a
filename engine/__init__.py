"""Core engine package for Tarneeb."""

__all__ = [
    "cards",
    "seats",
    "deck",
    "trick",
    "mechanics",
    "state",
    "bidding",
    "play",
    "scoring",
    "estimator",
    "actions",
    "game",
    "encode",
    "rules_schema",
    "service",
]
