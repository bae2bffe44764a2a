"""Bot strategies for Tarneeb."""

from .heuristic import HeuristicBot
from .random_bot import RandomBot

__all__ = ["HeuristicBot", "RandomBot"]
