"""Engine layer: game state owner and tick scheduling."""

from arena.engine.game_engine import GameEngine
from arena.engine.scheduler import TickScheduler

__all__ = ["GameEngine", "TickScheduler"]
