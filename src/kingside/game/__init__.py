"""Game layer: an in-memory session over immutable positions."""

from kingside.game.state import GameState, MoveRecord

__all__ = ["GameState", "MoveRecord"]
