"""Notation package: FEN parsing/serialization and algebraic move strings."""

from kingside.core.notation.algebraic import move_to_algebraic
from kingside.core.notation.fen import (
    STARTING_FEN,
    position_from_fen,
    position_to_fen,
    validate_fen,
)

__all__ = [
    "STARTING_FEN",
    "move_to_algebraic",
    "position_from_fen",
    "position_to_fen",
    "validate_fen",
]
