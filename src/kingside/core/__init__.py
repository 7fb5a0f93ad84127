"""Core domain layer: pure chess rules with zero external dependencies.

Quick start::

    from kingside.core import (
        STARTING_FEN, MoveValidator, Rejection, parse_square, position_from_fen,
    )

    pos = position_from_fen(STARTING_FEN)
    result = MoveValidator(pos).evaluate(parse_square("e2"), parse_square("e4"))
    if not isinstance(result, Rejection):
        pos = pos.apply_move(result)
"""

from kingside.core.board import Board
from kingside.core.enums import (
    CastlingRights,
    CastlingSide,
    Color,
    FenErrorKind,
    PieceType,
    RejectionReason,
)
from kingside.core.errors import (
    ChessError,
    ContractViolationError,
    EmptySourceSquareError,
    FenError,
    InvalidSquareError,
    PieceMismatchError,
)
from kingside.core.move import Move, Rejection
from kingside.core.move_validator import (
    MoveValidator,
    evaluate_move,
    is_path_clear,
    squares_between,
)
from kingside.core.notation import (
    STARTING_FEN,
    move_to_algebraic,
    position_from_fen,
    position_to_fen,
    validate_fen,
)
from kingside.core.piece import Piece
from kingside.core.position import Position
from kingside.core.types import (
    Square,
    check_square,
    file_of,
    is_valid_square,
    make_square,
    parse_square,
    rank_of,
    square_name,
)

__all__ = [
    # Enums / flags
    "CastlingRights",
    "CastlingSide",
    "Color",
    "FenErrorKind",
    "PieceType",
    "RejectionReason",
    # Errors
    "ChessError",
    "ContractViolationError",
    "EmptySourceSquareError",
    "FenError",
    "InvalidSquareError",
    "PieceMismatchError",
    # Types / helpers
    "Square",
    "check_square",
    "file_of",
    "is_valid_square",
    "make_square",
    "parse_square",
    "rank_of",
    "square_name",
    # Domain objects
    "Board",
    "Move",
    "MoveValidator",
    "Piece",
    "Position",
    "Rejection",
    "evaluate_move",
    "is_path_clear",
    "squares_between",
    # Notation
    "STARTING_FEN",
    "move_to_algebraic",
    "position_from_fen",
    "position_to_fen",
    "validate_fen",
]
