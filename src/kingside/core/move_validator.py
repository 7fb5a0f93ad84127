"""Move legality: per-piece shape rules, path clearance, castling, en passant.

The validator answers one question, "may the piece on *from_sq* go to
*to_sq* in this position?", and either builds the fully described
:class:`Move` or returns a :class:`Rejection`. King safety is not examined:
moves that leave or put a king in check, and castling through attacked
squares, are accepted.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from kingside.core.enums import (
    CastlingSide,
    Color,
    PieceType,
    RejectionReason,
)
from kingside.core.errors import EmptySourceSquareError
from kingside.core.move import Move, Rejection
from kingside.core.notation.algebraic import move_to_algebraic
from kingside.core.piece import Piece
from kingside.core.position import home_rank
from kingside.core.types import (
    Square,
    check_square,
    file_of,
    make_square,
    rank_of,
    square_name,
)

if TYPE_CHECKING:
    from kingside.core.board import Board
    from kingside.core.position import Position

_LOGGER = logging.getLogger(__name__)

# Pawns always promote to this kind; the mover is not offered a choice.
PROMOTION_TYPE = PieceType.QUEEN

_CASTLING_TARGET_FILES: dict[int, CastlingSide] = {
    6: CastlingSide.KINGSIDE,
    2: CastlingSide.QUEENSIDE,
}
_ROOK_HOME_FILES: dict[CastlingSide, int] = {
    CastlingSide.KINGSIDE: 7,
    CastlingSide.QUEENSIDE: 0,
}
_KING_HOME_FILE = 4


def pawn_direction(color: Color) -> int:
    """Rank step of a forward pawn move."""
    return 1 if color == Color.WHITE else -1


def pawn_home_rank(color: Color) -> int:
    return 1 if color == Color.WHITE else 6


def promotion_rank(color: Color) -> int:
    return 7 if color == Color.WHITE else 0


# -- Path helpers -------------------------------------------------------------


def squares_between(from_sq: Square, to_sq: Square) -> list[Square]:
    """Squares strictly between two squares on a rank, file or diagonal.

    Non-aligned pairs (and adjacent squares) yield an empty list.
    """
    df = file_of(to_sq) - file_of(from_sq)
    dr = rank_of(to_sq) - rank_of(from_sq)
    if not (df == 0 or dr == 0 or abs(df) == abs(dr)):
        return []

    step_f = (df > 0) - (df < 0)
    step_r = (dr > 0) - (dr < 0)
    between: list[Square] = []
    f = file_of(from_sq) + step_f
    r = rank_of(from_sq) + step_r
    while (f, r) != (file_of(to_sq), rank_of(to_sq)):
        between.append(make_square(f, r))
        f += step_f
        r += step_r
    return between


def is_path_clear(board: Board, from_sq: Square, to_sq: Square) -> bool:
    """Whether every square strictly between the endpoints is empty."""
    return all(board.is_empty(sq) for sq in squares_between(from_sq, to_sq))


# -- Validator ----------------------------------------------------------------


class MoveValidator:
    """Validates and enumerates moves for a given :class:`Position`.

    The position is only read, never modified.
    """

    __slots__ = ("_pos", "_board")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._board = position.board

    # -- Public API ---------------------------------------------------------

    def evaluate(self, from_sq: Square, to_sq: Square) -> Move | Rejection:
        """Build the move ``from_sq -> to_sq`` or explain why it is refused.

        Raises:
            EmptySourceSquareError: *from_sq* holds no piece.
            InvalidSquareError: either square is off the board.
        """
        check_square(from_sq)
        check_square(to_sq)
        result = self._evaluate(from_sq, to_sq)
        if isinstance(result, Rejection):
            _LOGGER.debug("Rejected %s", result)
        return result

    def moves_from(self, sq: Square) -> list[Move]:
        """Every accepted move of the piece on *sq* (empty for the opponent)."""
        check_square(sq)
        piece = self._board[sq]
        if piece is None:
            raise EmptySourceSquareError(f"No piece on {square_name(sq)}")
        if piece.color != self._pos.side_to_move:
            return []
        moves: list[Move] = []
        for to_sq in range(64):
            result = self._evaluate(sq, to_sq)
            if isinstance(result, Move):
                moves.append(result)
        return moves

    def generate_moves(self) -> list[Move]:
        """All moves for the side to move (king safety not considered)."""
        moves: list[Move] = []
        for sq in self._board.all_pieces(self._pos.side_to_move):
            moves.extend(self.moves_from(sq))
        return moves

    # -- Evaluation ---------------------------------------------------------

    def _evaluate(self, from_sq: Square, to_sq: Square) -> Move | Rejection:
        board = self._board
        piece = board[from_sq]
        if piece is None:
            raise EmptySourceSquareError(f"No piece on {square_name(from_sq)}")

        if piece.color != self._pos.side_to_move:
            return Rejection(RejectionReason.NOT_YOUR_TURN, from_sq, to_sq, piece)

        target = board[to_sq]
        if target is not None and target.color == piece.color:
            return Rejection(RejectionReason.CAPTURE_OWN_PIECE, from_sq, to_sq, piece)

        castling: CastlingSide | None = None
        is_en_passant = False

        match piece.piece_type:
            case PieceType.PAWN:
                valid = self._is_pawn_move(from_sq, to_sq, piece.color)
                # A diagonal step onto an empty square is only valid en passant.
                is_en_passant = (
                    valid and target is None and file_of(to_sq) != file_of(from_sq)
                )
            case PieceType.KNIGHT:
                valid = self._is_knight_move(from_sq, to_sq)
            case PieceType.BISHOP:
                valid = self._is_bishop_move(from_sq, to_sq)
            case PieceType.ROOK:
                valid = self._is_rook_move(from_sq, to_sq)
            case PieceType.QUEEN:
                valid = self._is_bishop_move(from_sq, to_sq) or self._is_rook_move(
                    from_sq, to_sq
                )
            case PieceType.KING:
                valid, castling = self._is_king_move(from_sq, to_sq, piece.color)
            case _:
                raise AssertionError(f"Unhandled piece type: {piece.piece_type!r}")

        if not valid:
            return Rejection(RejectionReason.INVALID_PIECE_MOVE, from_sq, to_sq, piece)

        promotion: Piece | None = None
        if piece.is_pawn and rank_of(to_sq) == promotion_rank(piece.color):
            promotion = Piece(piece.color, PROMOTION_TYPE)

        is_capture = target is not None or is_en_passant
        return Move(
            from_sq=from_sq,
            to_sq=to_sq,
            piece=piece,
            turn=piece.color,
            is_capture=is_capture,
            castling=castling,
            is_en_passant=is_en_passant,
            promotion=promotion,
            algebraic=move_to_algebraic(
                piece, from_sq, to_sq, is_capture, castling, promotion
            ),
        )

    # -- Piece-specific predicates (private) --------------------------------

    def _is_pawn_move(self, from_sq: Square, to_sq: Square, color: Color) -> bool:
        board = self._board
        direction = pawn_direction(color)
        df = file_of(to_sq) - file_of(from_sq)
        dr = rank_of(to_sq) - rank_of(from_sq)

        if df == 0:
            if dr == direction:
                return board.is_empty(to_sq)
            if dr == 2 * direction and rank_of(from_sq) == pawn_home_rank(color):
                return board.is_empty(to_sq) and is_path_clear(board, from_sq, to_sq)
            return False

        if abs(df) == 1 and dr == direction:
            return not board.is_empty(to_sq) or self._is_en_passant_target(
                from_sq, to_sq, color
            )
        return False

    def _is_en_passant_target(
        self, from_sq: Square, to_sq: Square, color: Color
    ) -> bool:
        if to_sq != self._pos.en_passant:
            return False
        victim = self._board[make_square(file_of(to_sq), rank_of(from_sq))]
        return victim == Piece(color.opposite, PieceType.PAWN)

    @staticmethod
    def _is_knight_move(from_sq: Square, to_sq: Square) -> bool:
        df = abs(file_of(to_sq) - file_of(from_sq))
        dr = abs(rank_of(to_sq) - rank_of(from_sq))
        return {df, dr} == {1, 2}

    def _is_bishop_move(self, from_sq: Square, to_sq: Square) -> bool:
        df = abs(file_of(to_sq) - file_of(from_sq))
        dr = abs(rank_of(to_sq) - rank_of(from_sq))
        return df == dr and df > 0 and is_path_clear(self._board, from_sq, to_sq)

    def _is_rook_move(self, from_sq: Square, to_sq: Square) -> bool:
        same_file = file_of(from_sq) == file_of(to_sq)
        same_rank = rank_of(from_sq) == rank_of(to_sq)
        return (
            same_file != same_rank and is_path_clear(self._board, from_sq, to_sq)
        )

    def _is_king_move(
        self, from_sq: Square, to_sq: Square, color: Color
    ) -> tuple[bool, CastlingSide | None]:
        df = abs(file_of(to_sq) - file_of(from_sq))
        dr = abs(rank_of(to_sq) - rank_of(from_sq))
        if df <= 1 and dr <= 1:
            return True, None

        side = self._castling_side(from_sq, to_sq, color)
        return side is not None, side

    def _castling_side(
        self, from_sq: Square, to_sq: Square, color: Color
    ) -> CastlingSide | None:
        rank = home_rank(color)
        if from_sq != make_square(_KING_HOME_FILE, rank) or rank_of(to_sq) != rank:
            return None

        side = _CASTLING_TARGET_FILES.get(file_of(to_sq))
        if side is None:
            return None
        if not self._pos.can_castle(color, side):
            return None

        rook_sq = make_square(_ROOK_HOME_FILES[side], rank)
        if self._board[rook_sq] != Piece(color, PieceType.ROOK):
            return None
        if not is_path_clear(self._board, from_sq, rook_sq):
            return None
        return side


def evaluate_move(
    position: Position, from_sq: Square, to_sq: Square
) -> Move | Rejection:
    """Shorthand for ``MoveValidator(position).evaluate(from_sq, to_sq)``."""
    return MoveValidator(position).evaluate(from_sq, to_sq)
