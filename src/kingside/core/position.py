"""Position: complete game state (board + metadata) and move application."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from kingside.core.board import Board
from kingside.core.enums import CastlingRights, CastlingSide, Color, PieceType
from kingside.core.errors import PieceMismatchError
from kingside.core.piece import Piece
from kingside.core.types import (
    Square,
    check_square,
    file_of,
    make_square,
    rank_of,
    square_name,
)

if TYPE_CHECKING:
    from kingside.core.move import Move, Rejection

_LOGGER = logging.getLogger(__name__)

# (king from file, king to file, rook from file, rook to file)
_CASTLING_FILES: dict[CastlingSide, tuple[int, int, int, int]] = {
    CastlingSide.KINGSIDE: (4, 6, 7, 5),
    CastlingSide.QUEENSIDE: (4, 2, 0, 3),
}

_ROOK_CORNERS: dict[Square, CastlingRights] = {
    make_square(0, 0): CastlingRights.WHITE_QUEENSIDE,
    make_square(7, 0): CastlingRights.WHITE_KINGSIDE,
    make_square(0, 7): CastlingRights.BLACK_QUEENSIDE,
    make_square(7, 7): CastlingRights.BLACK_KINGSIDE,
}


def home_rank(color: Color) -> int:
    """Back rank index of *color* (0 for white, 7 for black)."""
    return 0 if color == Color.WHITE else 7


@dataclass(frozen=True, slots=True)
class Position:
    """Full chess position: board + side to move + castling + en passant + clocks.

    Positions are values. :meth:`apply_move` returns a new position built on a
    copied board and leaves ``self`` untouched, so keeping earlier positions
    around is all it takes to keep a game's history.
    """

    board: Board = field(default_factory=Board.initial)
    side_to_move: Color = Color.WHITE
    castling: CastlingRights = CastlingRights.ALL
    en_passant: Square | None = None
    halfmove_clock: int = 0
    fullmove_number: int = 1

    @classmethod
    def initial(cls) -> Position:
        """The standard starting position."""
        return cls()

    # ── Move application ─────────────────────────────────────────────────

    def apply_move(self, move: Move) -> Position:
        """Return the position after *move*.

        *move* must have been produced by the validator for this very
        position; a mismatching piece raises :class:`PieceMismatchError` and an
        off-board square raises :class:`InvalidSquareError`.
        """
        check_square(move.from_sq)
        check_square(move.to_sq)
        occupant = self.board[move.from_sq]
        if occupant != move.piece:
            raise PieceMismatchError(
                f"Move {move} expects {move.piece} on {square_name(move.from_sq)}, "
                f"found {occupant}"
            )

        mover = move.piece.color
        board = self.board.copy()
        castling = self.castling
        halfmove_clock = self.halfmove_clock + 1
        fullmove_number = self.fullmove_number + (1 if mover == Color.BLACK else 0)
        en_passant: Square | None = None

        if move.castling is not None:
            rank = home_rank(mover)
            king_from, king_to, rook_from, rook_to = _CASTLING_FILES[move.castling]
            rook = board[make_square(rook_from, rank)]
            if rook is None:
                raise PieceMismatchError(
                    f"Castling {move.castling} without a rook on its home square"
                )
            board[make_square(king_from, rank)] = None
            board[make_square(rook_from, rank)] = None
            board[make_square(king_to, rank)] = move.piece
            board[make_square(rook_to, rank)] = rook
            castling &= ~CastlingRights.for_color(mover)
            _LOGGER.debug("Applied %s (%s)", move.algebraic, move.castling)
            return Position(
                board,
                mover.opposite,
                castling,
                None,
                halfmove_clock,
                fullmove_number,
            )

        board[move.from_sq] = None
        if move.is_en_passant:
            victim_sq = make_square(file_of(move.to_sq), rank_of(move.from_sq))
            if board[victim_sq] != Piece(mover.opposite, PieceType.PAWN):
                raise PieceMismatchError(
                    f"En passant {move} finds no {mover.opposite} pawn "
                    f"on {square_name(victim_sq)}"
                )
            board[victim_sq] = None
        board[move.to_sq] = move.promotion or move.piece

        if move.piece.is_king:
            castling &= ~CastlingRights.for_color(mover)
        elif move.piece.piece_type == PieceType.ROOK:
            # Only the departure square counts; a rook captured at home
            # leaves the flag set.
            corner = _ROOK_CORNERS.get(move.from_sq, CastlingRights.NONE)
            castling &= ~(corner & CastlingRights.for_color(mover))

        if move.piece.is_pawn or move.is_capture:
            halfmove_clock = 0

        if move.is_double_pawn_push:
            en_passant = make_square(
                file_of(move.from_sq),
                (rank_of(move.from_sq) + rank_of(move.to_sq)) // 2,
            )

        _LOGGER.debug("Applied %s", move.algebraic or move.uci)
        return Position(
            board,
            mover.opposite,
            castling,
            en_passant,
            halfmove_clock,
            fullmove_number,
        )

    def play(self, from_sq: Square, to_sq: Square) -> Position | Rejection:
        """Validate ``from_sq -> to_sq`` and apply it, or return the rejection."""
        from kingside.core.move import Rejection
        from kingside.core.move_validator import MoveValidator

        result = MoveValidator(self).evaluate(from_sq, to_sq)
        if isinstance(result, Rejection):
            return result
        return self.apply_move(result)

    # ── Utilities ────────────────────────────────────────────────────────

    def can_castle(self, color: Color, side: CastlingSide) -> bool:
        return bool(self.castling & CastlingRights.for_side(color, side))
