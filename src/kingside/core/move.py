"""Move and Rejection value objects."""

from __future__ import annotations

from dataclasses import dataclass

from kingside.core.enums import CastlingSide, Color, RejectionReason
from kingside.core.piece import Piece
from kingside.core.types import Square, square_name


@dataclass(frozen=True, slots=True)
class Move:
    """A validated move, fully described.

    Instances come from :class:`~kingside.core.move_validator.MoveValidator`;
    building one by hand bypasses every legality check.
    """

    from_sq: Square
    to_sq: Square
    piece: Piece
    turn: Color
    is_capture: bool = False
    castling: CastlingSide | None = None
    is_en_passant: bool = False
    promotion: Piece | None = None
    algebraic: str = ""

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promotion is not None:
            base += self.promotion.letter.lower()
        return base

    @property
    def uci(self) -> str:
        """UCI long-algebraic notation."""
        return str(self)

    @property
    def is_double_pawn_push(self) -> bool:
        return self.piece.is_pawn and abs(self.to_sq - self.from_sq) == 16


_MESSAGES: dict[RejectionReason, str] = {
    RejectionReason.NOT_YOUR_TURN: "it is not {color}'s turn",
    RejectionReason.CAPTURE_OWN_PIECE: "cannot capture own piece",
    RejectionReason.INVALID_PIECE_MOVE: "invalid move for {piece}",
    RejectionReason.NO_PIECE_AT_SOURCE: "no piece at source square",
}


@dataclass(frozen=True, slots=True)
class Rejection:
    """Why ``from_sq -> to_sq`` was refused. An ordinary result, not an error."""

    reason: RejectionReason
    from_sq: Square
    to_sq: Square
    piece: Piece | None = None

    def __str__(self) -> str:
        color = str(self.piece.color) if self.piece is not None else "?"
        piece = str(self.piece) if self.piece is not None else "?"
        detail = _MESSAGES[self.reason].format(color=color, piece=piece)
        return f"{square_name(self.from_sq)}{square_name(self.to_sq)}: {detail}"
