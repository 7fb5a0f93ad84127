"""Algebraic rendering of validated moves (display only, never parsed)."""

from __future__ import annotations

from kingside.core.enums import CastlingSide
from kingside.core.piece import Piece
from kingside.core.types import FILES, Square, file_of, square_name

_CASTLING_SAN: dict[CastlingSide, str] = {
    CastlingSide.KINGSIDE: "O-O",
    CastlingSide.QUEENSIDE: "O-O-O",
}


def move_to_algebraic(
    piece: Piece,
    from_sq: Square,
    to_sq: Square,
    is_capture: bool,
    castling: CastlingSide | None = None,
    promotion: Piece | None = None,
) -> str:
    """Render e.g. ``Nf3``, ``exd6``, ``Rxa8``, ``e8=Q``, ``O-O``.

    No disambiguation and no check or mate suffix is added.
    """
    if castling is not None:
        return _CASTLING_SAN[castling]

    san = ""
    if piece.is_pawn:
        if is_capture:
            san += FILES[file_of(from_sq)]
    else:
        san += piece.letter

    if is_capture:
        san += "x"

    san += square_name(to_sq)

    if promotion is not None:
        san += "=" + promotion.letter
    return san
