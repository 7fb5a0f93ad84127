"""Board - piece placement on an 8x8 board."""

from __future__ import annotations

from collections.abc import Iterator

from kingside.core.enums import Color, PieceType
from kingside.core.piece import Piece
from kingside.core.types import Square, make_square

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Mapping from occupied squares to pieces.

    A board owned by a :class:`~kingside.core.position.Position` is treated as
    frozen; transitions work on a :meth:`copy`.
    """

    __slots__ = ("_pieces",)

    def __init__(self, pieces: dict[Square, Piece] | None = None) -> None:
        self._pieces: dict[Square, Piece] = dict(pieces) if pieces else {}

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._pieces.get(sq)

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        if piece is None:
            self._pieces.pop(sq, None)
        else:
            self._pieces[sq] = piece

    def __contains__(self, sq: object) -> bool:
        return sq in self._pieces

    def __len__(self) -> int:
        return len(self._pieces)

    def __iter__(self) -> Iterator[Square]:
        return iter(sorted(self._pieces))

    def is_empty(self, sq: Square) -> bool:
        return sq not in self._pieces

    def items(self) -> list[tuple[Square, Piece]]:
        """Occupied squares in ascending square order."""
        return sorted(self._pieces.items())

    # -- Query helpers ------------------------------------------------------

    def pieces(self, color: Color, piece_type: PieceType) -> list[Square]:
        """Squares occupied by *color*'s *piece_type*."""
        target = Piece(color, piece_type)
        return [sq for sq, piece in self.items() if piece == target]

    def all_pieces(self, color: Color) -> list[Square]:
        """All squares occupied by *color*."""
        return [sq for sq, piece in self.items() if piece.color == color]

    # -- Copying ------------------------------------------------------------

    def copy(self) -> Board:
        return Board(self._pieces)

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for f, pt in enumerate(_BACK_RANK):
            b[make_square(f, 0)] = Piece(Color.WHITE, pt)
            b[make_square(f, 1)] = Piece(Color.WHITE, PieceType.PAWN)
            b[make_square(f, 6)] = Piece(Color.BLACK, PieceType.PAWN)
            b[make_square(f, 7)] = Piece(Color.BLACK, pt)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._pieces == other._pieces

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(7, -1, -1):
            row = []
            for file in range(8):
                p = self[make_square(file, rank)]
                row.append(str(p) if p else ".")
            rows.append(f"{rank + 1} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
