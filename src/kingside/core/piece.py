"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from kingside.core.enums import Color, PieceType

# Uppercase letter per kind; FEN lowercases it for black.
_LETTERS: dict[PieceType, str] = {
    PieceType.PAWN: "P",
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}
_KINDS: dict[str, PieceType] = {v: k for k, v in _LETTERS.items()}

# White glyphs; black ones sit six code points further on.
_WHITE_GLYPHS: dict[PieceType, int] = {
    PieceType.KING: 0x2654,
    PieceType.QUEEN: 0x2655,
    PieceType.ROOK: 0x2656,
    PieceType.BISHOP: 0x2657,
    PieceType.KNIGHT: 0x2658,
    PieceType.PAWN: 0x2659,
}


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable value object: one of the twelve (color, kind) pairs."""

    color: Color
    piece_type: PieceType

    @property
    def is_pawn(self) -> bool:
        return self.piece_type == PieceType.PAWN

    @property
    def is_king(self) -> bool:
        return self.piece_type == PieceType.KING

    @property
    def letter(self) -> str:
        """Uppercase letter regardless of color, e.g. 'N'."""
        return _LETTERS[self.piece_type]

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        offset = 6 if self.color == Color.BLACK else 0
        return chr(_WHITE_GLYPHS[self.piece_type] + offset)

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        if self.color == Color.WHITE:
            return self.letter
        return self.letter.lower()

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from FEN character, e.g. 'N' → white knight."""
        kind = _KINDS.get(char.upper()) if len(char) == 1 else None
        if kind is None:
            raise ValueError(f"Invalid piece character: {char!r}")
        color = Color.WHITE if char.isupper() else Color.BLACK
        return cls(color, kind)

    @classmethod
    def is_piece_char(cls, char: str) -> bool:
        """Whether *char* is one of the twelve FEN piece letters."""
        return len(char) == 1 and char.upper() in _KINDS
