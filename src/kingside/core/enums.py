"""Core enumerations and flags for the rules engine."""

from __future__ import annotations

from enum import Enum, IntEnum, IntFlag, auto


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @property
    def fen_char(self) -> str:
        return "w" if self is Color.WHITE else "b"

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece kinds ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


class CastlingSide(Enum):
    """Flank a castling move goes to."""

    KINGSIDE = "king-side"
    QUEENSIDE = "queen-side"

    def __str__(self) -> str:
        return self.value


class CastlingRights(IntFlag):
    """Bitmask for castling availability."""

    NONE = 0
    WHITE_KINGSIDE = auto()
    WHITE_QUEENSIDE = auto()
    BLACK_KINGSIDE = auto()
    BLACK_QUEENSIDE = auto()

    WHITE_BOTH = WHITE_KINGSIDE | WHITE_QUEENSIDE
    BLACK_BOTH = BLACK_KINGSIDE | BLACK_QUEENSIDE
    ALL = WHITE_BOTH | BLACK_BOTH

    @classmethod
    def for_color(cls, color: Color) -> CastlingRights:
        """Both flags of *color*."""
        return cls.WHITE_BOTH if color == Color.WHITE else cls.BLACK_BOTH

    @classmethod
    def for_side(cls, color: Color, side: CastlingSide) -> CastlingRights:
        """The single flag for *color* castling towards *side*."""
        if color == Color.WHITE:
            if side is CastlingSide.KINGSIDE:
                return cls.WHITE_KINGSIDE
            return cls.WHITE_QUEENSIDE
        if side is CastlingSide.KINGSIDE:
            return cls.BLACK_KINGSIDE
        return cls.BLACK_QUEENSIDE


class RejectionReason(IntEnum):
    """Why a requested move was refused."""

    NOT_YOUR_TURN = auto()
    CAPTURE_OWN_PIECE = auto()
    INVALID_PIECE_MOVE = auto()
    NO_PIECE_AT_SOURCE = auto()


class FenErrorKind(IntEnum):
    """Which part of a FEN string failed to decode."""

    EMPTY_PLACEMENT = auto()
    TOO_MANY_FIELDS = auto()
    ROW_COUNT = auto()
    ROW_WIDTH = auto()
    INVALID_ROW = auto()
    INVALID_PIECE = auto()
    INVALID_EN_PASSANT = auto()
    INVALID_HALFMOVE_CLOCK = auto()
    INVALID_FULLMOVE_NUMBER = auto()
