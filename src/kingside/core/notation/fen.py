"""FEN parsing, serialization and placement pre-flight validation."""

from __future__ import annotations

from kingside.core.board import Board
from kingside.core.enums import CastlingRights, Color, FenErrorKind
from kingside.core.errors import FenError, InvalidSquareError
from kingside.core.piece import Piece
from kingside.core.position import Position
from kingside.core.types import Square, make_square, parse_square, square_name

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

# Values used for trailing fields a FEN string leaves out.
_FIELD_DEFAULTS: tuple[str, ...] = ("w", "-", "-", "0", "1")

# Emitted in this order; any order is accepted on input.
_CASTLING_CHARS: tuple[tuple[str, CastlingRights], ...] = (
    ("K", CastlingRights.WHITE_KINGSIDE),
    ("Q", CastlingRights.WHITE_QUEENSIDE),
    ("k", CastlingRights.BLACK_KINGSIDE),
    ("q", CastlingRights.BLACK_QUEENSIDE),
)

_EMPTY_RUN_DIGITS = "12345678"


# ── Placement field ──────────────────────────────────────────────────────────


def _parse_placement(placement: str) -> Board:
    rows = placement.split("/")
    if len(rows) != 8:
        raise FenError(
            FenErrorKind.ROW_COUNT,
            f"Invalid FEN board (must contain 8 ranks, got {len(rows)})",
        )

    board = Board()
    for row_idx, row in enumerate(rows):
        rank = 7 - row_idx
        file = 0
        for ch in row:
            if ch.isdigit():
                if ch not in _EMPTY_RUN_DIGITS:
                    raise FenError(
                        FenErrorKind.INVALID_ROW,
                        f"Invalid FEN digit {ch!r} in rank {rank + 1}: {row!r}",
                    )
                file += int(ch)
                continue
            if not Piece.is_piece_char(ch):
                raise FenError(
                    FenErrorKind.INVALID_PIECE,
                    f"Invalid FEN piece {ch!r} in rank {rank + 1}: {row!r}",
                )
            if file >= 8:
                raise FenError(
                    FenErrorKind.ROW_WIDTH,
                    f"Invalid FEN rank width (piece beyond file h): {row!r}",
                )
            board[make_square(file, rank)] = Piece.from_char(ch)
            file += 1
        if file != 8:
            raise FenError(
                FenErrorKind.ROW_WIDTH,
                f"Invalid FEN rank width ({file} squares): {row!r}",
            )
    return board


def _row_width(row: str) -> int | None:
    """Number of squares *row* describes, or ``None`` for a bad character."""
    width = 0
    for ch in row:
        if ch in _EMPTY_RUN_DIGITS:
            width += int(ch)
        elif Piece.is_piece_char(ch):
            width += 1
        else:
            return None
    return width


def validate_fen(fen: str) -> bool:
    """Cheap structural check of the placement field only.

    Accepts when there are exactly 8 rows, each describing exactly 8 squares
    with piece letters and digits 1–8. The remaining fields are not looked at
    and no :class:`Position` is built.
    """
    if not fen:
        return False
    placement = fen.split(" ")[0]
    if not placement:
        return False
    rows = placement.split("/")
    if len(rows) != 8:
        return False
    return all(_row_width(row) == 8 for row in rows)


# ── Other fields ─────────────────────────────────────────────────────────────


def _parse_castling(text: str) -> CastlingRights:
    castling = CastlingRights.NONE
    for ch, right in _CASTLING_CHARS:
        if ch in text:
            castling |= right
    return castling


def _parse_en_passant(text: str) -> Square | None:
    if text == "-":
        return None
    try:
        return parse_square(text)
    except InvalidSquareError:
        raise FenError(
            FenErrorKind.INVALID_EN_PASSANT,
            f"Invalid FEN en-passant square: {text!r}",
        ) from None


def _parse_counter(text: str, minimum: int, kind: FenErrorKind, label: str) -> int:
    if not (text.isascii() and text.isdigit()) or int(text) < minimum:
        raise FenError(kind, f"Invalid FEN {label}: {text!r}")
    return int(text)


# ── Public API ───────────────────────────────────────────────────────────────


def position_from_fen(fen: str) -> Position:
    """Parse a FEN string into a :class:`Position`.

    Only the placement field is mandatory. Missing trailing fields take their
    usual defaults (``w - - 0 1``). Any side-to-move token other than ``"w"``
    means black.

    Raises:
        FenError: a field is malformed; ``kind`` tells which.
    """
    parts = fen.split(" ")
    if len(parts) > 6:
        raise FenError(
            FenErrorKind.TOO_MANY_FIELDS,
            f"Invalid FEN (at most 6 fields, got {len(parts)}): {fen!r}",
        )
    if not parts[0]:
        raise FenError(
            FenErrorKind.EMPTY_PLACEMENT, f"Invalid FEN (no placement): {fen!r}"
        )

    placement = parts[0]
    side_part, castling_part, ep_part, halfmove_part, fullmove_part = (
        parts[1:] + list(_FIELD_DEFAULTS[len(parts) - 1 :])
    )

    board = _parse_placement(placement)
    side = Color.WHITE if side_part == "w" else Color.BLACK
    castling = _parse_castling(castling_part)
    en_passant = _parse_en_passant(ep_part)
    halfmove = _parse_counter(
        halfmove_part, 0, FenErrorKind.INVALID_HALFMOVE_CLOCK, "halfmove clock"
    )
    fullmove = _parse_counter(
        fullmove_part, 1, FenErrorKind.INVALID_FULLMOVE_NUMBER, "fullmove number"
    )
    return Position(board, side, castling, en_passant, halfmove, fullmove)


def position_to_fen(pos: Position) -> str:
    """Serialise a :class:`Position` to FEN."""
    rows: list[str] = []
    for rank in range(7, -1, -1):
        empty = 0
        row = ""
        for file in range(8):
            piece = pos.board[make_square(file, rank)]
            if piece is None:
                empty += 1
                continue
            if empty:
                row += str(empty)
                empty = 0
            row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)

    castling_str = "".join(ch for ch, right in _CASTLING_CHARS if pos.castling & right)
    ep_str = square_name(pos.en_passant) if pos.en_passant is not None else "-"

    return " ".join(
        (
            "/".join(rows),
            pos.side_to_move.fen_char,
            castling_str or "-",
            ep_str,
            str(pos.halfmove_clock),
            str(pos.fullmove_number),
        )
    )
