"""Game session: an in-memory lineage of positions plus move history."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from kingside.core.enums import Color, RejectionReason
from kingside.core.move import Move, Rejection
from kingside.core.move_validator import MoveValidator
from kingside.core.notation import (
    STARTING_FEN,
    position_from_fen,
    position_to_fen,
    validate_fen,
)
from kingside.core.position import Position
from kingside.core.types import Square, check_square, square_name

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """A single entry in the move history."""

    move: Move
    fen_after: str

    @property
    def algebraic(self) -> str:
        return self.move.algebraic


@dataclass
class GameState:
    """Owns one game's position lineage.

    This is the boundary a UI talks to: it turns ``(from, to)`` gestures into
    validated moves and keeps every earlier position, so undo is a pop.
    Pure data/logic; no threading, no UI.
    """

    start_fen: str = field(default=STARTING_FEN, init=False)
    move_history: list[MoveRecord] = field(default_factory=list, init=False)
    _positions: list[Position] = field(
        default_factory=lambda: [Position.initial()], init=False, repr=False
    )

    # ── Initialisation ───────────────────────────────────────────────────

    def setup(self, fen: str | None = None) -> None:
        """Initialise (or reset) the game.

        Raises:
            FenError: *fen* is malformed.
        """
        start_fen = STARTING_FEN if fen is None else fen
        position = position_from_fen(start_fen)

        self.start_fen = start_fen
        self._positions = [position]
        self.move_history.clear()
        _LOGGER.info("Game set up from %s", start_fen)

    @staticmethod
    def looks_like_fen(text: str) -> bool:
        """Cheap pre-flight for pasted text; checks the placement field only."""
        return validate_fen(text)

    # ── Move submission ──────────────────────────────────────────────────

    def submit(self, from_sq: Square, to_sq: Square) -> MoveRecord | Rejection:
        """Try to play ``from_sq -> to_sq`` in the current position.

        Unlike :meth:`MoveValidator.evaluate`, an empty source square is
        answered with a ``NO_PIECE_AT_SOURCE`` rejection: gestures on empty
        squares are ordinary user input here.
        Off-board indices still raise :class:`InvalidSquareError`.
        """
        check_square(from_sq)
        check_square(to_sq)
        position = self.position
        if position.board.is_empty(from_sq):
            _LOGGER.warning("No piece on %s", square_name(from_sq))
            return Rejection(RejectionReason.NO_PIECE_AT_SOURCE, from_sq, to_sq)

        result = MoveValidator(position).evaluate(from_sq, to_sq)
        if isinstance(result, Rejection):
            return result
        return self._push(result)

    def _push(self, move: Move) -> MoveRecord:
        position = self.position.apply_move(move)
        record = MoveRecord(move=move, fen_after=position_to_fen(position))
        self._positions.append(position)
        self.move_history.append(record)
        return record

    def undo_last_move(self) -> MoveRecord | None:
        """Drop the latest move; ``None`` when there is nothing to undo."""
        if not self.move_history:
            return None
        self._positions.pop()
        return self.move_history.pop()

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def position(self) -> Position:
        return self._positions[-1]

    @property
    def positions(self) -> tuple[Position, ...]:
        """Every position of the game, the current one last."""
        return tuple(self._positions)

    @property
    def side_to_move(self) -> Color:
        return self.position.side_to_move

    @property
    def ply_count(self) -> int:
        return len(self.move_history)

    @property
    def fen(self) -> str:
        return position_to_fen(self.position)

    def algebraic_history(self) -> list[str]:
        return [record.algebraic for record in self.move_history]

    def legal_destinations(self, sq: Square) -> list[Square]:
        """Target squares the piece on *sq* may move to (empty if none/opponent)."""
        if self.position.board.is_empty(sq):
            return []
        return [move.to_sq for move in MoveValidator(self.position).moves_from(sq)]
