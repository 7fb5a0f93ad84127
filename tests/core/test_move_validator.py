"""Tests for move legality and move enumeration."""

import logging

import pytest

from kingside.core.enums import CastlingSide, Color, PieceType, RejectionReason
from kingside.core.errors import EmptySourceSquareError, InvalidSquareError
from kingside.core.move import Move, Rejection
from kingside.core.move_validator import (
    MoveValidator,
    evaluate_move,
    is_path_clear,
    squares_between,
)
from kingside.core.notation import position_from_fen
from kingside.core.piece import Piece
from kingside.core.position import Position
from kingside.core.types import (
    A1, A3, A8, B1, C1, C3, D5, E1, E2, E3, E4, E5, E6, E7, G1, H1, H8,
    parse_square,
)


def _evaluate(position: Position, move: str) -> Move | Rejection:
    return evaluate_move(position, parse_square(move[:2]), parse_square(move[2:]))


def _accepted(position: Position, move: str) -> Move:
    result = _evaluate(position, move)
    assert isinstance(result, Move), f"{move} rejected: {result}"
    return result


def _rejected(position: Position, move: str) -> RejectionReason:
    result = _evaluate(position, move)
    assert isinstance(result, Rejection), f"{move} unexpectedly accepted"
    return result.reason


def perft(position: Position, depth: int) -> int:
    """Count leaf nodes reachable in *depth* plies."""
    if depth == 0:
        return 1
    return sum(
        perft(position.apply_move(move), depth - 1)
        for move in MoveValidator(position).generate_moves()
    )


class TestPreconditions:
    def test_empty_source_is_contract_violation(self, start: Position) -> None:
        with pytest.raises(EmptySourceSquareError, match="No piece on e4"):
            MoveValidator(start).evaluate(E4, E5)

    @pytest.mark.parametrize(("from_sq", "to_sq"), [(A1, -8), (A1, 64), (-1, A8)])
    def test_off_board_square_raises(self, from_sq: int, to_sq: int) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/R3K3 w - - 0 1")
        with pytest.raises(InvalidSquareError):
            MoveValidator(pos).evaluate(from_sq, to_sq)

    def test_not_your_turn(self, start: Position) -> None:
        assert _rejected(start, "e7e5") == RejectionReason.NOT_YOUR_TURN

    def test_not_your_turn_wins_over_shape(self, start: Position) -> None:
        # Shape-legal for a knight, but it is white to move.
        assert _rejected(start, "g8f6") == RejectionReason.NOT_YOUR_TURN

    def test_capture_own_piece(self, start: Position) -> None:
        assert _rejected(start, "b1d2") == RejectionReason.CAPTURE_OWN_PIECE

    def test_capture_own_piece_wins_over_shape(self, start: Position) -> None:
        assert _rejected(start, "a1b2") == RejectionReason.CAPTURE_OWN_PIECE

    def test_rejection_carries_piece_and_squares(self, start: Position) -> None:
        result = _evaluate(start, "g1g3")
        assert isinstance(result, Rejection)
        assert result.reason == RejectionReason.INVALID_PIECE_MOVE
        assert result.piece == Piece(Color.WHITE, PieceType.KNIGHT)
        assert (result.from_sq, result.to_sq) == (G1, parse_square("g3"))
        assert str(result) == "g1g3: invalid move for N"

    def test_rejection_is_logged(
        self, start: Position, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.DEBUG, logger="kingside.core.move_validator"):
            _evaluate(start, "e7e5")
        assert "it is not black's turn" in caplog.text


class TestPawn:
    EMPTY = "4k3/8/8/8/8/8/4P3/4K3 w - - 0 1"

    def test_single_and_double_step(self) -> None:
        pos = position_from_fen(self.EMPTY)
        assert _accepted(pos, "e2e3").algebraic == "e3"
        assert _accepted(pos, "e2e4").algebraic == "e4"

    def test_double_step_blocked_by_skipped_square(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/4n3/4P3/4K3 w - - 0 1")
        assert _rejected(pos, "e2e4") == RejectionReason.INVALID_PIECE_MOVE
        assert _rejected(pos, "e2e3") == RejectionReason.INVALID_PIECE_MOVE

    def test_double_step_only_from_home_rank(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/4P3/8/4K3 w - - 0 1")
        assert _rejected(pos, "e3e5") == RejectionReason.INVALID_PIECE_MOVE

    def test_no_backward_or_sideways(self) -> None:
        pos = position_from_fen("4k3/8/8/8/4P3/8/8/4K3 w - - 0 1")
        assert _rejected(pos, "e4e3") == RejectionReason.INVALID_PIECE_MOVE
        assert _rejected(pos, "e4d4") == RejectionReason.INVALID_PIECE_MOVE

    def test_diagonal_needs_a_target(self) -> None:
        pos = position_from_fen(self.EMPTY)
        assert _rejected(pos, "e2d3") == RejectionReason.INVALID_PIECE_MOVE

    def test_diagonal_capture(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/3p4/4P3/4K3 w - - 0 1")
        move = _accepted(pos, "e2d3")
        assert move.is_capture
        assert not move.is_en_passant
        assert move.algebraic == "exd3"

    def test_black_moves_down_the_board(self) -> None:
        pos = position_from_fen("4k3/3p4/8/8/8/8/8/4K3 b - - 0 1")
        assert _accepted(pos, "d7d5").algebraic == "d5"
        assert _rejected(pos, "d7d8") == RejectionReason.INVALID_PIECE_MOVE

    def test_en_passant_white(self) -> None:
        pos = position_from_fen("4k3/8/8/3Pp3/8/8/8/4K3 w - e6 0 2")
        move = _accepted(pos, "d5e6")
        assert move.is_en_passant
        assert move.is_capture
        assert move.algebraic == "dxe6"

    def test_en_passant_black(self) -> None:
        pos = position_from_fen("4k3/8/8/8/3pP3/8/8/4K3 b - e3 0 1")
        move = _accepted(pos, "d4e3")
        assert move.is_en_passant
        assert move.algebraic == "dxe3"

    def test_en_passant_needs_target_square(self) -> None:
        pos = position_from_fen("4k3/8/8/3Pp3/8/8/8/4K3 w - - 0 2")
        assert _rejected(pos, "d5e6") == RejectionReason.INVALID_PIECE_MOVE

    def test_en_passant_needs_enemy_pawn_beside(self) -> None:
        # Target square on the wrong rank: the pawn beside is the mover's own.
        pos = position_from_fen("4k3/8/8/8/8/8/3PP3/4K3 w - e3 0 1")
        assert _rejected(pos, "d2e3") == RejectionReason.INVALID_PIECE_MOVE
        moves = MoveValidator(pos).moves_from(parse_square("d2"))
        assert {m.to_sq for m in moves} == {parse_square("d3"), parse_square("d4")}

    def test_promotes_to_queen(self) -> None:
        pos = position_from_fen("4k3/P7/8/8/8/8/8/4K3 w - - 0 1")
        move = _accepted(pos, "a7a8")
        assert move.promotion == Piece(Color.WHITE, PieceType.QUEEN)
        assert move.algebraic == "a8=Q"
        assert move.uci == "a7a8q"

    def test_black_promotes_to_black_queen(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/p7/4K3 b - - 0 1")
        move = _accepted(pos, "a2a1")
        assert move.promotion == Piece(Color.BLACK, PieceType.QUEEN)
        assert move.algebraic == "a1=Q"

    def test_capture_promotion(self) -> None:
        pos = position_from_fen("1r2k3/P7/8/8/8/8/8/4K3 w - - 0 1")
        assert _accepted(pos, "a7b8").algebraic == "axb8=Q"

    def test_no_promotion_before_last_rank(self, start: Position) -> None:
        assert _accepted(start, "e2e4").promotion is None


class TestPieces:
    def test_knight_jumps(self, start: Position) -> None:
        move = _accepted(start, "g1f3")
        assert move.algebraic == "Nf3"
        assert not move.is_capture
        assert _rejected(start, "g1g3") == RejectionReason.INVALID_PIECE_MOVE

    def test_bishop_blocked(self, start: Position) -> None:
        assert _rejected(start, "f1c4") == RejectionReason.INVALID_PIECE_MOVE

    def test_bishop_open_diagonal(self) -> None:
        pos = position_from_fen(
            "rnbqkbnr/pppp1ppp/8/4p3/4P3/8/PPPP1PPP/RNBQKBNR w KQkq - 0 2"
        )
        assert _accepted(pos, "f1c4").algebraic == "Bc4"
        assert _rejected(pos, "f1f3") == RejectionReason.INVALID_PIECE_MOVE

    def test_rook_lines(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/R3K3 w - - 0 1")
        assert _accepted(pos, "a1a8").algebraic == "Ra8"
        assert _accepted(pos, "a1d1").algebraic == "Rd1"
        assert _rejected(pos, "a1b2") == RejectionReason.INVALID_PIECE_MOVE

    def test_rook_blocked(self) -> None:
        pos = position_from_fen("4k3/8/8/8/P7/8/8/R3K3 w - - 0 1")
        assert _rejected(pos, "a1a8") == RejectionReason.INVALID_PIECE_MOVE

    def test_rook_capture(self) -> None:
        pos = position_from_fen("r3k3/8/8/8/8/8/8/R3K3 w - - 0 1")
        move = _accepted(pos, "a1a8")
        assert move.is_capture
        assert move.algebraic == "Rxa8"

    def test_queen_lines_and_diagonals(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/3QK3 w - - 0 1")
        assert _accepted(pos, "d1h5").algebraic == "Qh5"
        assert _accepted(pos, "d1d8").algebraic == "Qd8"
        assert _rejected(pos, "d1e3") == RejectionReason.INVALID_PIECE_MOVE

    def test_king_single_steps(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/4K3 w - - 0 1")
        assert _accepted(pos, "e1e2").algebraic == "Ke2"
        assert _accepted(pos, "e1f2").algebraic == "Kf2"
        assert _rejected(pos, "e1e3") == RejectionReason.INVALID_PIECE_MOVE


class TestCastling:
    def test_kingside(self, castling_position: Position) -> None:
        move = _accepted(castling_position, "e1g1")
        assert move.castling is CastlingSide.KINGSIDE
        assert move.algebraic == "O-O"
        assert not move.is_capture

    def test_queenside(self, castling_position: Position) -> None:
        move = _accepted(castling_position, "e1c1")
        assert move.castling is CastlingSide.QUEENSIDE
        assert move.algebraic == "O-O-O"

    def test_black_castles(self) -> None:
        pos = position_from_fen("r3k2r/8/8/8/8/8/8/R3K2R b KQkq - 0 1")
        assert _accepted(pos, "e8g8").castling is CastlingSide.KINGSIDE
        assert _accepted(pos, "e8c8").castling is CastlingSide.QUEENSIDE

    def test_requires_right(self) -> None:
        pos = position_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w Qkq - 0 1")
        assert _rejected(pos, "e1g1") == RejectionReason.INVALID_PIECE_MOVE
        assert _accepted(pos, "e1c1").castling is CastlingSide.QUEENSIDE

    def test_queenside_needs_b_file_empty(self) -> None:
        pos = position_from_fen("r3k2r/8/8/8/8/8/8/RN2K2R w KQkq - 0 1")
        assert _rejected(pos, "e1c1") == RejectionReason.INVALID_PIECE_MOVE

    def test_kingside_blocked(self) -> None:
        pos = position_from_fen("r3k2r/8/8/8/8/8/8/R3KB1R w KQkq - 0 1")
        assert _rejected(pos, "e1g1") == RejectionReason.INVALID_PIECE_MOVE

    def test_requires_rook_on_home_square(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/4K3 w K - 0 1")
        assert _rejected(pos, "e1g1") == RejectionReason.INVALID_PIECE_MOVE

    def test_requires_king_on_home_square(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/3K3R w K - 0 1")
        assert _rejected(pos, "d1f1") == RejectionReason.INVALID_PIECE_MOVE

    def test_attacked_transit_square_is_not_checked(self) -> None:
        # The f-file rook covers f1; attacks are outside this engine's rules.
        pos = position_from_fen("4kr2/8/8/8/8/8/8/4K2R w K - 0 1")
        assert _accepted(pos, "e1g1").castling is CastlingSide.KINGSIDE


class TestPaths:
    def test_diagonal(self) -> None:
        assert squares_between(A1, H8) == [9, 18, 27, 36, 45, 54]

    def test_file(self) -> None:
        assert squares_between(A1, A3) == [parse_square("a2")]

    def test_rank_descending(self) -> None:
        assert squares_between(H1, A1) == [6, 5, 4, 3, 2, 1]

    def test_not_aligned_is_empty(self) -> None:
        assert squares_between(A1, parse_square("b3")) == []

    def test_adjacent_is_empty(self) -> None:
        assert squares_between(E4, E5) == []

    def test_is_path_clear(self, start: Position) -> None:
        assert not is_path_clear(start.board, A1, A8)
        assert is_path_clear(start.board, A3, parse_square("a6"))


class TestEnumeration:
    def test_moves_from_knight(self, start: Position) -> None:
        targets = {m.to_sq for m in MoveValidator(start).moves_from(B1)}
        assert targets == {A3, C3}

    def test_moves_from_pawn(self, start: Position) -> None:
        targets = {m.to_sq for m in MoveValidator(start).moves_from(E2)}
        assert targets == {E3, E4}

    def test_moves_from_opponent_piece_is_empty(self, start: Position) -> None:
        assert MoveValidator(start).moves_from(E7) == []

    def test_moves_from_empty_square_raises(self, start: Position) -> None:
        with pytest.raises(EmptySourceSquareError):
            MoveValidator(start).moves_from(E4)

    def test_moves_from_off_board_raises(self, start: Position) -> None:
        with pytest.raises(InvalidSquareError):
            MoveValidator(start).moves_from(64)

    def test_castling_enumerated(self, castling_position: Position) -> None:
        king_moves = MoveValidator(castling_position).moves_from(E1)
        sides = {m.castling for m in king_moves if m.castling is not None}
        assert sides == {CastlingSide.KINGSIDE, CastlingSide.QUEENSIDE}
        assert {m.to_sq for m in king_moves} >= {G1, C1}

    def test_rook_moves_include_capture(self, castling_position: Position) -> None:
        targets = {m.to_sq for m in MoveValidator(castling_position).moves_from(H1)}
        assert H8 in targets
        assert B1 not in targets  # beyond own king

    def test_all_moves_from_start(self, start: Position) -> None:
        moves = MoveValidator(start).generate_moves()
        assert len(moves) == 20
        assert all(m.turn == Color.WHITE for m in moves)

    def test_generated_moves_are_evaluate_results(self, start: Position) -> None:
        validator = MoveValidator(start)
        for move in validator.generate_moves():
            assert validator.evaluate(move.from_sq, move.to_sq) == move

    def test_en_passant_enumerated(self) -> None:
        pos = position_from_fen("4k3/8/8/3Pp3/8/8/8/4K3 w - e6 0 2")
        moves = MoveValidator(pos).moves_from(D5)
        assert {m.to_sq for m in moves} == {parse_square("d6"), E6}


class TestMoveCounts:
    def test_depth_1(self, start: Position) -> None:
        assert perft(start, 1) == 20

    def test_depth_2(self, start: Position) -> None:
        assert perft(start, 2) == 400

    @pytest.mark.slow
    def test_depth_3(self, start: Position) -> None:
        assert perft(start, 3) == 8_902
