"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import pytest

from kingside.core.notation import STARTING_FEN, position_from_fen
from kingside.core.position import Position


@pytest.fixture
def start() -> Position:
    """The standard starting position."""
    return position_from_fen(STARTING_FEN)


@pytest.fixture
def castling_position() -> Position:
    """Kings and rooks on their home squares, all four rights available."""
    return position_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
