"""Exception hierarchy.

Two tiers:

* recoverable input problems (:class:`InvalidSquareError`, :class:`FenError`)
  are ``ValueError`` subclasses the caller is expected to catch;
* contract violations (:class:`ContractViolationError`) signal a caller bug,
  e.g. evaluating a move from an empty square or applying a move against a
  position it was not produced for.

Illegal moves are not exceptions at all: the validator returns a
:class:`~kingside.core.move.Rejection` value.
"""

from __future__ import annotations

from kingside.core.enums import FenErrorKind


class ChessError(Exception):
    """Base class for every error raised by this package."""


class InvalidSquareError(ChessError, ValueError):
    """Raised when a square name cannot be parsed."""


class FenError(ChessError, ValueError):
    """Raised when a FEN string cannot be decoded."""

    def __init__(self, kind: FenErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind


class ContractViolationError(ChessError, RuntimeError):
    """Raised when an engine precondition is broken by the caller."""


class EmptySourceSquareError(ContractViolationError):
    """A move was evaluated from a square that holds no piece."""


class PieceMismatchError(ContractViolationError):
    """A move was applied to a position whose board disagrees with it."""
