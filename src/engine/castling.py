"""Helpers for implementing Castling rules. Needed both to validate a king move and to relocate the rook afterwards."""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Self

from src.engine.pieces import Color
from src.engine.square import BOARD_SIZE, Square


class CastlingDirection(Enum):
    """The four castling directions. Names start with the color that may castle that way."""

    WHITE_KING_SIDE = auto()
    WHITE_QUEEN_SIDE = auto()
    BLACK_KING_SIDE = auto()
    BLACK_QUEEN_SIDE = auto()


@dataclass(frozen=True)
class CastlingSquares:
    """Store the squares where king/rook start from/end up in by castling."""

    king_from: Square
    king_to: Square
    rook_from: Square
    rook_to: Square

    @classmethod
    def from_algebraic(cls, k_from: str, k_to: str, r_from: str, r_to: str) -> Self:
        """Convenience method: to make mapping shown below (from CastlingDirection) more readable"""
        king_from = Square.from_algebraic(k_from)
        king_to = Square.from_algebraic(k_to)
        rook_from = Square.from_algebraic(r_from)
        rook_to = Square.from_algebraic(r_to)
        return cls(king_from, king_to, rook_from, rook_to)

    @property
    def king_passes(self) -> Square:
        """The square the king crosses on its way (it may not be attacked)"""
        return castling_passed_square(self.king_from, self.king_to)

    def between(self) -> list[Square]:
        """All squares strictly in between the king and the rook. Must be empty to castle."""
        low, high = sorted([self.king_from.file, self.rook_from.file])
        return [Square(file, self.king_from.rank) for file in range(low + 1, high)]


# The moves (in classical chess) made when castling
CASTLING_RULES: dict[CastlingDirection, CastlingSquares] = {
    CastlingDirection.WHITE_KING_SIDE: CastlingSquares.from_algebraic(
        "e1", "g1", "h1", "f1"
    ),
    CastlingDirection.WHITE_QUEEN_SIDE: CastlingSquares.from_algebraic(
        "e1", "c1", "a1", "d1"
    ),
    CastlingDirection.BLACK_KING_SIDE: CastlingSquares.from_algebraic(
        "e8", "g8", "h8", "f8"
    ),
    CastlingDirection.BLACK_QUEEN_SIDE: CastlingSquares.from_algebraic(
        "e8", "c8", "a8", "d8"
    ),
}

HOME_RANK: dict[Color, int] = {Color.WHITE: 0, Color.BLACK: BOARD_SIZE - 1}


def find_castling_direction(
    king_from: Square, king_to: Square
) -> Optional[CastlingDirection]:
    """Which castling (if any) moves the king between these two squares"""
    for direction, squares in CASTLING_RULES.items():
        if squares.king_from == king_from and squares.king_to == king_to:
            return direction
    return None


def castling_rook_squares(king_from: Square, king_to: Square) -> tuple[Square, Square]:
    """
    Where the rook starts and lands for a castling king move.

    The side follows from the sign of the king's file change: the rook comes from that corner
    and lands next to the king, on the side facing the centre.
    """
    rank = king_from.rank
    if king_to.file > king_from.file:
        return Square(BOARD_SIZE - 1, rank), Square(king_to.file - 1, rank)
    return Square(0, rank), Square(king_to.file + 1, rank)


def castling_passed_square(king_from: Square, king_to: Square) -> Square:
    """The square in between the king's start and landing square, on the side the king moves to"""
    step = 1 if king_to.file > king_from.file else -1
    return king_from.offset(step, 0)
