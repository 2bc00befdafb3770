"""
Move records and the categories the engine sorts them into.

A Move is created by the validator once a (from, to) request passed the movement rules of the piece,
and becomes a permanent entry of the board's history once committed.
"""

from dataclasses import dataclass
from enum import Enum, auto

from src.engine.pieces import Piece
from src.engine.square import Square


class MoveType(Enum):
    """
    ATTACK is a regular advance onto an empty square (no capture).

    NOTE: Promotion is not a separate category. The board promotes a pawn to a queen while committing the move.
    """

    ATTACK = auto()
    CAPTURE = auto()
    CASTLING = auto()
    EN_PASSANT = auto()


class BoardState(Enum):
    REGULAR = auto()
    CHECK = auto()
    CHECK_MATE = auto()
    STALE_MATE = auto()


@dataclass(frozen=True)
class Move:
    """A validated move: where from, where to, what moved and what kind of move it was."""

    from_square: Square
    to_square: Square
    moved_piece: Piece
    type: MoveType

    def to_uci(self) -> str:
        """Universal Chess Interface notation, ex. 'e2e4'. No promotion suffix: pawns always promote to a queen."""
        return f"{self.from_square.to_algebraic()}{self.to_square.to_algebraic()}"
