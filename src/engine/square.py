"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

# Chess board is always 8x8. Files and ranks are zero-based: a1 is (0, 0), h8 is (7, 7)
BOARD_SIZE = 8


@dataclass(frozen=True)
class Square:
    file: int
    rank: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Algebraic notation: 'a1' - 'h8' get converted to (0,0) - (7,7)"""
        file = ord(sq[0]) - ord("a")
        rank = int(sq[1]) - 1
        return cls(file, rank)

    def to_algebraic(self) -> str:
        return f"{chr(self.file + ord('a'))}{self.rank + 1}"

    def is_within_bounds(self) -> bool:
        return (0 <= self.file < BOARD_SIZE) and (0 <= self.rank < BOARD_SIZE)

    def offset(self, df: int, dr: int) -> Square:
        return Square(self.file + df, self.rank + dr)


def all_squares() -> list[Square]:
    """Every square of the board, a1, b1, ..., h8"""
    return [Square(file, rank) for rank in range(BOARD_SIZE) for file in range(BOARD_SIZE)]
