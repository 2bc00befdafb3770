"""
The Board holds the position (the configuration of pieces), the history of committed moves and the last evaluated state.

It is also the only place where the position changes: `commit()` applies an already validated move.
"""

import logging
from copy import deepcopy
from dataclasses import dataclass, field
from typing import Optional, Self

from src.engine.castling import HOME_RANK, castling_rook_squares
from src.engine.moves import BoardState, Move, MoveType
from src.engine.pieces import Color, Piece, PieceType, opponent
from src.engine.square import BOARD_SIZE, Square

logger = logging.getLogger(__name__)

STARTING_POSITION_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"


@dataclass
class Board:
    position: dict[Square, Piece]
    move_history: list[Move] = field(default_factory=list)
    state: BoardState = BoardState.REGULAR
    # placement before the first move in the history was committed (replay origin for the repetition rule)
    initial_position: Optional[dict[Square, Piece]] = None

    def __post_init__(self):
        if self.initial_position is None:
            # without a history, the current placement is where the game started
            if self.move_history:
                raise ValueError(
                    "A board with a move history needs the initial_position the moves were played from"
                )
            self.initial_position = dict(self.position)

    @classmethod
    def starting_position(cls) -> Self:
        """Standard chess setup, white on ranks 1-2 and black on ranks 7-8"""
        return cls.from_fen(STARTING_POSITION_FEN)

    @classmethod
    def from_fen(cls, fen_str: str) -> Self:
        """Construct a board using the first part of a FEN string (the one that denotes the board position)

        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * black pieces are on the 8th rank, starting with rook on a8, knight on b8, etc.
        * pawns cover 7th rank entirely
        * ranks 6 through 3 have 8 consecutive empty squares
        * rank 2 are the white pawns (capital letters)
        * 1st rank are the white pieces.
        """
        position: dict[Square, Piece] = {}
        for rank_idx, fen_one_rank in enumerate(fen_str.split("/")):
            # FEN string is read from top rank (8th) to bottom rank (1st)
            rank = BOARD_SIZE - 1 - rank_idx
            # ... but the first character is the a-file, so reads in normal direction
            file = 0
            for character in fen_one_rank:
                if character.isalpha():
                    position[Square(file, rank)] = Piece.from_fen(character)
                    file += 1
                else:
                    # A number denotes the amount of empty squares after each other
                    file += int(character)
        return cls(position)

    def to_fen(self) -> str:
        """Ranks are separated by slashes in FEN string."""
        return "/".join(self._rank_to_fen(rank) for rank in range(BOARD_SIZE - 1, -1, -1))

    def _rank_to_fen(self, rank: int) -> str:
        """FEN string of a single rank"""
        fen_characters: list[str] = []
        empty_count = 0
        for file in range(BOARD_SIZE):
            piece = self.piece(Square(file, rank))
            if piece is None:
                empty_count += 1
                continue
            if empty_count > 0:
                fen_characters.append(str(empty_count))
                empty_count = 0
            fen_characters.append(piece.to_fen())

        # if the entire rank is empty, then we still place this number in the string
        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    # --- QUERIES ---
    def piece(self, square: Square) -> Optional[Piece]:
        return self.position.get(square)

    def is_empty(self, square: Square) -> bool:
        return square not in self.position

    def locate_color(self, color: Color) -> list[Square]:
        return [square for square, piece in self.position.items() if piece.color == color]

    def find_king(self, color: Color) -> Optional[Square]:
        """Where the king of the given color stands (None if there is no such king on the board)"""
        king = Piece(PieceType.KING, color)
        return next(
            (square for square, piece in self.position.items() if piece == king), None
        )

    @property
    def last_move(self) -> Optional[Move]:
        return self.move_history[-1] if self.move_history else None

    def copy(self) -> Self:
        """Independent copy: nothing mutable is shared with the original"""
        return deepcopy(self)

    # --- MUTATIONS ---
    def place_piece(self, piece: Piece, square: Square) -> None:
        self.position[square] = piece

    def remove_piece(self, square: Square) -> None:
        self.position.pop(square, None)

    def commit(self, move: Move) -> None:
        """
        Apply a validated move to the position
        ----

        1. move the piece (from -> to)
        2. a pawn reaching the farthest rank becomes a queen
        3. castling: move the rook as well
        4. en passant: remove the pawn that made the two-square advance on the previous turn
        5. record the move in the history

        NOTE: step 4 looks at the last history entry, so the move may only be appended at the very end.
        """
        self._relocate(move)
        self._promote_if_needed(move)

        if move.type == MoveType.CASTLING:
            self._move_castling_rook(move)
        elif move.type == MoveType.EN_PASSANT:
            self._take_en_passant()

        self.move_history.append(move)
        logger.debug("Committed %s (%s)", move.to_uci(), move.type.name)

    def commit_all(self, moves: list[Move]) -> None:
        """convenience method to apply multiple moves (replaying a game, setting up a position reached after some moves)"""
        for move in moves:
            self.commit(move)

    def _relocate(self, move: Move) -> None:
        self.remove_piece(move.from_square)
        self.place_piece(move.moved_piece, move.to_square)

    def _promote_if_needed(self, move: Move) -> None:
        pawn = move.moved_piece
        if pawn.type != PieceType.PAWN:
            return
        # the farthest rank for a pawn is the home rank of the opponent
        if move.to_square.rank == HOME_RANK[opponent(pawn.color)]:
            self.place_piece(Piece(PieceType.QUEEN, pawn.color), move.to_square)

    def _move_castling_rook(self, move: Move) -> None:
        rook_from, rook_to = castling_rook_squares(move.from_square, move.to_square)
        rook = self.piece(rook_from)
        if rook is None:
            return
        self.remove_piece(rook_from)
        self.place_piece(rook, rook_to)

    def _take_en_passant(self) -> None:
        """The captured pawn stands on the square where the previous move ended (next to, not on, the target square)"""
        if self.last_move is not None:
            self.remove_piece(self.last_move.to_square)
