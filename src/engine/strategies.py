"""
Geometry/Base movement and capturing rules

Key idea: Use strategy pattern to define the movement rules for each piece type.
Every strategy answers one question: "Can the piece on `from_square` go to `to_square` on this board, and what kind of move is it?"
It raises an InvalidMoveError when the answer is no.

Whether the move leaves your own king in check is checked later by the validator (src/engine/validator.py)
"""

from typing import Callable, Optional, Protocol

from src.core.exceptions import InvalidMoveError
from src.engine.castling import CASTLING_RULES, HOME_RANK, find_castling_direction
from src.engine.moves import Move, MoveType
from src.engine.pieces import Color, Piece, PieceType, opponent
from src.engine.square import Square


class Board(Protocol):
    """Just the parts the movement strategies need"""

    move_history: list[Move]

    def piece(self, square: Square) -> Optional[Piece]: ...
    def is_empty(self, square: Square) -> bool: ...

    @property
    def last_move(self) -> Optional[Move]: ...


Vector = tuple[int, int]


# --- SHARED CHECKS ---
def _moving_piece(from_square: Square, board: Board) -> Piece:
    piece = board.piece(from_square)
    if piece is None:
        raise InvalidMoveError(f"No piece to move on {from_square.to_algebraic()}")
    return piece


def _assert_on_board(from_square: Square, to_square: Square) -> None:
    if not to_square.is_within_bounds():
        raise InvalidMoveError(f"Target square {to_square} is outside of the board")
    if from_square == to_square:
        raise InvalidMoveError(f"Piece on {from_square.to_algebraic()} has to move")


def _target_type(from_square: Square, to_square: Square, board: Board) -> MoveType:
    """Empty target square: regular advance. Opponent's piece: capture. Own piece: not allowed."""
    target = board.piece(to_square)
    if target is None:
        return MoveType.ATTACK
    if target.color == _moving_piece(from_square, board).color:
        raise InvalidMoveError(
            f"Cannot take your own piece on {to_square.to_algebraic()}"
        )
    return MoveType.CAPTURE


def _assert_path_clear(from_square: Square, to_square: Square, board: Board) -> None:
    """
    Raycasting
    ---

    Walk from the starting square towards the target square (exclusive on both ends) and make sure nothing is in the way.
    Only sensible for moves along a straight line or a diagonal.
    """
    df = _sign(to_square.file - from_square.file)
    dr = _sign(to_square.rank - from_square.rank)
    square = from_square.offset(df, dr)
    while square != to_square:
        if not board.is_empty(square):
            raise InvalidMoveError(
                f"Path from {from_square.to_algebraic()} to {to_square.to_algebraic()} is blocked on {square.to_algebraic()}"
            )
        square = square.offset(df, dr)


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def _deltas(from_square: Square, to_square: Square) -> Vector:
    return to_square.file - from_square.file, to_square.rank - from_square.rank


def _is_diagonal(df: int, dr: int) -> bool:
    return abs(df) == abs(dr)


def _is_straight(df: int, dr: int) -> bool:
    return df == 0 or dr == 0


# --- MOVEMENT RULES ---
def validate_knight_move(from_square: Square, to_square: Square, board: Board) -> MoveType:
    """Knights always move such that |delta_rank| + |delta_file| = 3 (and never in a straight line)"""
    _assert_on_board(from_square, to_square)
    df, dr = _deltas(from_square, to_square)
    if {abs(df), abs(dr)} != {1, 2}:
        raise InvalidMoveError("Knights move in an L-shape")
    return _target_type(from_square, to_square, board)


def validate_bishop_move(from_square: Square, to_square: Square, board: Board) -> MoveType:
    """Bishops move diagonally: |delta_rank| = |delta_file|"""
    _assert_on_board(from_square, to_square)
    if not _is_diagonal(*_deltas(from_square, to_square)):
        raise InvalidMoveError("Bishops move diagonally")
    _assert_path_clear(from_square, to_square, board)
    return _target_type(from_square, to_square, board)


def validate_rook_move(from_square: Square, to_square: Square, board: Board) -> MoveType:
    """Rooks move either horizontally or vertically"""
    _assert_on_board(from_square, to_square)
    if not _is_straight(*_deltas(from_square, to_square)):
        raise InvalidMoveError("Rooks move along a rank or a file")
    _assert_path_clear(from_square, to_square, board)
    return _target_type(from_square, to_square, board)


def validate_queen_move(from_square: Square, to_square: Square, board: Board) -> MoveType:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    _assert_on_board(from_square, to_square)
    df, dr = _deltas(from_square, to_square)
    if not (_is_straight(df, dr) or _is_diagonal(df, dr)):
        raise InvalidMoveError("Queens move along a rank, a file or a diagonal")
    _assert_path_clear(from_square, to_square, board)
    return _target_type(from_square, to_square, board)


def validate_king_move(from_square: Square, to_square: Square, board: Board) -> MoveType:
    """
    The king can move by a single square at the time.

    Castling is modelled as a special king move: two squares towards one of its own rooks.
    """
    _assert_on_board(from_square, to_square)
    df, dr = _deltas(from_square, to_square)
    if max(abs(df), abs(dr)) == 1:
        return _target_type(from_square, to_square, board)
    if abs(df) == 2 and dr == 0:
        _assert_castling_allowed(from_square, to_square, board)
        return MoveType.CASTLING
    raise InvalidMoveError("Kings move by a single square (or two when castling)")


def validate_pawn_move(from_square: Square, to_square: Square, board: Board) -> MoveType:
    """
    A pawn:
    - moves by a single square forward, onto an empty square.
    - It can move by two in their first move (so when on their starting rank), if both squares are empty
    - takes diagonally
    - takes en passant: diagonally onto an empty square, right after an opponent's pawn passed by with a two-square advance
    """
    _assert_on_board(from_square, to_square)
    pawn = _moving_piece(from_square, board)
    # White moves up the board, Black moves down the board
    forward = 1 if pawn.color == Color.WHITE else -1
    starting_rank = HOME_RANK[pawn.color] + forward
    df, dr = _deltas(from_square, to_square)

    if df == 0 and dr == forward:
        _assert_empty(to_square, board)
        return MoveType.ATTACK

    if df == 0 and dr == 2 * forward and from_square.rank == starting_rank:
        _assert_empty(from_square.offset(0, forward), board)
        _assert_empty(to_square, board)
        return MoveType.ATTACK

    if abs(df) == 1 and dr == forward:
        if board.is_empty(to_square):
            if _is_en_passant(from_square, to_square, pawn, board):
                return MoveType.EN_PASSANT
            raise InvalidMoveError("Pawns only move diagonally when taking a piece")
        return _target_type(from_square, to_square, board)

    raise InvalidMoveError("Pawns move forward (and take diagonally)")


def _assert_empty(square: Square, board: Board) -> None:
    if not board.is_empty(square):
        raise InvalidMoveError(f"Pawn is blocked on {square.to_algebraic()}")


def _is_en_passant(from_square: Square, to_square: Square, pawn: Piece, board: Board) -> bool:
    """The previous move must be a two-square advance of an opponent's pawn that landed right next to the capturing pawn"""
    last_move = board.last_move
    if last_move is None:
        return False
    passed_pawn = Piece(PieceType.PAWN, opponent(pawn.color))
    two_square_advance = abs(last_move.to_square.rank - last_move.from_square.rank) == 2
    lands_beside = last_move.to_square == Square(to_square.file, from_square.rank)
    return last_move.moved_piece == passed_pawn and two_square_advance and lands_beside


# --- CASTLING ---
def _assert_castling_allowed(king_from: Square, king_to: Square, board: Board) -> None:
    """
    **you are allowed to castle if**

    * king and rook are on their starting squares
    * the king never moved, and the rook never moved (or was taken and replaced by a different one)
    * all squares in between king and rook are empty

    NOTE: Castling rights are derived from the move history on every call (nothing is cached).
    The rules about being in check / passing an attacked square are checked by the validator.
    """
    direction = find_castling_direction(king_from, king_to)
    king = _moving_piece(king_from, board)
    if direction is None or not direction.name.startswith(king.color.name):
        raise InvalidMoveError(
            f"No castling move from {king_from.to_algebraic()} to {king_to.to_algebraic()}"
        )
    squares = CASTLING_RULES[direction]
    if board.piece(squares.rook_from) != Piece(PieceType.ROOK, king.color):
        raise InvalidMoveError(f"No rook to castle with on {squares.rook_from.to_algebraic()}")

    for move in board.move_history:
        if move.moved_piece == king:
            raise InvalidMoveError("Cannot castle after the king has moved")
        if squares.rook_from in (move.from_square, move.to_square):
            raise InvalidMoveError("Cannot castle with a rook that has moved")

    if any(not board.is_empty(square) for square in squares.between()):
        raise InvalidMoveError("Cannot castle through other pieces")


# -- STRATEGY PATTERN: MOVEMENT RULES ---
MoveStrategyFn = Callable[[Square, Square, Board], MoveType]
MOVEMENT_STRATEGIES: dict[PieceType, MoveStrategyFn] = {
    PieceType.PAWN: validate_pawn_move,
    PieceType.KNIGHT: validate_knight_move,
    PieceType.BISHOP: validate_bishop_move,
    PieceType.ROOK: validate_rook_move,
    PieceType.QUEEN: validate_queen_move,
    PieceType.KING: validate_king_move,
}


def find_validation_strategy(piece_type: PieceType) -> MoveStrategyFn:
    """Every piece type has a strategy. A missing one is a bug, so the KeyError is allowed to surface."""
    return MOVEMENT_STRATEGIES[piece_type]
