"""
Checking single moves against the rules
----

Three layers, each built on top of the previous one:

1. `validate_move()`: does the move follow the movement rules of the piece? (the strategies in src/engine/strategies.py)
2. `is_king_in_check()`: could any opponent's piece take the king right now? (probes layer 1 for every opponent's piece)
3. `validate_legal_move()`: layer 1, and the move does not leave (or put) your own king in check.

Probing is speculative: a rejected candidate is expected and simply skipped.
"""

from typing import Iterator

from src.core.exceptions import IllegalMoveError, InvalidMoveError, KingInCheckError
from src.engine.board import Board
from src.engine.castling import castling_passed_square
from src.engine.moves import Move, MoveType
from src.engine.pieces import Color, opponent
from src.engine.square import Square, all_squares
from src.engine.strategies import find_validation_strategy


def validate_move(board: Board, from_square: Square, to_square: Square) -> Move:
    """Find the piece, ask its strategy what kind of move this is and package it into a Move. Never changes the board."""
    piece = board.piece(from_square)
    if piece is None:
        raise InvalidMoveError(f"No piece to move on {from_square.to_algebraic()}")

    strategy = find_validation_strategy(piece.type)
    move_type = strategy(from_square, to_square, board)
    return Move(from_square, to_square, piece, move_type)


def is_king_in_check(board: Board, color: Color) -> bool:
    """True if any of the opponent's pieces could capture the king of `color`. No king on the board: not in check."""
    king_square = board.find_king(color)
    if king_square is None:
        return False
    return is_square_attacked(board, king_square, opponent(color))


def is_square_attacked(board: Board, square: Square, by_color: Color) -> bool:
    """
    Could a piece of `by_color` capture on the (occupied) square?

    Stops at the first piece that can.
    """
    for attacker_square in board.locate_color(by_color):
        try:
            probe = validate_move(board, attacker_square, square)
        except IllegalMoveError:
            continue
        if probe.type == MoveType.CAPTURE:
            return True
    return False


def validate_legal_move(board: Board, from_square: Square, to_square: Square) -> Move:
    """
    Validate, then probe, then (the caller can) commit
    ----

    1. The move must follow the movement rules of the piece
    2. Make the move on a copy of the board
    3. The mover's king may not be in check on that copy

    For castling: you cannot castle out of check, nor through a square that is under attack.
    """
    move = validate_move(board, from_square, to_square)
    color = move.moved_piece.color

    if move.type == MoveType.CASTLING:
        _assert_safe_castling(board, move)

    scratch = board.copy()
    scratch.commit(move)
    if is_king_in_check(scratch, color):
        raise KingInCheckError(
            f"Move {move.to_uci()} leaves the {color.name.lower()} king in check"
        )
    return move


def _assert_safe_castling(board: Board, move: Move) -> None:
    color = move.moved_piece.color
    if is_king_in_check(board, color):
        raise KingInCheckError("Cannot castle out of check")

    passing = castling_passed_square(move.from_square, move.to_square)

    # put the king on the square it passes over, and see if it would be in check there
    scratch = board.copy()
    scratch.remove_piece(move.from_square)
    scratch.place_piece(move.moved_piece, passing)
    if is_king_in_check(scratch, color):
        raise KingInCheckError(
            f"Cannot castle through the attacked square {passing.to_algebraic()}"
        )


def legal_moves(board: Board, color: Color) -> Iterator[Move]:
    """
    Every legal move for the player with the `color` pieces.
    ---

    Brute force: for each of your pieces, try every square of the board as a target.
    """
    targets = all_squares()
    for piece_square in board.locate_color(color):
        for target_square in targets:
            try:
                move = validate_legal_move(board, piece_square, target_square)
            except IllegalMoveError:
                continue
            yield move


def has_legal_move(board: Board, color: Color) -> bool:
    return next(legal_moves(board, color), None) is not None
