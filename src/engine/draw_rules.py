"""
Rules that end the game in a draw without checkmate / stalemate:

* Threefold repetition: the same position occurs for the third time.
* Fifty-move rule: fifty moves by each player (100 half-moves) without a pawn move or a capture.
"""

from src.engine.board import Board
from src.engine.moves import MoveType
from src.engine.pieces import PieceType

FIFTY_MOVE_WINDOW = 100  # half-moves
REPETITIONS_FOR_DRAW = 3


def last_non_attack_move_index(board: Board) -> int:
    """
    Index of the last capture / castling / en passant in the history (-1 if there is none).

    Positions before such a move can never come back (material or castling rights changed), so they need not be compared.
    """
    for index in range(len(board.move_history) - 1, -1, -1):
        if board.move_history[index].type != MoveType.ATTACK:
            return index
    return -1


def threefold_repetition(board: Board) -> bool:
    """
    Replay the game on a separate board and count how often the current placement shows up.
    ----

    1. Simulate all moves up to and including the last non-attack move (skipping the comparisons there)
    2. From there on, compare the simulated placement with the current one after every move
    3. The current position itself is the last comparison, so it is counted as well

    NOTE: Positions are compared by placement of the pieces only (not by side to move or castling rights).
    """
    window_start = last_non_attack_move_index(board) + 1
    simulated = Board(position=dict(board.initial_position or {}))
    simulated.commit_all(board.move_history[:window_start])

    current = board.position
    occurrences = int(simulated.position == current)
    for move in board.move_history[window_start:]:
        simulated.commit(move)
        if simulated.position == current:
            occurrences += 1

    return occurrences >= REPETITIONS_FOR_DRAW


def fifty_move_rule(board: Board) -> bool:
    """
    The last 100 half-moves must all be regular advances (no capture, castling or en passant) of pieces other than pawns.
    """
    if len(board.move_history) < FIFTY_MOVE_WINDOW:
        return False

    return all(
        move.type == MoveType.ATTACK and move.moved_piece.type != PieceType.PAWN
        for move in board.move_history[-FIFTY_MOVE_WINDOW:]
    )
