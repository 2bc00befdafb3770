"""
The Game class will be the entrypoint into the engine for the service layer.
It owns one Board and is responsible for orchestrating the rules required to play a turn:
validating a move, committing it, and evaluating the position afterwards (check / mate / draws).
"""

import logging
from typing import Optional, Self

from src.core.exceptions import GameStateError, InvalidMoveError, NotYourTurnError
from src.core.models import GameModel
from src.core.shared_types import BoardStatus
from src.engine.board import Board
from src.engine.draw_rules import fifty_move_rule, threefold_repetition
from src.engine.moves import BoardState, Move
from src.engine.pieces import Color
from src.engine.square import Square
from src.engine.validator import (
    has_legal_move,
    is_king_in_check,
    legal_moves,
    validate_legal_move,
)

logger = logging.getLogger(__name__)

STATE_TO_STATUS: dict[BoardState, BoardStatus] = {
    BoardState.REGULAR: BoardStatus.REGULAR,
    BoardState.CHECK: BoardStatus.CHECK,
    BoardState.CHECK_MATE: BoardStatus.CHECK_MATE,
    BoardState.STALE_MATE: BoardStatus.STALE_MATE,
}


class Game:
    def __init__(self, board: Optional[Board] = None) -> None:
        self.board = board if board is not None else Board.starting_position()

    @classmethod
    def from_moves(cls, moves: list[Move]) -> Self:
        """Replay recorded moves from the starting position. They were validated when first played, so they are only committed."""
        board = Board.starting_position()
        board.commit_all(moves)
        return cls(board)

    @classmethod
    def from_uci(cls, moves_uci: list[str]) -> Self:
        """Replay moves written as 'e2e4', validating every one of them on the way."""
        game = cls()
        for uci in moves_uci:
            from_square = Square.from_algebraic(uci[:2])
            to_square = Square.from_algebraic(uci[2:4])
            game.perform_move(from_square, to_square)
        return game

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """Define how to construct a Game from the information the Service layer actually has"""
        if model.status not in {status.value for status in BoardStatus}:
            raise GameStateError(
                f"Invalid status: {model.status!r}. \nPick one from {', '.join(BoardStatus)}"
            )
        game = cls.from_uci(model.moves_uci)
        game.update_board_state()
        return game

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""
        return GameModel(
            moves_uci=[move.to_uci() for move in self.board.move_history],
            status=STATE_TO_STATUS[self.board.state],
        )

    # --- ENGINE API CALLED BY SERVICE ---
    @property
    def color_to_move(self) -> Color:
        """White moves first, after that the players alternate"""
        return Color.WHITE if len(self.board.move_history) % 2 == 0 else Color.BLACK

    @property
    def moves(self) -> list[Move]:
        return self.board.move_history

    def perform_move(self, from_square: Square, to_square: Square) -> Move:
        """
        Attempt to make a move
        -----

        1. there must be a piece of the player to move on the starting square
        2. the move has to follow the rules of the piece, and cannot leave your king in check
        3. update the board (the board also takes care of castling, en passant and promotion)
        """
        piece = self.board.piece(from_square)
        if piece is None:
            raise InvalidMoveError(f"No piece to move on {from_square.to_algebraic()}")
        if piece.color != self.color_to_move:
            raise NotYourTurnError(
                f"It is not your turn. Waiting for {self.color_to_move.name.lower()} to make a move first."
            )

        move = validate_legal_move(self.board, from_square, to_square)
        self.board.commit(move)
        logger.debug("Performed %s, history has %d moves", move.to_uci(), len(self.moves))
        return move

    def legal_moves(self) -> list[Move]:
        """All moves the player to move can make."""
        return list(legal_moves(self.board, self.color_to_move))

    def update_board_state(self) -> BoardState:
        """
        Evaluate the position for the player to move, and store the result on the board.

        | in check | any legal move | state      |
        |----------|----------------|------------|
        | yes      | yes            | CHECK      |
        | yes      | no             | CHECK_MATE |
        | no       | yes            | REGULAR    |
        | no       | no             | STALE_MATE |
        """
        color = self.color_to_move
        in_check = is_king_in_check(self.board, color)
        can_move = has_legal_move(self.board, color)

        if in_check:
            state = BoardState.CHECK if can_move else BoardState.CHECK_MATE
        else:
            state = BoardState.REGULAR if can_move else BoardState.STALE_MATE

        if state != self.board.state:
            logger.debug("Board state %s -> %s", self.board.state.name, state.name)
        self.board.state = state
        return state

    def check_threefold_repetition_rule(self) -> bool:
        repeated = threefold_repetition(self.board)
        if repeated:
            logger.info("Threefold repetition after %d half-moves", len(self.moves))
        return repeated

    def check_fifty_move_rule(self) -> bool:
        reached = fifty_move_rule(self.board)
        if reached:
            logger.info("Fifty-move rule reached after %d half-moves", len(self.moves))
        return reached
