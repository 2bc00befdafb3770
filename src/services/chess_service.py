"""Orchestration of communication from API models to the engine and persistence layers (and the reverse direction)."""

import logging
from uuid import UUID

from src.api.models import (
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveRequest,
    MoveResponse,
)
from src.core.exceptions import RepositoryError
from src.core.models import GameModel
from src.core.shared_types import Color, MoveKind
from src.db.repository import GameRepository
from src.engine.game import STATE_TO_STATUS, Game
from src.engine.moves import Move
from src.engine.square import Square

logger = logging.getLogger(__name__)


class ChessService:
    """Orchestration of layers for chess game."""

    def __init__(self, repository: GameRepository) -> None:
        self.repo = repository

    # -- API routes logic ---
    def create_new_game(self, request: CreateGameRequest) -> GameResponse:
        """Create a new game (from the starting position, or after the supplied moves)."""

        # Replaying validates the supplied moves
        game = Game.from_uci(request.moves_uci)
        game.update_board_state()

        stored_game, game_id = self.repo.create_game(game.to_model())
        logger.info("Created game %s after %d moves", game_id, len(stored_game.moves_uci))
        return self._create_game_response(game_id, game)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by frontend to check when it is the player's turn for instance.
        """
        game = Game.from_model(self._fetch_game(request.game_id))
        return self._create_game_response(request.game_id, game)

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """retrieve set of legal moves for the player to move."""
        game = Game.from_model(self._fetch_game(request.game_id))
        return LegalMovesResponse(
            game_id=request.game_id,
            color=Color[game.color_to_move.name],
            legal_moves=[move.to_uci() for move in game.legal_moves()],
        )

    def make_move(self, request: MoveRequest) -> GameResponse:
        """Make a move attempt. Engine errors (illegal move, not your turn) propagate to the caller."""

        # Create a new Game instance from the retrieved GameModel
        game = Game.from_model(self._fetch_game(request.game_id))

        # Attempt the move
        move = game.perform_move(
            Square.from_algebraic(request.from_square),
            Square.from_algebraic(request.to_square),
        )
        game.update_board_state()

        # store in repository
        self.repo.update_game(request.game_id, game.to_model())
        logger.info(
            "Game %s: %s played, status %s",
            request.game_id,
            move.to_uci(),
            STATE_TO_STATUS[game.board.state],
        )
        return self._create_game_response(request.game_id, game)

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        if self.repo.delete_game(request.game_id) is None:
            raise RepositoryError(f"Game with game_id={request.game_id} not found.")
        logger.info("Deleted game %s", request.game_id)

    # -- Internal helpers --
    def _create_game_response(self, game_id: UUID, game: Game) -> GameResponse:
        """Convert the Game into a GameResponse (for game with given ID.)"""
        last_move = game.board.last_move
        return GameResponse(
            game_id=game_id,
            position=game.board.to_fen(),
            color_to_move=Color[game.color_to_move.name],
            status=STATE_TO_STATUS[game.board.state],
            move_history=[move.to_uci() for move in game.moves],
            last_move=self._create_move_response(last_move) if last_move else None,
            threefold_repetition=game.check_threefold_repetition_rule(),
            fifty_move_rule=game.check_fifty_move_rule(),
        )

    def _create_move_response(self, move: Move) -> MoveResponse:
        return MoveResponse(
            uci=move.to_uci(),
            piece=move.moved_piece.type.name.lower(),
            color=Color[move.moved_piece.color.name],
            kind=MoveKind[move.type.name],
        )

    def _fetch_game(self, game_id: UUID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game_model
