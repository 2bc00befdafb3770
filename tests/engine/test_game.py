"""Unit tests for /src/engine/game.py"""

from typing import Callable

import pytest

from src.core.exceptions import (
    GameError,
    GameStateError,
    InvalidMoveError,
    KingInCheckError,
    NotYourTurnError,
)
from src.core.models import GameModel
from src.core.shared_types import BoardStatus
from src.engine.board import Board
from src.engine.game import Game
from src.engine.moves import BoardState, MoveType
from src.engine.pieces import Color, Piece, PieceType
from src.engine.square import Square

PlayFn = Callable[[Game, list[str]], None]

FOOLS_MATE = ["f2f3", "e7e5", "g2g4", "d8h4"]
SCHOLARS_MATE = ["e2e4", "e7e5", "f1c4", "b8c6", "d1h5", "g8f6", "h5f7"]
KNIGHT_SHUFFLE = ["g1f3", "g8f6", "f3g1", "f6g8"]


def sq(name: str) -> Square:
    return Square.from_algebraic(name)


# -- CREATION LOGIC --
def test_new_game_starts_in_starting_position() -> None:
    game = Game()
    assert game.board == Board.starting_position()
    assert game.moves == []
    assert game.color_to_move == Color.WHITE


def test_game_from_uci() -> None:
    game = Game.from_uci(["e2e4", "e7e5"])
    assert game.board.piece(sq("e4")) == Piece.from_fen("P")
    assert game.board.piece(sq("e5")) == Piece.from_fen("p")
    assert game.color_to_move == Color.WHITE


def test_game_from_uci_rejects_illegal_moves() -> None:
    with pytest.raises(InvalidMoveError):
        Game.from_uci(["e2e5"])


def test_replay_reproduces_position(play: PlayFn) -> None:
    """Committing recorded moves gives the same placement as performing them one by one"""
    game = Game()
    play(game, ["e2e4", "d7d5", "e4d5", "d8d5", "b1c3", "d5a5", "g1f3", "c8g4", "f1e2", "b8c6", "e1g1"])
    replayed = Game.from_moves(game.moves)
    assert replayed.board.position == game.board.position
    assert replayed.moves == game.moves


def test_model_roundtrip(play: PlayFn) -> None:
    game = Game()
    play(game, FOOLS_MATE)
    game.update_board_state()
    model = game.to_model()
    assert model == GameModel(moves_uci=FOOLS_MATE, status=BoardStatus.CHECK_MATE)

    restored = Game.from_model(model)
    assert restored.board.position == game.board.position
    assert restored.board.state == BoardState.CHECK_MATE


def test_invalid_status_in_model() -> None:
    with pytest.raises(GameStateError):
        Game.from_model(GameModel(moves_uci=[], status="not existing"))


# -- PERFORMING MOVES --
def test_perform_move_returns_move() -> None:
    game = Game()
    move = game.perform_move(sq("e2"), sq("e4"))
    assert move.type == MoveType.ATTACK
    assert move.moved_piece == Piece(PieceType.PAWN, Color.WHITE)
    assert game.moves == [move]
    assert game.color_to_move == Color.BLACK


@pytest.mark.parametrize("from_name", ["e4", "a3", "h6"])
def test_perform_move_from_empty_square(from_name: str) -> None:
    game = Game()
    with pytest.raises(InvalidMoveError):
        game.perform_move(sq(from_name), sq("e5"))


def test_perform_move_out_of_turn() -> None:
    game = Game()
    with pytest.raises(NotYourTurnError):
        game.perform_move(sq("e7"), sq("e5"))
    # still a subtype of the generic invalid move
    with pytest.raises(InvalidMoveError):
        game.perform_move(sq("e7"), sq("e5"))


def test_failed_move_leaves_board_untouched() -> None:
    game = Game()
    with pytest.raises(GameError):
        game.perform_move(sq("a1"), sq("a5"))
    assert game.board == Board.starting_position()


def test_perform_move_rejects_self_check(play: PlayFn) -> None:
    """Bishop on b5 gives check: black has to deal with it first"""
    game = Game()
    play(game, ["e2e4", "d7d6", "f1b5"])
    # black is in check, moving something unrelated is not allowed
    with pytest.raises(KingInCheckError):
        game.perform_move(sq("a7"), sq("a6"))
    # blocking is fine
    assert game.perform_move(sq("c7"), sq("c6")).type == MoveType.ATTACK


def test_en_passant_in_game(play: PlayFn) -> None:
    game = Game()
    play(game, ["e2e4", "a7a6", "e4e5", "d7d5"])
    move = game.perform_move(sq("e5"), sq("d6"))
    assert move.type == MoveType.EN_PASSANT
    assert game.board.piece(sq("d5")) is None
    assert game.board.piece(sq("d6")) == Piece.from_fen("P")


def test_en_passant_only_right_away(play: PlayFn) -> None:
    game = Game()
    play(game, ["e2e4", "a7a6", "e4e5", "d7d5", "h2h3", "h7h6"])
    with pytest.raises(InvalidMoveError):
        game.perform_move(sq("e5"), sq("d6"))


def test_castling_in_game(play: PlayFn) -> None:
    game = Game()
    play(game, ["e2e4", "e7e5", "g1f3", "b8c6", "f1c4", "g8f6"])
    move = game.perform_move(sq("e1"), sq("g1"))
    assert move.type == MoveType.CASTLING
    assert game.board.piece(sq("g1")) == Piece.from_fen("K")
    assert game.board.piece(sq("f1")) == Piece.from_fen("R")
    assert game.board.piece(sq("h1")) is None


def test_promotion_in_game(play: PlayFn) -> None:
    game = Game()
    play(game, ["h2h4", "g7g5", "h4g5", "g8f6", "g5g6", "f6e4", "g6g7", "e4d6"])
    move = game.perform_move(sq("g7"), sq("h8"))
    assert move.type == MoveType.CAPTURE
    assert game.board.piece(sq("h8")) == Piece(PieceType.QUEEN, Color.WHITE)


# -- BOARD STATE --
def test_starting_position_is_regular() -> None:
    game = Game()
    assert game.update_board_state() == BoardState.REGULAR
    assert game.board.state == BoardState.REGULAR


def test_check(play: PlayFn) -> None:
    game = Game()
    play(game, ["e2e4", "f7f6", "d1h5"])
    assert game.update_board_state() == BoardState.CHECK
    assert game.board.state == BoardState.CHECK


@pytest.mark.parametrize("moves", [FOOLS_MATE, SCHOLARS_MATE])
def test_checkmate(play: PlayFn, moves: list[str]) -> None:
    game = Game()
    play(game, moves)
    assert game.update_board_state() == BoardState.CHECK_MATE
    assert game.legal_moves() == []


def test_stalemate() -> None:
    """White king in the corner, black queen on b3 covers every escape without giving check"""
    game = Game(Board.from_fen("7k/8/8/8/8/1q6/8/K7"))
    assert game.update_board_state() == BoardState.STALE_MATE


def test_legal_moves_for_player_to_move(play: PlayFn) -> None:
    game = Game()
    assert len(game.legal_moves()) == 20
    play(game, ["e2e4"])
    assert all(move.moved_piece.color == Color.BLACK for move in game.legal_moves())


# -- DRAW RULES --
def test_threefold_repetition(play: PlayFn) -> None:
    game = Game()
    play(game, KNIGHT_SHUFFLE)
    assert game.check_threefold_repetition_rule() is False
    play(game, KNIGHT_SHUFFLE)
    assert game.check_threefold_repetition_rule() is True


def test_fifty_move_rule(play: PlayFn) -> None:
    game = Game()
    play(game, KNIGHT_SHUFFLE * 24 + KNIGHT_SHUFFLE[:3])
    assert len(game.moves) == 99
    assert game.check_fifty_move_rule() is False
    play(game, KNIGHT_SHUFFLE[3:])
    assert game.check_fifty_move_rule() is True


def test_fifty_move_rule_reset_by_pawn(play: PlayFn) -> None:
    game = Game()
    black_first = ["g8f6", "g1f3", "f6g8", "f3g1"]
    play(game, ["e2e4"] + black_first * 24 + black_first[:3])
    assert len(game.moves) == 100
    assert game.check_fifty_move_rule() is False
    play(game, black_first[3:])
    assert game.check_fifty_move_rule() is True
