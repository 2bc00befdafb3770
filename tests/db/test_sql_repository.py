"""Unit tests for src/db/sql_repository.py"""

from uuid import uuid4

from sqlalchemy.orm import Session

from src.core.shared_types import BoardStatus
from src.db.sql_repository import GameModel, SQLGameRepository


def test_create_game(db_session_repo: Session) -> None:
    """Conversion from a GameModel to DBGame for a new entry to the database."""
    model = GameModel(moves_uci=["e2e4", "e7e5", "g1f3"], status=BoardStatus.REGULAR)

    repo = SQLGameRepository(db_session_repo)
    record_in_db, _ = repo.create_game(model)
    assert isinstance(record_in_db, GameModel)
    assert record_in_db == model


def test_get_game_by_id(db_session_repo: Session) -> None:
    """Create a game, then fetch it from db."""
    model = GameModel(moves_uci=["f2f3", "e7e5", "g2g4", "d8h4"], status=BoardStatus.CHECK_MATE)

    repo = SQLGameRepository(db_session_repo)
    expected_game, game_id = repo.create_game(model)
    game_found = repo.get_game(game_id)
    assert isinstance(game_found, GameModel)
    assert game_found == expected_game


def test_get_unknown_game(db_session_repo: Session) -> None:
    """
    Should return None if ID does not match anything in database.

    NOTE with an empty database, any id is a valid test case.
    """
    repo = SQLGameRepository(db_session_repo)
    assert repo.get_game(uuid4()) is None

    # Now do it with creating a game, but retrieving from the wrong ID
    repo.create_game(GameModel())
    assert repo.get_game(uuid4()) is None


def test_update_game(db_session_repo: Session) -> None:
    """Update an earlier created record: the stored move list gets replaced."""
    repo = SQLGameRepository(db_session_repo)
    _, game_id = repo.create_game(GameModel())

    updated = GameModel(moves_uci=["e2e4", "f7f6", "d1h5"], status=BoardStatus.CHECK)
    record = repo.update_game(game_id, updated)
    assert record == updated
    assert repo.get_game(game_id) == updated

    # and once more (appending to the list)
    updated_again = GameModel(moves_uci=updated.moves_uci + ["g7g6"], status=BoardStatus.REGULAR)
    repo.update_game(game_id, updated_again)
    assert repo.get_game(game_id) == updated_again


def test_update_unknown_game(db_session_repo: Session) -> None:
    repo = SQLGameRepository(db_session_repo)
    assert repo.update_game(uuid4(), GameModel()) is None


def test_delete_game(db_session_repo: Session) -> None:
    repo = SQLGameRepository(db_session_repo)
    model = GameModel(moves_uci=["d2d4"], status=BoardStatus.REGULAR)
    _, game_id = repo.create_game(model)

    deleted = repo.delete_game(game_id)
    assert deleted == model
    assert repo.get_game(game_id) is None
    assert repo.delete_game(game_id) is None
