"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

import os
from typing import Callable, Generator

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

# Importing src.db.database creates its tables right away: keep that away from the local database file
os.environ["CHESS_DATABASE_URL"] = "sqlite:///:memory:"

from src.db.schema import Base
from src.engine.game import Game
from src.engine.square import Square

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)


@pytest.fixture
def db_session_repo() -> Generator[Session, None, None]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        Base.metadata.drop_all(bind=engine)
        db.close()


@pytest.fixture
def play() -> Callable[[Game, list[str]], None]:
    """Call the inner function with a game and a list of moves like ["e2e4", "e7e5"] to play them one by one."""

    def _play(game: Game, moves_uci: list[str]) -> None:
        for uci in moves_uci:
            game.perform_move(Square.from_algebraic(uci[:2]), Square.from_algebraic(uci[2:]))

    return _play
