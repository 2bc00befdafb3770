"""Settings read from the environment (with defaults that work for local development)."""

import os

DATABASE_URL = os.getenv("CHESS_DATABASE_URL", "sqlite:///chess_games.db")
SQL_ECHO = os.getenv("CHESS_SQL_ECHO", "false").lower() in ("1", "true", "yes")
