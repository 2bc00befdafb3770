"""
Type definitions used across layers
"""

from enum import StrEnum


# --- NOTE: the engine has its own Enums (src/engine/pieces.py, src/engine/moves.py).
# --- These are the string versions used by the API / Service / DB layers, so those layers never depend on the engine's internals.


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"


class BoardStatus(StrEnum):
    REGULAR = "regular"
    CHECK = "check"
    CHECK_MATE = "check mate"
    STALE_MATE = "stale mate"


class MoveKind(StrEnum):
    ATTACK = "attack"
    CAPTURE = "capture"
    CASTLING = "castling"
    EN_PASSANT = "en passant"
