"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import BoardStatus, Color, MoveKind

FILES = "abcdefgh"
RANKS = "12345678"


def _is_algebraic_notation(value: str) -> bool:
    return len(value) == 2 and value[0] in FILES and value[1] in RANKS


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    """Start a new game. Optionally continue from a list of moves already played (ex. ["e2e4", "e7e5"])."""

    moves_uci: list[str] = []

    @field_validator("moves_uci")
    @classmethod
    def validate_moves(cls, value: list[str]) -> list[str]:
        for uci in value:
            if len(uci) != 4 or not (
                _is_algebraic_notation(uci[:2]) and _is_algebraic_notation(uci[2:])
            ):
                raise InvalidRequestError(f"Cannot interpret {uci!r} as a move.")
        return value


class MoveRequest(BaseModel):
    game_id: UUID
    from_square: str
    to_square: str

    @field_validator(*["from_square", "to_square"])
    @classmethod
    def validate_square(cls, value: str) -> str:
        if not _is_algebraic_notation(value):
            raise InvalidRequestError(
                f"Cannot interpret {value!r} as a valid square name."
            )
        return value


class GetGameRequest(BaseModel):
    game_id: UUID


class LegalMovesRequest(BaseModel):
    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class MoveResponse(BaseModel):
    uci: str
    piece: str
    color: Color
    kind: MoveKind


class GameResponse(BaseModel):
    game_id: UUID
    position: str
    color_to_move: Color
    status: BoardStatus
    move_history: list[str]
    last_move: Optional[MoveResponse] = None
    threefold_repetition: bool = False
    fifty_move_rule: bool = False


class LegalMovesResponse(BaseModel):
    game_id: UUID
    color: Color
    legal_moves: list[str]
