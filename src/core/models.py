"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Both the API layer (higher) and the db / engine layers (lower) use the model defined here to send to/receive from the Service.
A game is fully described by the ordered list of moves played from the standard starting position,
everything else (the board, castling rights, en passant options) is recomputed by the engine when replaying it.
"""

from dataclasses import dataclass, field

from src.core.shared_types import BoardStatus


@dataclass
class GameModel:
    """Transport-safe representation of a chess game used between API, Service, DB, and Engine layers."""

    moves_uci: list[str] = field(default_factory=list)
    status: str = BoardStatus.REGULAR
