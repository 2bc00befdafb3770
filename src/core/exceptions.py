"""
Custom exceptions shared across layers.

Every error raised by the domain inherits from GameError, so the Service (and anything above it) can catch a single type.
"""


class GameError(Exception):
    """Base class of all chess domain errors."""


class IllegalMoveError(GameError):
    """The requested move cannot be played."""


class InvalidMoveError(IllegalMoveError):
    """
    The move violates the movement rules of the piece on the starting square:
    wrong geometry, blocked path, own piece on the target square, or no piece to move at all.
    """


class NotYourTurnError(InvalidMoveError):
    """The piece on the starting square belongs to the player that is not to move."""


class KingInCheckError(IllegalMoveError):
    """The move would leave (or castle out of / through) a check on the mover's own king."""


class GameStateError(GameError):
    """Stored game data cannot be turned back into a Game."""


class InvalidRequestError(Exception):
    """Request data did not pass validation at the boundary."""


class RepositoryError(Exception):
    """Record could not be found / stored."""
