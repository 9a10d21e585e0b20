"""
Custom exceptions shared by all layers.

Everything derives from GameError, so the service (or whoever sits on top of it) can catch a single type.
"""


class GameError(Exception):
    """Base class for anything that went wrong while playing a game of the Amazons."""


class IllegalMoveError(GameError):
    """The requested move breaks the rules in the current position."""


class NotYourTurnError(GameError):
    """A player (or the computer) tried to act while the other side is to move."""


class GameStateError(GameError):
    """The action is not allowed given the status of the game (or the stored game data is inconsistent)."""


class InvalidNotationError(GameError):
    """Square, move or position notation could not be parsed."""


class InvalidRequestError(GameError):
    """Request data failed validation before it reached the domain layer."""


class RepositoryError(GameError):
    """Persistence layer could not find (or store) the requested game."""


class SearchError(GameError):
    """The search engine was asked for a move in a position that has none."""
