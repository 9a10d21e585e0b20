"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass

# Type aliases to make GameModel easier to read
PieceColor = str
PlayerName = str


@dataclass
class GameModel:
    """Transport-safe representation of a game of the Amazons used between API, Service, DB, and Game layers.

    `position` is the current position notation (for display / quick inspection),
    `moves` is the full list of moves in move notation (from which the Game rebuilds its board and undo history).
    """

    position: str
    moves: list[str]
    registered_players: dict[PieceColor, PlayerName]
    status: str
