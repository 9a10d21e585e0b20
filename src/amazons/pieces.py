"""Defines what can occupy a square"""

from enum import Enum, auto
from typing import Self


class Piece(Enum):
    WHITE = auto()
    BLACK = auto()
    EMPTY = auto()
    SPEAR = auto()

    @classmethod
    def from_char(cls, character: str) -> Self:
        return CHAR_TO_PIECE[character]

    def to_char(self) -> str:
        return PIECE_TO_CHAR[self]

    @property
    def is_player(self) -> bool:
        return self in (Piece.WHITE, Piece.BLACK)

    def opponent(self) -> "Piece":
        """WHITE <-> BLACK. Empty squares and spears have no opponent."""
        if self == Piece.WHITE:
            return Piece.BLACK
        if self == Piece.BLACK:
            return Piece.WHITE
        raise ValueError(f"{self.name} is not a player piece and has no opponent.")


# Used in position notation and in the text rendering of the board
CHAR_TO_PIECE: dict[str, Piece] = {
    "W": Piece.WHITE,
    "B": Piece.BLACK,
    "S": Piece.SPEAR,
    "-": Piece.EMPTY,
}

PIECE_TO_CHAR: dict[Piece, str] = {value: key for key, value in CHAR_TO_PIECE.items()}
