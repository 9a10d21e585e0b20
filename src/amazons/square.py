"""
A square on the board, plus the queen-move geometry every other module relies on.

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, Optional

from src.core.exceptions import InvalidNotationError

# The Amazons board is always 10x10.
BOARD_SIZE = 10

COLUMN_NAMES = "abcdefghij"
ALGEBRAIC_PATTERN = re.compile(r"^([a-j])(10|[1-9])$")

Vector = tuple[int, int]

# Fixed ordering 0..7: E, NE, N, NW, W, SW, S, SE
DIRECTIONS: tuple[Vector, ...] = (
    (1, 0),
    (1, 1),
    (0, 1),
    (-1, 1),
    (-1, 0),
    (-1, -1),
    (0, -1),
    (1, -1),
)


@dataclass(frozen=True, slots=True)
class Square:
    col: int
    row: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Algebraic notation: 'a1' - 'j10' get converted to (0,0) - (9,9)"""
        match = ALGEBRAIC_PATTERN.match(sq)
        if match is None:
            raise InvalidNotationError(f"Cannot interpret {sq!r} as a square.")
        col = COLUMN_NAMES.index(match.group(1))
        row = int(match.group(2)) - 1
        return cls(col, row)

    def to_algebraic(self) -> str:
        return f"{COLUMN_NAMES[self.col]}{self.row + 1}"

    @property
    def index(self) -> int:
        """Position in a flat, row-major array of all squares."""
        return self.row * BOARD_SIZE + self.col

    def is_within_bounds(self) -> bool:
        return (0 <= self.col < BOARD_SIZE) and (0 <= self.row < BOARD_SIZE)

    def queen_move(self, direction: int, steps: int) -> Optional[Square]:
        """
        The square `steps` units away along one of the 8 DIRECTIONS.

        Returns None if that lands off the board. Zero steps is the square itself.
        """
        dc, dr = DIRECTIONS[direction]
        col = self.col + dc * steps
        row = self.row + dr * steps
        if not ((0 <= col < BOARD_SIZE) and (0 <= row < BOARD_SIZE)):
            return None
        return Square(col, row)

    def is_queen_move(self, other: Square) -> bool:
        """Same rank, file or diagonal (but not the same square)."""
        if self == other:
            return False
        dc = other.col - self.col
        dr = other.row - self.row
        return dc == 0 or dr == 0 or abs(dc) == abs(dr)

    def direction(self, other: Square) -> int:
        """Index into DIRECTIONS pointing from this square towards `other`."""
        if not self.is_queen_move(other):
            raise ValueError(
                f"{other.to_algebraic()} is not a queen move away from {self.to_algebraic()}"
            )
        step = (_sign(other.col - self.col), _sign(other.row - self.row))
        return DIRECTIONS.index(step)

    def distance(self, other: Square) -> int:
        """Number of king steps between the two squares (equals the queen-move step count along a line)."""
        return max(abs(other.col - self.col), abs(other.row - self.row))

    def is_adjacent(self, other: Square) -> bool:
        return self.distance(other) == 1


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


# Row-major: a1, b1, ..., j1, a2, ..., j10. Move generation relies on this order.
ALL_SQUARES: tuple[Square, ...] = tuple(
    Square(col, row) for row in range(BOARD_SIZE) for col in range(BOARD_SIZE)
)


def all_squares() -> Iterator[Square]:
    """Fresh iterator over every square of the board, in row-major order."""
    return iter(ALL_SQUARES)
