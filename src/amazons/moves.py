"""
Geometry of a compound move (queen move + spear throw) and the lazy move generators.

Key idea: every Amazons move is two raycasts. First the queen slides along a line until it hits something,
then, from where it landed, the spear flies along a line until it hits something.
The square the queen just left counts as empty for the second raycast.

Legality of a single given move is checked by the Board.
"""

import re
from dataclasses import dataclass
from typing import Iterator, Optional, Protocol, Self

from src.amazons.pieces import Piece
from src.amazons.square import ALL_SQUARES, DIRECTIONS, Square
from src.core.exceptions import InvalidNotationError

MOVE_PATTERN = re.compile(
    r"^(?P<from>[a-j](?:10|[1-9]))-(?P<to>[a-j](?:10|[1-9]))\((?P<spear>[a-j](?:10|[1-9]))\)$"
)


class Board(Protocol):
    """Just the parts the move generators need"""

    def piece(self, square: Square) -> Piece: ...


@dataclass(frozen=True, slots=True)
class Move:
    """The queen on `from_square` moves to `to_square` and throws a spear to `spear`"""

    from_square: Square
    to_square: Square
    spear: Square

    @classmethod
    def from_notation(cls, notation: str) -> Self:
        """
        Move notation: <from>-<to>(<spear>)
        ---

        examples:
        * "d1-d4(a4)": the queen on d1 moves to d4 and throws a spear to a4
        * "j7-j10(j7)": a queen may throw the spear back onto the square it came from
        """
        match = MOVE_PATTERN.match(notation.strip())
        if match is None:
            raise InvalidNotationError(f"Cannot interpret {notation!r} as a move.")
        return cls(
            Square.from_algebraic(match.group("from")),
            Square.from_algebraic(match.group("to")),
            Square.from_algebraic(match.group("spear")),
        )

    def to_notation(self) -> str:
        return f"{self.from_square.to_algebraic()}-{self.to_square.to_algebraic()}({self.spear.to_algebraic()})"

    def __str__(self) -> str:
        return self.to_notation()


def queen_path(from_square: Square, to_square: Square) -> list[Square]:
    """
    All squares a queen passes over when moving from `from_square` to `to_square`.
    Excludes the starting square, includes the target. Empty if the two squares are not on a common line.
    """
    if not from_square.is_queen_move(to_square):
        return []
    direction = from_square.direction(to_square)
    steps = from_square.distance(to_square)
    path: list[Square] = []
    for step in range(1, steps + 1):
        square = from_square.queen_move(direction, step)
        if square is None:
            raise ValueError(
                f"{to_square.to_algebraic()} lies off the board, seen from {from_square.to_algebraic()}."
            )
        path.append(square)
    return path


def reachable_squares(
    board: Board, from_square: Square, as_empty: Optional[Square] = None
) -> Iterator[Square]:
    """
    Raycasting, lazily
    ---

    Walk every direction (in the order of DIRECTIONS), one step at a time, until the edge of the board or an occupied square.
    `as_empty` is treated as if nothing stands on it.
    What stands on `from_square` itself is irrelevant.
    """
    for direction in range(len(DIRECTIONS)):
        steps = 1
        while True:
            target = from_square.queen_move(direction, steps)
            if target is None:
                break
            if target != as_empty and board.piece(target) != Piece.EMPTY:
                break
            yield target
            steps += 1


def generate_legal_moves(board: Board, side: Piece) -> Iterator[Move]:
    """
    Every legal move for `side`, lazily.
    ---

    Order is fixed (the search engine relies on it to break ties):
    1. queens of `side` in board-scan order (a1, b1, ..., j10)
    2. queen destinations, direction by direction, nearest first
    3. spear targets from that destination (origin counts as vacated), same order
    """
    for start in ALL_SQUARES:
        if board.piece(start) != side:
            continue
        for destination in reachable_squares(board, start):
            for spear in reachable_squares(board, destination, as_empty=start):
                yield Move(start, destination, spear)
