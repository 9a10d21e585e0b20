"""The Game board owns the full state of a game of the Amazons: where everything stands, whose turn it is, what was played, and who won."""

from copy import deepcopy
from dataclasses import dataclass, field
from typing import Iterator, Optional, Self

from src.amazons.moves import (
    Move,
    generate_legal_moves,
    queen_path,
    reachable_squares,
)
from src.amazons.pieces import CHAR_TO_PIECE, Piece
from src.amazons.square import ALL_SQUARES, BOARD_SIZE, COLUMN_NAMES, Square
from src.core.exceptions import IllegalMoveError, InvalidNotationError

TURN_TO_CHAR: dict[Piece, str] = {Piece.WHITE: "w", Piece.BLACK: "b"}
CHAR_TO_TURN: dict[str, Piece] = {value: key for key, value in TURN_TO_CHAR.items()}

STARTING_QUEENS: dict[Piece, tuple[str, ...]] = {
    Piece.WHITE: ("d1", "g1", "a4", "j4"),
    Piece.BLACK: ("a7", "j7", "d10", "g10"),
}


@dataclass
class Board:
    # flat, row-major: squares[Square.index]
    squares: list[Piece]
    turn: Piece = Piece.WHITE
    history: list[Move] = field(default_factory=list)
    winner: Optional[Piece] = None

    # --- CREATION ---
    @classmethod
    def empty(cls, turn: Piece = Piece.WHITE) -> Self:
        return cls([Piece.EMPTY] * (BOARD_SIZE * BOARD_SIZE), turn)

    @classmethod
    def initial(cls) -> Self:
        """Four queens each, WHITE to move."""
        board = cls.empty()
        for side, names in STARTING_QUEENS.items():
            for name in names:
                board.put(side, Square.from_algebraic(name))
        return board

    @classmethod
    def from_notation(cls, notation: str) -> Self:
        """Construct a board from position notation.

        Similar to the board part of a FEN string in chess:
        3B2B3/10/10/B8B/10/10/W8W/10/10/3W2W3 w
        means:
        * rows are listed from the 10th (top) down to the 1st, separated by slashes
        * inside a row, read from the a-column to the j-column
        * W / B are queens, S is a spear, a number is that many empty squares in a row
        * the last field says who is to move

        NOTE: no history, and no winner is computed (a win is only ever detected right after a move).
        """
        parts = notation.strip().split(" ")
        if len(parts) != 2 or parts[1] not in CHAR_TO_TURN:
            raise InvalidNotationError(
                f"Position must be '<rows> <w|b>', got {notation!r}."
            )
        position, turn_char = parts
        rows = position.split("/")
        if len(rows) != BOARD_SIZE:
            raise InvalidNotationError(
                f"Position must describe {BOARD_SIZE} rows, got {len(rows)}."
            )

        board = cls.empty(CHAR_TO_TURN[turn_char])
        for row_idx, row_notation in enumerate(rows):
            # notation is read from the top row down
            row = BOARD_SIZE - 1 - row_idx
            for col, piece in enumerate(_parse_row(row_notation)):
                board.put(piece, Square(col, row))
        return board

    def to_notation(self) -> str:
        rows = "/".join(
            self._row_to_notation(row) for row in range(BOARD_SIZE - 1, -1, -1)
        )
        return f"{rows} {TURN_TO_CHAR[self.turn]}"

    def _row_to_notation(self, row: int) -> str:
        characters: list[str] = []
        empty_count = 0
        for col in range(BOARD_SIZE):
            piece = self.piece(Square(col, row))
            if piece == Piece.EMPTY:
                empty_count += 1
                continue
            if empty_count > 0:
                characters.append(str(empty_count))
                empty_count = 0
            characters.append(piece.to_char())

        if empty_count > 0:
            characters.append(str(empty_count))
        return "".join(characters)

    def copy(self) -> Self:
        """Fully independent copy: changing one board never shows up on the other."""
        return deepcopy(self)

    # --- QUERIES ---
    def piece(self, square: Square) -> Piece:
        return self.squares[square.index]

    def put(self, piece: Piece, square: Square) -> None:
        self.squares[square.index] = piece

    def locate(self, piece: Piece) -> list[Square]:
        return [square for square in ALL_SQUARES if self.piece(square) == piece]

    @property
    def num_moves(self) -> int:
        """Moves played (and not undone) on this board"""
        return len(self.history)

    # --- LEGALITY ---
    def is_unblocked_move(
        self, from_square: Square, to_square: Square, as_empty: Optional[Square] = None
    ) -> bool:
        """
        True iff from->to is a queen move and nothing stands in the way.
        Every square passed over (the target included) must be empty, `as_empty`, or `from_square` itself.
        """
        path = queen_path(from_square, to_square)
        if not path:
            return False
        return all(
            self.piece(square) == Piece.EMPTY
            or square == as_empty
            or square == from_square
            for square in path
        )

    def is_legal(
        self,
        from_square: Square,
        to_square: Optional[Square] = None,
        spear: Optional[Square] = None,
    ) -> bool:
        """
        Legality of (a part of) a move.
        ---

        * from only: a queen of the side to move stands there
        * from, to: ... and it can slide to `to`
        * from, to, spear: ... and from `to` it can throw to `spear` (the vacated `from` counts as empty)
        """
        if self.piece(from_square) != self.turn:
            return False
        if to_square is None:
            return True
        if not self.is_unblocked_move(from_square, to_square):
            return False
        if spear is None:
            return True
        return self.is_unblocked_move(to_square, spear, as_empty=from_square)

    def is_legal_move(self, move: Move) -> bool:
        return self.is_legal(move.from_square, move.to_square, move.spear)

    # --- MAKING / UNMAKING MOVES ---
    def make_move(self, move: Move) -> None:
        """
        Play the move
        ---

        1. record it in the history
        2. relocate the queen and land the spear
        3. hand the turn to the opponent
        4. the opponent has no move left? -> the side that just moved wins
        """
        if not self.is_legal_move(move):
            raise IllegalMoveError(
                f"{move.to_notation()} is not legal for {self.turn.name}."
            )
        self.push(move)

    def push(self, move: Move) -> None:
        """Play a move already known to be legal (e.g. straight out of legal_moves()). No validation."""
        mover = self.turn
        self.history.append(move)
        self.put(Piece.EMPTY, move.from_square)
        self.put(mover, move.to_square)
        self.put(Piece.SPEAR, move.spear)
        self.turn = mover.opponent()

        if not self.has_legal_move():
            self.winner = mover

    def undo(self) -> None:
        """Take back the last half-move. Nothing happens on a board without history."""
        if not self.history:
            return
        move = self.history.pop()
        mover = self.piece(move.to_square)
        # NOTE clear the spear first: it may have been thrown back onto the origin square
        self.put(Piece.EMPTY, move.spear)
        self.put(Piece.EMPTY, move.to_square)
        self.put(mover, move.from_square)
        self.turn = mover
        # the position before any move had at least that move available, so it was undecided
        self.winner = None

    # --- MOVE GENERATION ---
    def reachable_from(
        self, from_square: Square, as_empty: Optional[Square] = None
    ) -> Iterator[Square]:
        return reachable_squares(self, from_square, as_empty)

    def legal_moves(self, side: Optional[Piece] = None) -> Iterator[Move]:
        """All legal moves for `side` (default: the side to move), whether or not it is actually their turn."""
        return generate_legal_moves(self, side if side is not None else self.turn)

    def has_legal_move(self, side: Optional[Piece] = None) -> bool:
        return next(self.legal_moves(side), None) is not None

    # --- DISPLAY ---
    def rows(self) -> list[str]:
        """One string per row, top (10th) row first, '-' for empty squares"""
        return [
            " ".join(
                self.piece(Square(col, row)).to_char() for col in range(BOARD_SIZE)
            )
            for row in range(BOARD_SIZE - 1, -1, -1)
        ]

    def __str__(self) -> str:
        lines = [
            f"{BOARD_SIZE - idx:>2} {row}" for idx, row in enumerate(self.rows())
        ]
        lines.append("   " + " ".join(COLUMN_NAMES))
        return "\n".join(lines)


def _parse_row(row_notation: str) -> list[Piece]:
    """One row of position notation into the pieces from the a- to the j-column"""
    pieces: list[Piece] = []
    digits = ""
    for character in row_notation:
        if character.isdigit():
            digits += character
            continue
        if digits:
            pieces.extend([Piece.EMPTY] * int(digits))
            digits = ""
        if character not in CHAR_TO_PIECE or character == "-":
            raise InvalidNotationError(
                f"Unknown character {character!r} in row {row_notation!r}."
            )
        pieces.append(CHAR_TO_PIECE[character])
    if digits:
        pieces.extend([Piece.EMPTY] * int(digits))

    if len(pieces) != BOARD_SIZE:
        raise InvalidNotationError(
            f"Row {row_notation!r} describes {len(pieces)} squares instead of {BOARD_SIZE}."
        )
    return pieces
