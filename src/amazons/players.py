"""
Who produces the next move.

Only the contract matters to the engine: given the current board, hand back a move.
Humans send their moves through the service layer, the computer asks the search engine.
"""

from dataclasses import dataclass
from typing import Optional, Protocol

from src.amazons.board import Board
from src.amazons.moves import Move
from src.amazons.pieces import Piece
from src.amazons.search import find_move
from src.core.exceptions import NotYourTurnError


class Player(Protocol):
    side: Piece

    def next_move(self, board: Board) -> Move: ...


@dataclass
class ComputerPlayer:
    """Plays `side` using alpha-beta search. Leave `depth` as None to let the engine pick one from the game phase."""

    side: Piece
    depth: Optional[int] = None

    def next_move(self, board: Board) -> Move:
        if board.turn != self.side:
            raise NotYourTurnError(
                f"Computer plays {self.side.name}, but it is {board.turn.name} to move."
            )
        return find_move(board, self.depth).move
