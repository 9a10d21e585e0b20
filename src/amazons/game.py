"""
The Game class will be the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating all the business logic required to play a turn of the board game -->
passes this information to the service layer, which can then pass it onwards to the API layer.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Self

from src.amazons.board import Board
from src.amazons.moves import Move
from src.amazons.pieces import Piece
from src.amazons.players import ComputerPlayer
from src.amazons.search import find_move
from src.core.exceptions import (
    GameError,
    GameStateError,
    IllegalMoveError,
    NotYourTurnError,
)
from src.core.models import GameModel
from src.core.shared_types import Color

# Name under which the search engine is registered as a player
COMPUTER_PLAYER = "computer"

COLOR_TO_PIECE: dict[Color, Piece] = {
    Color.WHITE: Piece.WHITE,
    Color.BLACK: Piece.BLACK,
}
PIECE_TO_COLOR: dict[Piece, Color] = {value: key for key, value in COLOR_TO_PIECE.items()}


class Status(Enum):
    WAITING_FOR_PLAYERS = auto()
    IN_PROGRESS = auto()
    FINISHED = auto()


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: Board
    players: dict[Piece, str]
    status: Status

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """Define how to construct a Game from the information the Service layer actually has

        The board is rebuilt by replaying every recorded move from the initial position,
        so the undo history is available again.
        """

        # Validation
        status_name = model.status.replace(" ", "_").upper()
        if status_name not in Status.__members__:
            raise GameStateError(
                f"Invalid status code: {model.status!r}. \nPick one from {','.join([status.name.lower() for status in Status])}"
            )

        board = Board.initial()
        for notation in model.moves:
            try:
                board.make_move(Move.from_notation(notation))
            except GameError as error:
                raise GameStateError(
                    f"Stored move {notation!r} cannot be replayed: {error}"
                ) from error

        players = {
            COLOR_TO_PIECE[color]: model.registered_players[color.value]
            for color in Color
            if color.value in model.registered_players
        }
        return cls(board, players, Status[status_name])

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""

        return GameModel(
            position=self.board.to_notation(),
            moves=[move.to_notation() for move in self.board.history],
            registered_players={
                PIECE_TO_COLOR[side].value: name for side, name in self.players.items()
            },
            status=self.status.name.lower().replace("_", " "),
        )

    @classmethod
    def new_game(cls, player: str, color: str, against_computer: bool = False) -> Self:
        """To start a new game with the player using the queens of the indicated color.

        Against the computer, the opponent is registered right away and the game can start.
        """
        if color.lower() not in [c.value for c in Color]:
            raise GameStateError(
                f"Cannot create new game. Color {color} not in {','.join([c.value for c in Color])}."
            )
        if player == COMPUTER_PLAYER:
            raise GameStateError(f"The name {COMPUTER_PLAYER!r} is reserved.")

        player_side = COLOR_TO_PIECE[Color(color.lower())]
        players = {player_side: player}
        status = Status.WAITING_FOR_PLAYERS
        if against_computer:
            players[player_side.opponent()] = COMPUTER_PLAYER
            status = Status.IN_PROGRESS
        return cls(board=Board.initial(), players=players, status=status)

    # --- QUERIES ---
    @property
    def turn(self) -> Color:
        return PIECE_TO_COLOR[self.board.turn]

    @property
    def winner(self) -> Optional[str]:
        """Name of the player whose opponent ran out of moves (None while the game is undecided)"""
        if self.board.winner is None:
            return None
        return self.players.get(self.board.winner)

    @property
    def num_moves(self) -> int:
        return self.board.num_moves

    def board_rows(self) -> list[str]:
        return self.board.rows()

    def register_player(self, player: str) -> None:
        """Registering the 2nd player to an open game"""
        if self.status != Status.WAITING_FOR_PLAYERS:
            raise GameStateError(
                f"Cannot join this game. Game is not accepting new players. status: {self.status}"
            )
        if player in self.players.values():
            raise GameStateError(f"Player {player} is already registered.")

        opponent_side = list(self.players.keys())[0]
        self.players[opponent_side.opponent()] = player
        self._change_status(Status.IN_PROGRESS)

    def legal_moves(self, player: str) -> list[str]:
        """
        Service will request the set of legal moves.
        ----

        1. Check if the game is being played and it is your turn
        2. Yes? Generate legal moves and return them in move notation.
        """
        self._assert_in_progress()
        self._assert_your_turn(player)
        return [move.to_notation() for move in self.board.legal_moves()]

    def make_move(self, move_notation: str, player: str) -> None:
        """
        Attempt to make a move
        -----

        1. game must be in progress, and it must be your turn
        2. parse the notation and check legality
        3. update the board
        4. update game status (if the opponent is now out of moves)
        """
        self._assert_in_progress()
        self._assert_your_turn(player)

        new_move = Move.from_notation(move_notation)
        if not self.board.is_legal_move(new_move):
            raise IllegalMoveError(f"Move not allowed: {move_notation}")

        self.board.make_move(new_move)
        self._update_game_status()

    def play_computer_move(self) -> str:
        """Let the search engine move, when it is the computer's turn."""
        self._assert_in_progress()
        self._assert_your_turn(COMPUTER_PLAYER)

        move = ComputerPlayer(self.board.turn).next_move(self.board)
        self.board.make_move(move)
        self._update_game_status()
        return move.to_notation()

    def suggest_move(self, player: str, depth: Optional[int] = None) -> str:
        """Hint: the move the engine would play for you. The board is left as it is."""
        self._assert_in_progress()
        self._assert_your_turn(player)
        return find_move(self.board, depth).move.to_notation()

    def undo(self, player: str, steps: int = 1) -> int:
        """
        Take back `steps` half-moves (never more than were played). Returns how many were actually undone.

        A finished game is back in progress afterwards.
        """
        if self.status == Status.WAITING_FOR_PLAYERS:
            raise GameStateError(f"Game has not started yet. status: {self.status}")
        if player not in self.players.values():
            raise GameStateError(f"Player {player} is not registered in this game.")

        undone = min(steps, self.board.num_moves)
        for _ in range(undone):
            self.board.undo()
        self._update_game_status()
        return undone

    # -- PRIVATE HELPERS ---
    def _get_turn_player(self) -> str:
        turn_player = self.players.get(self.board.turn)
        if turn_player is None:
            raise GameStateError(f"No player registered for {self.board.turn.name}.")
        return turn_player

    def _assert_your_turn(self, player: str) -> None:
        """You must wait for your turn before calculating legal moves / making a move."""
        player_to_move = self._get_turn_player()
        if player != player_to_move:
            raise NotYourTurnError(
                f"It is not your turn. Waiting for player {player_to_move} to make a move first."
            )

    def _assert_in_progress(self) -> None:
        if self.status != Status.IN_PROGRESS:
            raise GameStateError(f"Game is not in progress. status: {self.status}")

    def _update_game_status(self) -> None:
        """The board detects the end of the game. Reflect it (or its reversal after an undo) in the status."""
        if self.board.winner is not None:
            self._change_status(Status.FINISHED)
        elif self.status == Status.FINISHED:
            self._change_status(Status.IN_PROGRESS)

    def _change_status(self, new_status: Status) -> None:
        self.status = new_status
