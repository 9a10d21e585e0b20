"""Orchestration of communication from API router to business logic and persistence layers (and the reverse direction)."""

import logging
from uuid import UUID

from src.amazons.game import Game
from src.api.models import (
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    JoinGameRequest,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveRequest,
    SuggestedMoveResponse,
    SuggestMoveRequest,
    UndoRequest,
)
from src.core.exceptions import RepositoryError
from src.core.models import GameModel
from src.core.shared_types import Color
from src.db.repository import GameRepository

logger = logging.getLogger(__name__)


class AmazonsService:
    """Orchestration of layers for a game of the Amazons."""

    def __init__(self, repository: GameRepository) -> None:
        self.repo = repository

    # -- API routes logic ---
    def create_new_game(self, request: CreateGameRequest) -> GameResponse:
        """First player requested to create a new game (possibly against the computer)."""

        # Use info in CreateGameRequest to create a new Game, and convert into GameModel
        new_game = Game.new_game(
            player=request.player_name,
            color=request.color,
            against_computer=request.against_computer,
        )
        created_game_data = new_game.to_model()

        # Store the GameModel in the repository
        stored_game, game_id = self.repo.create_game(created_game_data)
        logger.info(
            "Game %s created by %s (%s)", game_id, request.player_name, request.color
        )

        # Return a GameResponse
        return self._create_game_response(game_id, Game.from_model(stored_game))

    def join_game(self, request: JoinGameRequest) -> GameResponse:
        """Second player requested to join a game."""

        # Retrieve persisted GameModel from repository, and rebuild the Game
        game = Game.from_model(self._fetch_game(request.game_id))

        # Register the requested player
        game.register_player(request.player_name)

        # store in repository
        self.repo.update_game(request.game_id, game.to_model())
        logger.info("%s joined game %s", request.player_name, request.game_id)

        return self._create_game_response(request.game_id, game)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by frontend to check when it is the player's turn for instance.
        """
        game = Game.from_model(self._fetch_game(request.game_id))
        return self._create_game_response(request.game_id, game)

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """retrieve set of legal moves."""

        game = Game.from_model(self._fetch_game(request.game_id))
        legal_moves = game.legal_moves(request.player_name)
        return LegalMovesResponse(
            game_id=request.game_id,
            player_name=request.player_name,
            color=game.turn,
            legal_moves=legal_moves,
        )

    def make_move(self, request: MoveRequest) -> GameResponse:
        """Make a move attempt."""

        game = Game.from_model(self._fetch_game(request.game_id))

        # Attempt the move
        move_notation = request.to_notation()
        game.make_move(move_notation, request.player_name)

        # store in repository
        self.repo.update_game(request.game_id, game.to_model())
        logger.info(
            "%s played %s in game %s", request.player_name, move_notation, request.game_id
        )
        self._log_if_finished(request.game_id, game)

        return self._create_game_response(request.game_id, game)

    def play_computer_move(self, request: GetGameRequest) -> GameResponse:
        """The computer is to move: let the search engine pick one and play it."""

        game = Game.from_model(self._fetch_game(request.game_id))
        move_notation = game.play_computer_move()

        self.repo.update_game(request.game_id, game.to_model())
        logger.info("computer played %s in game %s", move_notation, request.game_id)
        self._log_if_finished(request.game_id, game)

        return self._create_game_response(request.game_id, game)

    def suggest_move(self, request: SuggestMoveRequest) -> SuggestedMoveResponse:
        """Hint for the player to move. Nothing gets stored."""

        game = Game.from_model(self._fetch_game(request.game_id))
        move_notation = game.suggest_move(request.player_name, request.depth)
        return SuggestedMoveResponse(
            game_id=request.game_id,
            player_name=request.player_name,
            move=move_notation,
        )

    def undo_moves(self, request: UndoRequest) -> GameResponse:
        """Take back one or more half-moves."""

        game = Game.from_model(self._fetch_game(request.game_id))
        undone = game.undo(request.player_name, request.steps)

        self.repo.update_game(request.game_id, game.to_model())
        logger.info(
            "%s took back %d move(s) in game %s",
            request.player_name,
            undone,
            request.game_id,
        )
        return self._create_game_response(request.game_id, game)

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        self.repo.delete_game(request.game_id)
        logger.info("Game %s deleted", request.game_id)

    # -- Internal helpers --
    def _create_game_response(self, game_id: UUID, game: Game) -> GameResponse:
        """Convert the Game (and its GameModel) into a GameResponse (for game with given ID.)"""
        model = game.to_model()
        return GameResponse(
            game_id=game_id,
            players=model.registered_players,
            status=model.status,
            turn=Color(game.turn),
            winner=game.winner,
            position=model.position,
            board=game.board_rows(),
            move_history=model.moves,
        )

    def _fetch_game(self, game_id: UUID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game_model

    def _log_if_finished(self, game_id: UUID, game: Game) -> None:
        if game.winner is not None:
            logger.info("Game %s finished, %s wins", game_id, game.winner)
