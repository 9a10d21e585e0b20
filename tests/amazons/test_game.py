"""Unit tests for /src/amazons/game.py"""

from unittest.mock import patch

import pytest

import src.amazons.search as search
from src.amazons.board import Board
from src.amazons.game import COMPUTER_PLAYER, Game, Status
from src.amazons.moves import Move
from src.amazons.pieces import Piece
from src.core.exceptions import (
    GameStateError,
    IllegalMoveError,
    InvalidNotationError,
    NotYourTurnError,
)
from src.core.models import GameModel
from src.core.shared_types import Color

ALICE = "alice"
BOB = "bob"
# Black queen on j10, boxed in except for i9
ALMOST_BOXED = "/".join(["8SB", "9S"] + ["10"] * 7 + ["W9"]) + " w"


@pytest.fixture
def game_in_progress() -> Game:
    """alice plays white, bob plays black"""
    game = Game.new_game(ALICE, "white")
    game.register_player(BOB)
    return game


@pytest.fixture
def almost_won_game() -> Game:
    """alice (white) can end the game by throwing a spear to i9"""
    return Game(
        board=Board.from_notation(ALMOST_BOXED),
        players={Piece.WHITE: ALICE, Piece.BLACK: BOB},
        status=Status.IN_PROGRESS,
    )


# --- CREATING / JOINING ---
def test_new_game() -> None:
    game = Game.new_game(ALICE, "black")
    assert game.players == {Piece.BLACK: ALICE}
    assert game.status == Status.WAITING_FOR_PLAYERS
    assert game.board == Board.initial()
    assert game.turn == Color.WHITE


def test_new_game_with_invalid_color() -> None:
    with pytest.raises(GameStateError):
        Game.new_game(ALICE, "purple")


def test_computer_name_is_reserved() -> None:
    with pytest.raises(GameStateError):
        Game.new_game(COMPUTER_PLAYER, "white")


def test_new_game_against_computer() -> None:
    game = Game.new_game(ALICE, "black", against_computer=True)
    assert game.players == {Piece.BLACK: ALICE, Piece.WHITE: COMPUTER_PLAYER}
    assert game.status == Status.IN_PROGRESS


def test_second_player_joins(game_in_progress: Game) -> None:
    assert game_in_progress.players == {Piece.WHITE: ALICE, Piece.BLACK: BOB}
    assert game_in_progress.status == Status.IN_PROGRESS


def test_cannot_join_running_game(game_in_progress: Game) -> None:
    with pytest.raises(GameStateError):
        game_in_progress.register_player("carol")


def test_cannot_play_against_yourself() -> None:
    game = Game.new_game(ALICE, "white")
    with pytest.raises(GameStateError):
        game.register_player(ALICE)


# --- MODEL CONVERSION ---
def test_to_model(game_in_progress: Game) -> None:
    game_in_progress.make_move("d1-d4(b4)", ALICE)
    model = game_in_progress.to_model()

    assert model.moves == ["d1-d4(b4)"]
    assert model.position == game_in_progress.board.to_notation()
    assert model.registered_players == {"white": ALICE, "black": BOB}
    assert model.status == "in progress"


def test_from_model_replays_history(game_in_progress: Game) -> None:
    game_in_progress.make_move("d1-d4(b4)", ALICE)
    game_in_progress.make_move("d10-d5(d6)", BOB)

    restored = Game.from_model(game_in_progress.to_model())

    assert restored.board == game_in_progress.board
    assert restored.board.history == [
        Move.from_notation("d1-d4(b4)"),
        Move.from_notation("d10-d5(d6)"),
    ]
    assert restored.players == game_in_progress.players
    assert restored.status == Status.IN_PROGRESS


def test_from_model_with_invalid_status() -> None:
    model = GameModel(
        position=Board.initial().to_notation(),
        moves=[],
        registered_players={"white": ALICE},
        status="napping",
    )
    with pytest.raises(GameStateError):
        Game.from_model(model)


def test_from_model_with_illegal_history() -> None:
    model = GameModel(
        position=Board.initial().to_notation(),
        moves=["d1-d4(a4)"],
        registered_players={"white": ALICE, "black": BOB},
        status="in progress",
    )
    with pytest.raises(GameStateError):
        Game.from_model(model)


# --- LEGAL MOVES ---
def test_legal_moves_for_player_to_move(game_in_progress: Game) -> None:
    moves = game_in_progress.legal_moves(ALICE)
    assert len(moves) == 2176
    assert moves[0] == "d1-e1(f1)"


def test_legal_moves_not_your_turn(game_in_progress: Game) -> None:
    with pytest.raises(NotYourTurnError):
        game_in_progress.legal_moves(BOB)


def test_legal_moves_before_game_starts() -> None:
    game = Game.new_game(ALICE, "white")
    with pytest.raises(GameStateError):
        game.legal_moves(ALICE)


# --- MAKING MOVES ---
def test_make_move(game_in_progress: Game) -> None:
    game_in_progress.make_move("d1-d4(b4)", ALICE)
    assert game_in_progress.turn == Color.BLACK
    assert game_in_progress.num_moves == 1
    assert game_in_progress.winner is None


def test_make_move_not_your_turn(game_in_progress: Game) -> None:
    with pytest.raises(NotYourTurnError):
        game_in_progress.make_move("d10-d5(d6)", BOB)


def test_make_illegal_move(game_in_progress: Game) -> None:
    with pytest.raises(IllegalMoveError):
        game_in_progress.make_move("d1-d4(a4)", ALICE)
    assert game_in_progress.num_moves == 0


def test_make_move_with_bad_notation(game_in_progress: Game) -> None:
    with pytest.raises(InvalidNotationError):
        game_in_progress.make_move("d1d4a4", ALICE)


def test_winning_move_finishes_game(almost_won_game: Game) -> None:
    almost_won_game.make_move("a1-e5(i9)", ALICE)
    assert almost_won_game.status == Status.FINISHED
    assert almost_won_game.winner == ALICE

    with pytest.raises(GameStateError):
        almost_won_game.legal_moves(BOB)


# --- COMPUTER ---
def test_computer_move() -> None:
    game = Game.new_game(ALICE, "black", against_computer=True)
    notation = game.play_computer_move()

    assert game.num_moves == 1
    assert game.board.history[0] == Move.from_notation(notation)
    assert game.turn == Color.BLACK


def test_computer_waits_for_its_turn() -> None:
    game = Game.new_game(ALICE, "white", against_computer=True)
    with pytest.raises(NotYourTurnError):
        game.play_computer_move()


def test_suggest_move_leaves_board_untouched(game_in_progress: Game) -> None:
    with patch("src.amazons.game.find_move", wraps=search.find_move) as spy:
        suggestion = game_in_progress.suggest_move(ALICE, depth=1)

    spy.assert_called_once_with(game_in_progress.board, 1)
    assert game_in_progress.board.is_legal_move(Move.from_notation(suggestion))
    assert game_in_progress.num_moves == 0


def test_suggest_move_not_your_turn(game_in_progress: Game) -> None:
    with pytest.raises(NotYourTurnError):
        game_in_progress.suggest_move(BOB)


# --- UNDO ---
def test_undo_single_half_move(game_in_progress: Game) -> None:
    game_in_progress.make_move("d1-d4(b4)", ALICE)
    game_in_progress.make_move("d10-d5(d6)", BOB)

    assert game_in_progress.undo(ALICE) == 1
    assert game_in_progress.num_moves == 1
    assert game_in_progress.turn == Color.BLACK


def test_undo_more_than_played(game_in_progress: Game) -> None:
    game_in_progress.make_move("d1-d4(b4)", ALICE)
    assert game_in_progress.undo(BOB, steps=5) == 1
    assert game_in_progress.board == Board.initial()


def test_undo_reopens_finished_game(almost_won_game: Game) -> None:
    almost_won_game.make_move("a1-e5(i9)", ALICE)
    almost_won_game.undo(BOB)

    assert almost_won_game.status == Status.IN_PROGRESS
    assert almost_won_game.winner is None
    assert almost_won_game.turn == Color.WHITE


def test_undo_by_stranger(game_in_progress: Game) -> None:
    with pytest.raises(GameStateError):
        game_in_progress.undo("carol")


def test_undo_before_game_starts() -> None:
    game = Game.new_game(ALICE, "white")
    with pytest.raises(GameStateError):
        game.undo(ALICE)
