"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.amazons.square import ALGEBRAIC_PATTERN
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Color, Status

PieceColor = str
PlayerName = str


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    player_name: str
    color: Color
    against_computer: bool = False


class JoinGameRequest(BaseModel):
    game_id: UUID
    player_name: str


class LegalMovesRequest(BaseModel):
    game_id: UUID
    player_name: str


class SuggestMoveRequest(BaseModel):
    game_id: UUID
    player_name: str
    depth: Optional[int] = None

    @field_validator("depth")
    @classmethod
    def validate_depth(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value < 1:
            raise InvalidRequestError(f"Search depth must be at least 1, got {value}.")
        return value


class MoveRequest(BaseModel):
    game_id: UUID
    player_name: str
    from_square: str
    to_square: str
    spear_square: str

    @field_validator(*["from_square", "to_square", "spear_square"])
    @classmethod
    def validate_square(cls, value: str) -> str:
        if ALGEBRAIC_PATTERN.fullmatch(value) is None:
            raise InvalidRequestError(
                f"Cannot interpret square: {value!r} as a valid square name (a1 - j10)."
            )
        return value

    def to_notation(self) -> str:
        return f"{self.from_square}-{self.to_square}({self.spear_square})"


class UndoRequest(BaseModel):
    game_id: UUID
    player_name: str
    steps: int = 1

    @field_validator("steps")
    @classmethod
    def validate_steps(cls, value: int) -> int:
        if value < 1:
            raise InvalidRequestError(f"Must undo at least one move, got {value}.")
        return value


class GetGameRequest(BaseModel):
    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    game_id: UUID
    players: dict[PieceColor, PlayerName]
    status: Status
    turn: Color
    winner: Optional[PlayerName]
    position: str
    board: list[str]
    move_history: list[str]


class LegalMovesResponse(BaseModel):
    game_id: UUID
    player_name: str
    color: Color
    legal_moves: list[str]


class SuggestedMoveResponse(BaseModel):
    game_id: UUID
    player_name: str
    move: str
