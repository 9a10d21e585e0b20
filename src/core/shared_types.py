"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    WAITING_FOR_PLAYERS = "waiting for players"
    IN_PROGRESS = "in progress"
    FINISHED = "finished"


# --- NOTE The domain layer uses src/amazons/pieces.py (which also knows about EMPTY squares and SPEARS).
# --- These are only the names that travel across the API / service / db boundaries.


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"
