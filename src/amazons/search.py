"""
Search entry point: depth-limited minimax with alpha-beta pruning.

Convention ("sense"): scores are always from WHITE's point of view.
WHITE maximizes (sense = +1), BLACK minimizes (sense = -1).

The search works on its own clone of the board and explores children with push / undo,
so the board handed in by the caller is never touched.
Only the root call records the best move (in a SearchState); deeper calls only return values.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from src.amazons.board import Board
from src.amazons.moves import Move
from src.amazons.pieces import Piece
from src.amazons.square import ALL_SQUARES, DIRECTIONS
from src.core.exceptions import SearchError

logger = logging.getLogger(__name__)

# A position magnitude indicating a win (for white if positive, black if negative).
# Mobility can never come close: at most 8 queens x 8 neighbours.
WINNING_VALUE = 1_000_000
INFINITY = WINNING_VALUE + 1

# Depth heuristic, based on the number of moves already played
UPPER_BOUND = 70
LOWER_BOUND = 40
LATE_GAME_DEPTH = 5
MIDDLE_GAME_DEPTH = 2
EARLY_GAME_DEPTH = 1


@dataclass
class SearchState:
    """
    What the root call of the search writes to.

    Attributes:
        best_move:  Best move found by the root so far (first found wins ties).
        best_value: Value of best_move.
        node_count: Number of positions visited.
    """

    best_move: Optional[Move] = None
    best_value: int = 0
    node_count: int = 0


@dataclass(frozen=True)
class SearchResult:
    move: Move
    value: int
    depth: int
    nodes: int


def max_depth(board: Board) -> int:
    """Early on the branching factor is huge, so search shallow. The endgame can afford to look further."""
    played = board.num_moves
    if played > UPPER_BOUND:
        return LATE_GAME_DEPTH
    if played < LOWER_BOUND:
        return EARLY_GAME_DEPTH
    return MIDDLE_GAME_DEPTH


def mobility(board: Board, side: Piece) -> int:
    """Empty squares one step away from the queens of `side`, summed over all 8 directions."""
    count = 0
    for square in ALL_SQUARES:
        if board.piece(square) != side:
            continue
        for direction in range(len(DIRECTIONS)):
            neighbour = square.queen_move(direction, 1)
            if neighbour is not None and board.piece(neighbour) == Piece.EMPTY:
                count += 1
    return count


def static_score(board: Board) -> int:
    """Heuristic value of the position, from WHITE's point of view. A decided game dwarfs any mobility score."""
    if board.winner == Piece.WHITE:
        return WINNING_VALUE
    if board.winner == Piece.BLACK:
        return -WINNING_VALUE
    return mobility(board, Piece.WHITE) - mobility(board, Piece.BLACK)


def search(
    board: Board,
    depth: int,
    sense: int,
    alpha: int,
    beta: int,
    state: SearchState,
    save_move: bool = False,
) -> int:
    """
    Value of `board` searched `depth` plies deep.
    ---

    * sense == 1: maximize. Cut off as soon as the best value exceeds beta.
    * sense == -1: minimize. Cut off as soon as the best value drops below alpha.

    Records the best move in `state` iff `save_move` (the root call).
    At depth 0, or once the game is decided, returns the static score.

    NOTE `board` is modified while searching, but left exactly as it was found.
    """
    state.node_count += 1
    if depth == 0 or board.winner is not None:
        return static_score(board)

    # materialize: the board changes underneath us while the children are searched
    moves = list(board.legal_moves())

    best_value = -INFINITY if sense > 0 else INFINITY
    for move in moves:
        board.push(move)
        value = search(board, depth - 1, -sense, alpha, beta, state)
        board.undo()

        if sense > 0:
            if value > best_value:
                best_value = value
                if save_move:
                    state.best_move = move
                    state.best_value = value
            if best_value > beta:
                return best_value
            alpha = max(alpha, best_value)
        else:
            if value < best_value:
                best_value = value
                if save_move:
                    state.best_move = move
                    state.best_value = value
            if best_value < alpha:
                return best_value
            beta = min(beta, best_value)

    return best_value


def find_move(board: Board, depth: Optional[int] = None) -> SearchResult:
    """
    Best move for the side to move.

    The caller's board is cloned first. Depth defaults to the max_depth heuristic.
    Raises SearchError when there is nothing to search (the game is already decided, or no legal move exists).
    """
    if board.winner is not None:
        raise SearchError(f"Game is already decided: {board.winner.name} won.")
    if not board.has_legal_move():
        raise SearchError(f"{board.turn.name} has no legal move to search.")

    search_board = board.copy()
    search_depth = depth if depth is not None else max_depth(search_board)
    if search_depth < 1:
        raise SearchError(f"Search depth must be at least 1, got {search_depth}.")
    sense = 1 if search_board.turn == Piece.WHITE else -1

    state = SearchState()
    value = search(
        search_board, search_depth, sense, -INFINITY, INFINITY, state, save_move=True
    )

    if state.best_move is None:
        raise SearchError(f"Search found no move for {search_board.turn.name}.")
    logger.info(
        "%s plays %s (value %d, depth %d, %d nodes)",
        search_board.turn.name,
        state.best_move.to_notation(),
        value,
        search_depth,
        state.node_count,
    )
    return SearchResult(state.best_move, value, search_depth, state.node_count)
