from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from .board import CellState, Position, MAX_INDEX, in_bounds
from .state import GameState

logger = logging.getLogger(__name__)

# Flat-top hex grid with odd rows shifted right. Order: NW, NE, W, E, SW, SE.
EVEN_ROW_DELTAS: Tuple[Tuple[int, int], ...] = ((-1, -1), (-1, 0), (0, -1), (0, 1), (1, -1), (1, 0))
ODD_ROW_DELTAS: Tuple[Tuple[int, int], ...] = ((-1, 0), (-1, 1), (0, -1), (0, 1), (1, 0), (1, 1))

CAT = 'cat'
FENCE = 'fence'


def neighbors(pos: Position) -> List[Position]:
    """Gets the in-range hex neighbors of a coordinate, in adjacency order."""
    r, c = pos
    deltas = EVEN_ROW_DELTAS if r % 2 == 0 else ODD_ROW_DELTAS
    out: List[Position] = []
    for dr, dc in deltas:
        nxt = Position(r + dr, c + dc)
        if in_bounds(nxt):
            out.append(nxt)
    return out


def is_legal_cat_step(state: GameState, target: Position) -> bool:
    """True if target is on the board and not fenced."""
    return in_bounds(target) and state.board.at(target) is not CellState.FENCE


def valid_cat_moves(state: GameState) -> List[Position]:
    """Calculates all legal steps for the cat, in adjacency order."""
    return [p for p in neighbors(state.cat) if is_legal_cat_step(state, p)]


def has_cat_won(state: GameState) -> bool:
    r, c = state.cat
    return r == 0 or r == MAX_INDEX or c == 0 or c == MAX_INDEX


def has_fence_won(state: GameState) -> bool:
    return not valid_cat_moves(state)


def winner(state: GameState) -> Optional[str]:
    """Returns 'cat', 'fence' or None. The cat check is authoritative."""
    if has_cat_won(state):
        return CAT
    if has_fence_won(state):
        return FENCE
    return None


def place_fence(state: GameState, pos: Position) -> bool:
    """Fences an empty on-board cell. Returns False and leaves the state alone otherwise."""
    if not in_bounds(pos) or state.board.at(pos) is not CellState.EMPTY:
        return False
    state.board.set(pos, CellState.FENCE)
    return True


def move_cat(state: GameState, target: Position) -> bool:
    """Steps the cat to target if the step is legal. Returns whether it moved."""
    if not is_legal_cat_step(state, target):
        logger.debug("rejected cat step %s -> %s", state.cat, target)
        return False
    target = Position(*target)
    state.board.set(state.cat, CellState.EMPTY)
    state.board.set(target, CellState.CAT)
    state.cat = target
    return True


def distance_to_edge(pos: Position) -> int:
    """Row/column distance to the nearest board edge (not true hex distance)."""
    r, c = pos
    return min(r, MAX_INDEX - r, c, MAX_INDEX - c)
