from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .board import Position
from .state import GameState
from .moves import (
    distance_to_edge,
    has_cat_won,
    has_fence_won,
    move_cat,
    place_fence,
    valid_cat_moves,
)

logger = logging.getLogger(__name__)

CAT_WIN_SCORE = 10000
FENCE_WIN_SCORE = -10000
DEFAULT_DEPTH = 3

# Heuristic scores stay strictly inside the terminal scores.
HEURISTIC_LIMIT = 500
EDGE_WEIGHT = 40


def depth_from_env(name: str = 'CHATNOIR_DEPTH') -> int:
    """Search depth from the environment; unset or invalid values give DEFAULT_DEPTH."""
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return DEFAULT_DEPTH
    try:
        depth = int(raw)
    except ValueError:
        logger.warning("ignoring %s=%r: not an integer", name, raw)
        return DEFAULT_DEPTH
    if depth < 1:
        logger.warning("ignoring %s=%r: must be at least 1", name, raw)
        return DEFAULT_DEPTH
    return depth


@dataclass
class SearchResult:
    """Outcome of a root search for the cat."""
    best_move: Optional[Position]
    score: Optional[int]
    nodes: int
    scores: List[Tuple[Position, int]] = field(default_factory=list)


def evaluate(state: GameState) -> int:
    """Scores a position from the cat's point of view."""
    if has_cat_won(state):
        return CAT_WIN_SCORE
    if has_fence_won(state):
        return FENCE_WIN_SCORE
    d = distance_to_edge(state.cat)
    return max(-HEURISTIC_LIMIT, min(HEURISTIC_LIMIT, HEURISTIC_LIMIT - EDGE_WEIGHT * d))


def fence_candidates(state: GameState) -> List[Position]:
    """Every empty cell, row-major. The fence side's full search width."""
    return state.board.empty_cells()


class _Counter:
    __slots__ = ('nodes',)

    def __init__(self) -> None:
        self.nodes = 0


def _minimax(state: GameState, depth: int, maximizing: bool, counter: _Counter) -> int:
    counter.nodes += 1
    if depth == 0 or has_cat_won(state) or has_fence_won(state):
        return evaluate(state)

    if maximizing:
        moves = valid_cat_moves(state)
        if not moves:
            return evaluate(state)
        best = None
        for move in moves:
            child = state.clone()
            move_cat(child, move)
            score = _minimax(child, depth - 1, False, counter)
            if best is None or score > best:
                best = score
        return best

    cells = fence_candidates(state)
    if not cells:
        # A full board with the cat still inside has nowhere left to fence.
        return evaluate(state)
    worst = None
    for cell in cells:
        child = state.clone()
        place_fence(child, cell)
        score = _minimax(child, depth - 1, True, counter)
        if worst is None or score < worst:
            worst = score
    return worst


def minimax(state: GameState, depth: int, maximizing: bool) -> int:
    """
    Fixed-depth minimax without pruning. The cat maximizes, the fence side minimizes
    over every empty cell. Stops early on terminal states.
    """
    return _minimax(state, depth, maximizing, _Counter())


def search(state: GameState, depth_limit: int = DEFAULT_DEPTH) -> SearchResult:
    """
    Scores every legal cat step with a (depth_limit - 1)-ply fence-first search
    and keeps the first strictly best one. The input state is not modified.
    """
    if depth_limit < 1:
        raise ValueError('depth_limit must be at least 1')
    counter = _Counter()
    moves = valid_cat_moves(state)
    if not moves:
        return SearchResult(best_move=None, score=None, nodes=0)

    best_move: Optional[Position] = None
    best_score: Optional[int] = None
    scored: List[Tuple[Position, int]] = []
    for move in moves:
        child = state.clone()
        move_cat(child, move)
        score = _minimax(child, depth_limit - 1, False, counter)
        scored.append((move, score))
        if best_score is None or score > best_score:
            best_score = score
            best_move = move

    logger.debug(
        "search depth=%d cat=%s best=%s score=%s nodes=%d",
        depth_limit, state.cat, best_move, best_score, counter.nodes,
    )
    return SearchResult(best_move=best_move, score=best_score, nodes=counter.nodes, scores=scored)


def find_best_move(state: GameState, depth_limit: int = DEFAULT_DEPTH) -> Optional[Position]:
    """Picks the cat's move, or None if the cat is enclosed."""
    return search(state, depth_limit).best_move
