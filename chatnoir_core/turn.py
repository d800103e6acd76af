from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .board import Position
from .state import GameState
from .moves import has_cat_won, has_fence_won, move_cat, place_fence
from .ai import DEFAULT_DEPTH, find_best_move

logger = logging.getLogger(__name__)


class Phase(Enum):
    PLAYER_TURN = 'player_turn'
    CAT_TURN = 'cat_turn'
    FENCE_WON = 'fence_won'
    CAT_WON = 'cat_won'

    @property
    def is_over(self) -> bool:
        return self in (Phase.FENCE_WON, Phase.CAT_WON)


@dataclass
class TurnResult:
    accepted: bool
    phase: Phase
    cat_move: Optional[Position] = None


def phase_of(state: GameState) -> Phase:
    """Phase of a position at rest, i.e. between full turns."""
    if has_cat_won(state):
        return Phase.CAT_WON
    if has_fence_won(state):
        return Phase.FENCE_WON
    return Phase.PLAYER_TURN


def play_fence_turn(state: GameState, pos: Position, depth_limit: int = DEFAULT_DEPTH) -> TurnResult:
    """
    Runs one full turn in place: the player's fence, then the cat's reply.

    Rejected input (game already over, cell off the board or not empty) leaves
    the state untouched and reports accepted=False.
    """
    current = phase_of(state)
    if current.is_over:
        return TurnResult(accepted=False, phase=current)
    if not place_fence(state, pos):
        logger.debug("fence rejected at %s", pos)
        return TurnResult(accepted=False, phase=current)
    if has_fence_won(state):
        return TurnResult(accepted=True, phase=Phase.FENCE_WON)

    move = find_best_move(state, depth_limit)
    if move is None or not move_cat(state, move):
        # Only reachable if the fence check above disagreed with the search.
        return TurnResult(accepted=True, phase=Phase.FENCE_WON)
    if has_cat_won(state):
        return TurnResult(accepted=True, phase=Phase.CAT_WON, cat_move=move)
    return TurnResult(accepted=True, phase=Phase.PLAYER_TURN, cat_move=move)
