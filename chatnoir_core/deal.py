from __future__ import annotations

import random
from typing import Optional

from .board import CellState
from .state import GameState
from .moves import valid_cat_moves


MIN_FENCES = 9
MAX_FENCES = 15
MAX_DEAL_ATTEMPTS = 100


def deal_board(seed: Optional[int] = None, min_fences: int = MIN_FENCES, max_fences: int = MAX_FENCES) -> GameState:
    """
    Creates a fresh game: cat on the center cell and a random scatter of fences.
    Layouts that already enclose the cat are thrown away and redrawn from the same
    generator, so a seed still reproduces the layout.
    """
    if min_fences < 0 or max_fences < min_fences:
        raise ValueError('Invalid fence count range')
    rng = random.Random(seed)
    for _ in range(MAX_DEAL_ATTEMPTS):
        state = GameState.new()
        count = rng.randint(min_fences, max_fences)
        # The center holds the cat, so it is never among the empty cells.
        free = state.board.empty_cells()
        for pos in rng.sample(free, min(count, len(free))):
            state.board.set(pos, CellState.FENCE)
        if valid_cat_moves(state):
            return state
    raise ValueError(f'No playable deal after {MAX_DEAL_ATTEMPTS} attempts')
