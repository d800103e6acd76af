from __future__ import annotations

import argparse
import logging
import os
from typing import Optional

from .board import Position
from .state import GameState
from .deal import deal_board
from .moves import valid_cat_moves
from .ai import depth_from_env, search
from .turn import Phase, phase_of, play_fence_turn
from .db import CAT_WINS, PLAYER_WINS, db_increment_score, db_load_scores


def _env_flag(name: str) -> bool:
    return os.getenv(name, '0').lower() in ('1', 'true', 'yes', 'on')


def configure_logging() -> None:
    level = logging.DEBUG if _env_flag('CHATNOIR_DEBUG') else logging.INFO
    logging.basicConfig(level=level, format='%(levelname)s %(name)s: %(message)s')


def parse_cell(text: str) -> Optional[Position]:
    """Parses 'r,c' or 'r c' into a Position; None if unparsable."""
    sep = ',' if ',' in text else ' '
    parts = [t for t in text.strip().split(sep) if t.strip() != '']
    if len(parts) != 2:
        return None
    try:
        return Position(int(parts[0]), int(parts[1]))
    except ValueError:
        return None


def _print_scores(db_path: str) -> None:
    scores = db_load_scores(db_path)
    print(f"Score - player: {scores[PLAYER_WINS]}  cat: {scores[CAT_WINS]}")


def _explain(state: GameState, depth: int) -> None:
    res = search(state, depth)
    if res.best_move is None:
        print('The cat has no legal move.')
        return
    print(f"Cat's best move: {tuple(res.best_move)} (score {res.score}, {res.nodes} nodes)")
    for move, score in res.scores:
        print(f"  {tuple(move)}: {score}")


def play(state: GameState, depth: int, db_path: str) -> Phase:
    """
    Interactive loop: the human places fences, the search moves the cat.
    Only games decided during the loop are counted.
    """
    phase = phase_of(state)
    if phase.is_over:
        print(state.board.pretty())
        print('This game is already over.')
        return phase
    while not phase.is_over:
        print(state.board.pretty(valid_cat_moves(state)))
        try:
            text = input('Place a fence at r,c: ')
        except (EOFError, KeyboardInterrupt):
            print()
            return phase
        pos = parse_cell(text)
        if pos is None:
            print('Could not parse. Try again.')
            continue
        result = play_fence_turn(state, pos, depth)
        if not result.accepted:
            print('That cell cannot be fenced. Try again.')
            continue
        if result.cat_move is not None:
            print(f"Cat moves to {tuple(result.cat_move)}")
        phase = result.phase

    print(state.board.pretty())
    if phase is Phase.FENCE_WON:
        print('The cat is trapped. You win!')
        db_increment_score(db_path, PLAYER_WINS)
    else:
        print('The cat escaped!')
        db_increment_score(db_path, CAT_WINS)
    _print_scores(db_path)
    return phase


def main() -> None:
    parser = argparse.ArgumentParser(description='Chat Noir: trap the cat on a hex board')
    parser.add_argument('--seed', type=int, default=None, help='RNG seed for the initial fences')
    parser.add_argument('--depth', type=int, default=depth_from_env(),
                        help='Search depth in plies')
    parser.add_argument('--db', default=os.getenv('CHATNOIR_DB', 'data/chatnoir.db'), help='SQLite score file')
    parser.add_argument('--play', action='store_true', help='Play against the cat')
    parser.add_argument('--explain', action='store_true', help='Show the score of every cat move')
    args = parser.parse_args()
    if args.depth < 1:
        parser.error('--depth must be at least 1')

    configure_logging()
    state = deal_board(seed=args.seed)

    if not args.play:
        print('Initial board:')
        print(state.board.pretty())
        if args.explain:
            _explain(state, args.depth)
        else:
            res = search(state, args.depth)
            print('Cat would move to:', tuple(res.best_move) if res.best_move else None)
        return

    _print_scores(args.db)
    play(state, args.depth, args.db)


if __name__ == '__main__':
    main()
