"""
Chat Noir core Python package.

Rules engine and cat search for the "trap the cat" hex board game.
Modules:
- board.py: Position, CellState, Board
- state.py: GameState
- moves.py: adjacency, legality, fence placement, cat movement, win checks
- ai.py: evaluation and fixed-depth minimax for the cat
- deal.py, turn.py, db.py, cli.py: setup policy, turn driver, score store, CLI
"""
