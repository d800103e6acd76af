from __future__ import annotations

from dataclasses import dataclass

from .board import Board, CellState, Position, CENTER, in_bounds


@dataclass
class GameState:
    """The unit of simulation: the board plus the tracked cat position."""
    board: Board
    cat: Position

    @classmethod
    def new(cls) -> 'GameState':
        """Empty board with the cat on the center cell."""
        board = Board.empty()
        board.set(CENTER, CellState.CAT)
        return cls(board=board, cat=CENTER)

    def clone(self) -> 'GameState':
        return GameState(board=self.board.copy(), cat=Position(*self.cat))

    def is_consistent(self) -> bool:
        """Exactly one CAT cell exists and it sits at the tracked position."""
        if not in_bounds(self.cat):
            return False
        return self.board.count(CellState.CAT) == 1 and self.board.at(self.cat) is CellState.CAT
