from __future__ import annotations

from enum import Enum
from typing import Iterable, Iterator, List, NamedTuple, Sequence

BOARD_SIZE = 11
MAX_INDEX = BOARD_SIZE - 1


class Position(NamedTuple):
    """A (row, col) cell coordinate. Compares equal to a plain tuple."""
    row: int
    col: int


CENTER = Position(5, 5)


class CellState(Enum):
    EMPTY = '.'
    CAT = 'C'
    FENCE = '#'


def in_bounds(pos: Position) -> bool:
    return 0 <= pos[0] <= MAX_INDEX and 0 <= pos[1] <= MAX_INDEX


class Board:
    """The 11x11 grid of cells, stored row-major as a list of row lists."""

    def __init__(self, rows: List[List[CellState]]) -> None:
        if len(rows) != BOARD_SIZE or any(len(r) != BOARD_SIZE for r in rows):
            raise ValueError(f'Board must be {BOARD_SIZE}x{BOARD_SIZE}')
        self.rows = rows

    @classmethod
    def empty(cls) -> 'Board':
        return cls([[CellState.EMPTY] * BOARD_SIZE for _ in range(BOARD_SIZE)])

    @classmethod
    def from_rows(cls, lines: Sequence[str]) -> 'Board':
        """Builds a board from glyph strings such as '.....C.....'."""
        try:
            rows = [[CellState(ch) for ch in line] for line in lines]
        except ValueError as e:
            raise ValueError(f'Unknown cell glyph: {e}') from e
        return cls(rows)

    def to_rows(self) -> List[str]:
        return [''.join(cell.value for cell in row) for row in self.rows]

    def at(self, pos: Position) -> CellState:
        return self.rows[pos[0]][pos[1]]

    def set(self, pos: Position, cell: CellState) -> None:
        self.rows[pos[0]][pos[1]] = cell

    def coords(self) -> Iterator[Position]:
        """Iterates over all coordinates on the board."""
        for r in range(BOARD_SIZE):
            for c in range(BOARD_SIZE):
                yield Position(r, c)

    def empty_cells(self) -> List[Position]:
        return [p for p in self.coords() if self.rows[p.row][p.col] is CellState.EMPTY]

    def count(self, cell: CellState) -> int:
        return sum(row.count(cell) for row in self.rows)

    def copy(self) -> 'Board':
        # Each row is a fresh list so copies never share row containers.
        return Board([list(row) for row in self.rows])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.rows == other.rows

    def pretty(self, highlight: Iterable[Position] = ()) -> str:
        """Text rendering with odd rows shifted right to show the hex offset."""
        marks = set(highlight)
        lines: List[str] = []
        for r, row in enumerate(self.rows):
            cells: List[str] = []
            for c, cell in enumerate(row):
                cells.append('*' if (r, c) in marks and cell is CellState.EMPTY else cell.value)
            indent = ' ' if r % 2 == 1 else ''
            lines.append(f"{r:2d} {indent}" + ' '.join(cells))
        return '\n'.join(lines)
