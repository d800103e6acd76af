import unittest

from chatnoir_core.board import Board, CellState, Position, BOARD_SIZE, CENTER, in_bounds
from chatnoir_core.state import GameState
from chatnoir_core.moves import move_cat, place_fence


def make_state(cat=(5, 5), fences=()):
    board = Board.empty()
    for f in fences:
        board.set(Position(*f), CellState.FENCE)
    board.set(Position(*cat), CellState.CAT)
    return GameState(board=board, cat=Position(*cat))


class TestBoardAndState(unittest.TestCase):
    def test_given_new_state_when_inspecting_then_cat_alone_at_center(self):
        s = GameState.new()
        self.assertEqual(s.cat, CENTER)
        self.assertEqual(s.board.at(CENTER), CellState.CAT)
        self.assertEqual(s.board.count(CellState.CAT), 1)
        self.assertEqual(s.board.count(CellState.FENCE), 0)
        self.assertEqual(len(s.board.empty_cells()), BOARD_SIZE * BOARD_SIZE - 1)
        self.assertTrue(s.is_consistent())

    def test_given_position_when_compared_with_tuple_then_equal(self):
        self.assertEqual(Position(3, 4), (3, 4))
        self.assertEqual(Position(3, 4).row, 3)
        self.assertEqual(Position(3, 4).col, 4)

    def test_given_coords_when_checking_bounds_then_edges_inclusive(self):
        self.assertTrue(in_bounds(Position(0, 0)))
        self.assertTrue(in_bounds(Position(10, 10)))
        self.assertFalse(in_bounds(Position(-1, 5)))
        self.assertFalse(in_bounds(Position(5, 11)))

    def test_given_rows_when_roundtrip_glyphs_then_equal(self):
        s = make_state(cat=(2, 3), fences=[(0, 0), (10, 10)])
        rows = s.board.to_rows()
        self.assertEqual(len(rows), BOARD_SIZE)
        self.assertEqual(rows[0][0], '#')
        self.assertEqual(rows[2][3], 'C')
        self.assertEqual(Board.from_rows(rows), s.board)

    def test_given_malformed_rows_when_building_board_then_value_error(self):
        with self.assertRaises(ValueError):
            Board.from_rows(['.' * BOARD_SIZE] * (BOARD_SIZE - 1))
        with self.assertRaises(ValueError):
            Board.from_rows(['.' * (BOARD_SIZE - 1)] * BOARD_SIZE)
        with self.assertRaises(ValueError):
            Board.from_rows(['x' * BOARD_SIZE] * BOARD_SIZE)

    def test_given_clone_when_mutating_copy_then_original_unchanged(self):
        original = make_state(fences=[(1, 1)])
        before_rows = original.board.to_rows()
        before_cat = original.cat

        copy = original.clone()
        self.assertTrue(place_fence(copy, Position(7, 7)))
        self.assertTrue(move_cat(copy, Position(4, 5)))

        self.assertEqual(original.board.to_rows(), before_rows)
        self.assertEqual(original.cat, before_cat)
        self.assertNotEqual(copy.board.to_rows(), before_rows)
        for a, b in zip(original.board.rows, copy.board.rows):
            self.assertIsNot(a, b)

    def test_given_mismatched_cat_when_checking_consistency_then_false(self):
        s = make_state()
        s.cat = Position(4, 4)
        self.assertFalse(s.is_consistent())
        s2 = make_state()
        s2.board.set(Position(0, 0), CellState.CAT)
        self.assertFalse(s2.is_consistent())

    def test_given_board_when_pretty_then_odd_rows_indented_and_marks_shown(self):
        s = make_state(fences=[(0, 0)])
        txt = s.board.pretty(highlight=[Position(4, 5)])
        lines = txt.split('\n')
        self.assertEqual(len(lines), BOARD_SIZE)
        self.assertTrue(lines[0].startswith(' 0 #'))
        self.assertTrue(lines[1].startswith(' 1  .'))
        self.assertIn('C', lines[5])
        self.assertIn('*', lines[4])


if __name__ == '__main__':
    unittest.main(verbosity=2)
