import os
import tempfile
import unittest
from unittest.mock import patch

from chatnoir_core.db import (
    CAT_WINS,
    PLAYER_WINS,
    db_increment_score,
    db_load_scores,
    db_reset_scores,
)

class TestScoreStore(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.db_path = os.path.join(self._tmp.name, 'nested', 'scores.db')

    def tearDown(self):
        self._tmp.cleanup()

    def test_given_new_db_when_loading_then_both_counters_zero_and_dir_created(self):
        self.assertEqual(db_load_scores(self.db_path), {PLAYER_WINS: 0, CAT_WINS: 0})
        self.assertTrue(os.path.isfile(self.db_path))

    def test_given_wins_when_incrementing_then_values_persist_across_connections(self):
        self.assertEqual(db_increment_score(self.db_path, PLAYER_WINS), 1)
        self.assertEqual(db_increment_score(self.db_path, PLAYER_WINS), 2)
        self.assertEqual(db_increment_score(self.db_path, CAT_WINS), 1)
        self.assertEqual(db_load_scores(self.db_path), {PLAYER_WINS: 2, CAT_WINS: 1})

    def test_given_scores_when_resetting_then_zero_again(self):
        db_increment_score(self.db_path, CAT_WINS)
        db_reset_scores(self.db_path)
        self.assertEqual(db_load_scores(self.db_path), {PLAYER_WINS: 0, CAT_WINS: 0})

    def test_given_unknown_counter_when_incrementing_then_value_error(self):
        with self.assertRaises(ValueError):
            db_increment_score(self.db_path, 'draws')

    def test_given_file_in_place_of_directory_when_loading_then_falls_back(self):
        blocker = os.path.join(self._tmp.name, 'blocker')
        with open(blocker, 'w') as f:
            f.write('not a directory')
        alt = os.path.join(self._tmp.name, 'alt')
        for db_path in (os.path.join(blocker, 'scores.db'), os.path.join(blocker, 'sub', 'scores.db')):
            with patch.dict(os.environ, {'CHATNOIR_DB_DIR': alt}):
                self.assertEqual(db_increment_score(db_path, CAT_WINS), 1)
                self.assertEqual(db_load_scores(db_path), {PLAYER_WINS: 0, CAT_WINS: 1})
                db_reset_scores(db_path)
        self.assertTrue(os.path.isfile(os.path.join(alt, 'scores.db')))


if __name__ == '__main__':
    unittest.main(verbosity=2)
