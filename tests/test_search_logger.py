import os
import tempfile
import unittest

import numpy as np

from dockyard.base_model.score import HardSoftScore
from dockyard.util.search_logger import SearchLogger, SearchState


class TestSearchLogger(unittest.TestCase):

    def setUp(self):
        self.search_logger = SearchLogger(log_every_n_iterations=10)
        self.search_logger.log_state(0, HardSoftScore(5, 3), event_type="start")
        self.search_logger.log_state(1, HardSoftScore(4, 3), "move 1")
        self.search_logger.log_state(2, HardSoftScore(4, 5), "move 2")  # worse and not on the interval, dropped
        self.search_logger.log_state(10, HardSoftScore(4, 4), "move 3")
        self.search_logger.log_state(11, HardSoftScore(0, 6), "move 4")
        self.search_logger.log_state(12, HardSoftScore(0, 6), event_type="end")

    def test_only_interval_best_and_events_are_logged(self):
        self.assertEqual([s.iteration for s in self.search_logger.states], [0, 1, 10, 11, 12])
        self.assertEqual(self.search_logger.get_accepted_moves(), ["move 1", "move 3", "move 4"])
        self.assertEqual(self.search_logger.best_score, HardSoftScore(0, 6))

    def test_trajectories(self):
        np.testing.assert_array_equal(self.search_logger.get_score_trajectory(),
                                      np.array([[5, 3], [4, 3], [4, 4], [0, 6], [0, 6]]))
        np.testing.assert_array_equal(self.search_logger.get_best_score_trajectory(),
                                      np.array([[5, 3], [4, 3], [4, 3], [0, 6], [0, 6]]))
        self.assertEqual(SearchLogger().get_score_trajectory().shape, (0, 2))

    def test_best_score_monotonic(self):
        self.assertTrue(self.search_logger.is_best_score_monotonic())

        tampered = SearchLogger()
        tampered.log_state(0, HardSoftScore(1, 0))
        tampered.log_state(1, HardSoftScore(0, 2))
        tampered.states.append(SearchState(2, HardSoftScore(0, 4), HardSoftScore(0, 4), None, True, False))
        self.assertFalse(tampered.is_best_score_monotonic())

    def test_save_and_load(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            path = os.path.join(tmp_dir, "search_log.json")
            self.search_logger.save_log(path)
            loaded = SearchLogger.load_log(path)
        self.assertEqual(loaded.states, self.search_logger.states)
        self.assertEqual(loaded.best_score, HardSoftScore(0, 6))

    def test_plot_score_trajectory(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            path = os.path.join(tmp_dir, "trajectory.png")
            self.search_logger.plot_score_trajectory(path)
            self.assertGreater(os.path.getsize(path), 0)

        with self.assertRaises(ValueError):
            SearchLogger().plot_score_trajectory(os.path.join(tempfile.gettempdir(), "never_written.png"))


if __name__ == '__main__':
    unittest.main()
