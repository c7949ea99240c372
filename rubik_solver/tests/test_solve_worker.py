# rubik_solver/tests/test_solve_worker.py
import unittest

from PySide6.QtCore import QCoreApplication

from rubik_solver.app.solve_worker import SolveWorker
from rubik_solver.core import apply_moves, solved_state


class TestSolveWorker(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.app = QCoreApplication.instance() or QCoreApplication([])

    def test_run_reports_depths_and_result(self):
        c = apply_moves(solved_state(3), ["R", "U"])
        worker = SolveWorker(c)
        depths, results = [], []
        worker.depth_update.connect(depths.append)
        worker.finished_solution.connect(results.append)
        worker.run()
        self.assertEqual(depths, [1, 2])
        self.assertEqual(len(results), 1)
        self.assertTrue(results[0].success)
        self.assertTrue(apply_moves(c, results[0].solution).is_solved())

    def test_background_thread_for_each_size(self):
        for n, scramble in ((2, "R U'"), (3, "F R"), (4, "U r'")):
            c = apply_moves(solved_state(n), scramble)
            worker = SolveWorker(c, seed=1)
            worker.start()
            self.assertTrue(worker.wait(60_000))
            self.assertIsNotNone(worker.result)
            self.assertTrue(worker.result.success, worker.result.error)
            self.assertTrue(apply_moves(c, worker.result.solution).is_solved())

    def test_invalid_state_is_a_result_not_an_error(self):
        errors = []
        worker = SolveWorker(solved_state(3).with_sticker("D", 0, "W"))
        worker.error.connect(errors.append)
        worker.run()
        self.assertEqual(errors, [])
        self.assertFalse(worker.result.success)


if __name__ == "__main__":
    unittest.main()
