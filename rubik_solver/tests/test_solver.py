# rubik_solver/tests/test_solver.py
import unittest

from rubik_solver.config import SolverConfig
from rubik_solver.core import apply_moves, solved_state
from rubik_solver.logic.scramble import generate_scramble
from rubik_solver.solve.iddfs_solver import (
    CANCELLED,
    EXHAUSTED,
    TIMEOUT,
    distance_table,
    iddfs_search,
    iddfs_solve,
    solve_3x3,
)


class TestSolver(unittest.TestCase):
    def test_solver_small_scramble(self):
        c = apply_moves(solved_state(3), "R U R' U'")
        sol = iddfs_solve(c, max_depth=6)
        self.assertIsNotNone(sol)
        self.assertTrue(apply_moves(c, sol).is_solved())

    def test_solved_returns_empty(self):
        result = solve_3x3(solved_state(3))
        self.assertTrue(result.success)
        self.assertEqual(result.solution, [])

    def test_sune_like_scramble(self):
        c = apply_moves(solved_state(3), ["F", "R", "U", "R'", "U'", "F'"])
        result = solve_3x3(c)
        self.assertTrue(result.success, result.error)
        self.assertTrue(apply_moves(c, result.solution).is_solved())

    def test_seeded_scrambles(self):
        for seed in range(3):
            scramble = generate_scramble(6, seed=seed)
            c = apply_moves(solved_state(3), scramble)
            result = solve_3x3(c)
            self.assertTrue(result.success, scramble)
            self.assertLessEqual(len(result.solution), len(scramble))
            self.assertTrue(apply_moves(c, result.solution).is_solved(), scramble)

    def test_finds_shortest_depth_first(self):
        depths = []
        c = apply_moves(solved_state(3), ["R", "U"])
        sol = iddfs_solve(c, on_depth=depths.append)
        self.assertEqual(len(sol), 2)
        self.assertEqual(depths, [1, 2])

    def test_invalid_configuration_is_reported(self):
        c = solved_state(3).with_sticker("D", 0, "W")
        result = solve_3x3(c)
        self.assertFalse(result.success)
        self.assertIsNone(result.solution)
        self.assertTrue(result.error)

    def test_impossible_state_exhausts(self):
        c = solved_state(3).with_sticker("U", 8, "R").with_sticker("F", 2, "B").with_sticker("R", 0, "W")
        result = solve_3x3(c, SolverConfig(iddfs_max_depth=3))
        self.assertFalse(result.success)
        _, status = iddfs_search(c, max_depth=3)
        self.assertEqual(status, EXHAUSTED)

    def test_time_budget_is_a_failure_not_a_crash(self):
        c = apply_moves(solved_state(3), generate_scramble(12, seed=11))
        config = SolverConfig(iddfs_time_limit=-1.0, node_check_interval=1)
        result = solve_3x3(c, config)
        self.assertFalse(result.success)
        self.assertIn("tiempo", result.error)

    def test_cancellation(self):
        c = apply_moves(solved_state(3), "R U F")
        sol, status = iddfs_search(c, should_cancel=lambda: True)
        self.assertIsNone(sol)
        self.assertEqual(status, CANCELLED)

    def test_search_limits_come_from_config(self):
        depths = []
        c = apply_moves(solved_state(3), ["R", "U"])
        sol, status = iddfs_search(c, on_depth=depths.append, config=SolverConfig(iddfs_max_depth=1))
        self.assertIsNone(sol)
        self.assertEqual(status, EXHAUSTED)
        self.assertEqual(depths, [1])

        config = SolverConfig(iddfs_time_limit=-1.0, node_check_interval=1)
        sol, status = iddfs_search(c, config=config)
        self.assertIsNone(sol)
        self.assertEqual(status, TIMEOUT)
        self.assertIsNone(iddfs_solve(c, config=config))

    def test_distance_table(self):
        table = distance_table(2)
        self.assertEqual(table[solved_state(3).to_hashable()], 0)
        self.assertEqual(table[apply_moves(solved_state(3), ["R2"]).to_hashable()], 1)
        self.assertEqual(len(table), 1 + 18 + 243)


if __name__ == "__main__":
    unittest.main()
