# rubik_solver/tests/test_bfs_solver.py
import unittest

from rubik_solver.config import SolverConfig
from rubik_solver.core import apply_moves, solved_state
from rubik_solver.logic.scramble import generate_scramble
from rubik_solver.solve import solve
from rubik_solver.solve.bfs_solver import bfs_solve, solve_2x2


class TestBfsSolver(unittest.TestCase):
    def test_solved_returns_empty(self):
        self.assertEqual(solve_2x2(solved_state(2)), [])

    def test_single_F_is_undone_by_F_prime(self):
        c = apply_moves(solved_state(2), ["F"])
        self.assertEqual(solve_2x2(c), ["F'"])

    def test_solver_small_scrambles(self):
        for seed in range(4):
            scramble = generate_scramble(6, size=2, seed=seed)
            c = apply_moves(solved_state(2), scramble)
            sol = solve_2x2(c)
            self.assertIsNotNone(sol)
            self.assertLessEqual(len(sol), min(len(scramble), 11))
            self.assertTrue(apply_moves(c, sol).is_solved(), scramble)

    def test_whole_cube_rotation_counts_as_solved(self):
        # En un 2x2, L seguido de R' es sólo un giro del cubo entero
        c = apply_moves(solved_state(2), ["L"])
        self.assertEqual(bfs_solve(c), ["R'"])

    def test_unreachable_state_returns_none(self):
        # Esquina UFR torcida: los colores no cambian de cantidad, pero no tiene solución
        c = solved_state(2).with_sticker("U", 3, "R").with_sticker("F", 1, "B").with_sticker("R", 0, "W")
        self.assertIsNone(bfs_solve(c, max_depth=3))

    def test_path_is_rebuilt_in_order(self):
        c = apply_moves(solved_state(2), ["F", "R", "U"])
        sol = bfs_solve(c)
        self.assertEqual(len(sol), 3)
        self.assertTrue(apply_moves(c, sol).is_solved())

    def test_facade_reports_configured_depth(self):
        c = solved_state(2).with_sticker("U", 3, "R").with_sticker("F", 1, "B").with_sticker("R", 0, "W")
        result = solve(c, SolverConfig(bfs_max_depth=3))
        self.assertFalse(result.success)
        self.assertIsNone(result.solution)
        self.assertIn("3 movimientos", result.error)

    def test_facade_wraps_result(self):
        c = apply_moves(solved_state(2), ["R", "U'"])
        result = solve(c)
        self.assertTrue(result.success)
        self.assertTrue(apply_moves(c, result.solution).is_solved())

    def test_rejects_other_sizes(self):
        with self.assertRaises(ValueError):
            bfs_solve(solved_state(3))


if __name__ == "__main__":
    unittest.main()
