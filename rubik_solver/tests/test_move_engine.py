# rubik_solver/tests/test_move_engine.py
import unittest

from rubik_solver.core import EngineDefectError, MoveEngine, apply_moves, engine_for, solved_state
from rubik_solver.logic.scramble import generate_scramble
from rubik_solver.solve.reduction_solver import center_score, edge_score


class TestMoveEngine(unittest.TestCase):
    def test_move_then_inverse_returns(self):
        for n in (2, 3):
            engine = engine_for(n)
            start = apply_moves(solved_state(n), "R U F' D2 L B'")
            for mv in engine.moves:
                (inv,) = engine.inverse_moves(mv)
                self.assertEqual(engine.apply(engine.apply(start, mv), inv), start, mv)

    def test_4x4_quarter_turn_undone_by_three_repetitions(self):
        engine = engine_for(4)
        start = apply_moves(solved_state(4), "R u F' d2 l B")
        for mv in engine.moves:
            after = engine.apply(start, mv)
            if mv.endswith("2"):
                self.assertEqual(engine.inverse_moves(mv), [mv])
                self.assertEqual(engine.apply(after, mv), start, mv)
            else:
                self.assertEqual(engine.inverse_moves(mv), [mv, mv, mv])
                undone = engine.apply(engine.apply(engine.apply(after, mv), mv), mv)
                self.assertEqual(undone, start, mv)

    def test_half_turn_equals_two_quarters(self):
        for n in (2, 3, 4):
            engine = engine_for(n)
            for base in engine.bases:
                c1 = engine.apply(solved_state(n), base + "2")
                c2 = engine.apply(engine.apply(solved_state(n), base), base)
                self.assertEqual(c1, c2, base)

    def test_prime_equals_three_quarters(self):
        engine = engine_for(4)
        for base in engine.bases:
            c1 = engine.apply(solved_state(4), base + "'")
            c2 = engine.apply_sequence(solved_state(4), [base, base, base])
            self.assertEqual(c1, c2, base)

    def test_F_moves_boundary_like_standard_notation(self):
        c = apply_moves(solved_state(3), ["F"])
        self.assertEqual([c.sticker("R", i) for i in (0, 3, 6)], ["W"] * 3)
        self.assertEqual([c.sticker("D", i) for i in (0, 1, 2)], ["B"] * 3)
        self.assertEqual([c.sticker("L", i) for i in (2, 5, 8)], ["Y"] * 3)
        self.assertEqual([c.sticker("U", i) for i in (6, 7, 8)], ["G"] * 3)
        self.assertEqual(set(c.face("F")), {"R"})

    def test_U_and_R_directions(self):
        c = apply_moves(solved_state(3), ["U"])
        self.assertEqual(c.face("F")[:3], ("B", "B", "B"))
        c = apply_moves(solved_state(3), ["R"])
        self.assertEqual([c.sticker("U", i) for i in (2, 5, 8)], ["R"] * 3)

    def test_face_rotation_is_clockwise(self):
        s = solved_state(3).with_sticker("F", 0, "W").with_sticker("U", 0, "Y")
        # F: la esquina superior izquierda pasa a la superior derecha
        self.assertEqual(apply_moves(s, ["F"]).sticker("F", 2), "W")
        # U visto desde arriba: la esquina junto a B-L pasa a B-R
        self.assertEqual(apply_moves(s, ["U"]).sticker("U", 2), "Y")

    def test_2x2_F(self):
        c = apply_moves(solved_state(2), ["F"])
        self.assertEqual([c.sticker("R", 0), c.sticker("R", 2)], ["W", "W"])
        self.assertEqual(c.face("U")[2:], ("G", "G"))

    def test_4x4_inner_slices(self):
        c = apply_moves(solved_state(4), ["u"])
        self.assertEqual(c.face("F")[4:8], ("B",) * 4)
        self.assertEqual(c.face("F")[:4], ("R",) * 4)
        self.assertEqual(set(c.face("U")), {"W"})

        c = apply_moves(solved_state(4), ["r"])
        self.assertEqual([c.sticker("U", i) for i in (2, 6, 10, 14)], ["R"] * 4)
        self.assertEqual([c.sticker("U", i) for i in (3, 7, 11, 15)], ["W"] * 4)

    def test_color_counts_remain_constant(self):
        for n in (2, 3, 4):
            seq = ["R", "U", "R'", "U'", "L", "D", "L'", "D'", "U2", "R2"]
            if n == 4:
                seq += ["r", "u'", "f2", "b", "l'", "d"]
            c = apply_moves(solved_state(n), seq)
            for color, count in c.color_counts().items():
                self.assertEqual(count, n * n, color)

    def test_centers_never_leave_their_face(self):
        c = apply_moves(solved_state(3), generate_scramble(30, seed=7))
        self.assertEqual([c.sticker(f, 4) for f in "UDFBLR"], list("WYROGB"))

    def test_outer_moves_keep_4x4_reduced(self):
        c = apply_moves(solved_state(4), generate_scramble(25, size=4, seed=3))
        self.assertEqual(center_score(c), 24)
        self.assertEqual(edge_score(c), 12)

    def test_commutator_has_order_six(self):
        c = solved_state(3)
        for _ in range(6):
            c = apply_moves(c, "R U R' U'")
        self.assertTrue(c.is_solved())

    def test_rejects_unknown_moves(self):
        with self.assertRaises(ValueError):
            apply_moves(solved_state(3), ["r"])
        with self.assertRaises(ValueError):
            apply_moves(solved_state(3), ["X"])
        with self.assertRaises(ValueError):
            apply_moves(solved_state(2), ["R3"])
        with self.assertRaises(ValueError):
            engine_for(3).apply(solved_state(4), "R")

    def test_missing_move_is_an_engine_defect(self):
        class BrokenEngine(MoveEngine):
            def _layer_permutation(self, base):
                if base == "B":
                    return tuple(range(6 * self.n * self.n))
                return super()._layer_permutation(base)

        with self.assertRaises(EngineDefectError):
            BrokenEngine(3)

    def test_declared_moves(self):
        self.assertEqual(len(engine_for(2).moves), 18)
        self.assertEqual(len(engine_for(3).moves), 18)
        self.assertEqual(len(engine_for(4).moves), 36)
        self.assertFalse(engine_for(3).is_legal("u"))
        self.assertTrue(engine_for(4).is_legal("u2"))


if __name__ == "__main__":
    unittest.main()
