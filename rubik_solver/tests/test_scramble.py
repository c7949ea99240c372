# rubik_solver/tests/test_scramble.py
import random
import unittest

from rubik_solver.core import engine_for
from rubik_solver.logic.scramble import generate_scramble


class TestScramble(unittest.TestCase):
    def test_length_and_no_repeated_face(self):
        seq = generate_scramble(40, seed=1)
        self.assertEqual(len(seq), 40)
        for a, b in zip(seq, seq[1:]):
            self.assertNotEqual(a[0], b[0])

    def test_seed_is_reproducible(self):
        self.assertEqual(generate_scramble(20, seed=42), generate_scramble(20, seed=42))
        rng1, rng2 = random.Random(5), random.Random(5)
        self.assertEqual(generate_scramble(10, rng=rng1), generate_scramble(10, rng=rng2))

    def test_moves_are_legal_for_size(self):
        for size in (2, 3, 4):
            engine = engine_for(size)
            for mv in generate_scramble(50, size=size, seed=size):
                self.assertTrue(engine.is_legal(mv), mv)

    def test_2x2_uses_only_F_R_U(self):
        faces = {mv[0] for mv in generate_scramble(60, size=2, seed=9)}
        self.assertTrue(faces <= {"F", "R", "U"})

    def test_4x4_uses_outer_layers(self):
        self.assertTrue(all(mv[0].isupper() for mv in generate_scramble(60, size=4, seed=9)))

    def test_invalid_arguments(self):
        with self.assertRaises(ValueError):
            generate_scramble(0)
        with self.assertRaises(ValueError):
            generate_scramble(5, size=5)


if __name__ == "__main__":
    unittest.main()
