import unittest
from random import Random

from settings_generator import build_rng, choose_pairs, generate_settings, main
from suites import FIXED, build_machine
from utilities import set_up


class GeneratorTests(unittest.TestCase):
    def test_choose_pairs_are_disjoint(self):
        pairs = choose_pairs("ABCDEFGHIJ", 4, Random(3))
        letters = "".join(pairs)

        self.assertEqual(len(pairs), 4)
        self.assertEqual(len(set(letters)), len(letters))
        self.assertEqual(len(choose_pairs("ABCDE", 10, Random(3))), 2)

    def test_generated_settings_are_accepted(self):
        for suite in ("M3", "M4"):
            for seed in range(20):
                with self.subTest(suite=suite, seed=seed):
                    m = build_machine(suite)
                    settings = generate_settings(m, build_rng(seed))
                    set_up(m, settings.line())
                    self.assertEqual(m.convert("HELLO").isalpha(), True)

    def test_fixed_rotor_stays_at_zero(self):
        settings = generate_settings(build_machine("M4"), Random(11))
        self.assertIn(settings.rotors[1], FIXED)
        self.assertEqual(settings.positions[0], "A")

    def test_seed_is_deterministic(self):
        m = build_machine("M3")
        first = generate_settings(m, build_rng(42), plug_pairs=5).line()
        again = generate_settings(m, build_rng(42), plug_pairs=5).line()
        self.assertEqual(first, again)

    def test_without_rings(self):
        settings = generate_settings(build_machine("M3"), Random(1), with_rings=False)
        self.assertIsNone(settings.rings)

    def test_cli(self):
        from contextlib import redirect_stdout
        from io import StringIO

        buf = StringIO()
        with redirect_stdout(buf):
            code = main(["--suite", "M3", "--seed", "7", "--pairs", "3"])
        self.assertEqual(code, 0)
        line = buf.getvalue().strip()
        self.assertTrue(line.startswith("* "))
        self.assertEqual(line.count("("), 3)


if __name__ == "__main__":
    unittest.main()
