import unittest

from alphabet_and_permutation import Permutation
from errors import ConfigurationError
from rotor_and_reflector import RotorKind
from suites import REFLECTORS, ROTORS
from utilities import (
    Settings,
    format_message_line,
    parse_settings,
    process,
    read_config,
    set_up,
)

CONFIG = """
ABCDEFGHIJKLMNOPQRSTUVWXYZ
4 3
I MQ      (AELTPHQXRU) (BKNW) (CMOY) (DFG) (IV) (JZ) (S)
II ME     (FIXVYOMW) (CDKLHUP) (ESZ) (BJ) (GR) (NT) (A) (Q)
III MV    (ABDHPEJT) (CFLVMZOYQIRWUKXSG) (N)
Id N      (AB)
B R       (AY) (BR) (CU) (DH) (EQ) (FS) (GL) (IP) (JX) (KN)
          (MO) (TZ) (VW)
"""


class ReadConfigTests(unittest.TestCase):
    def test_roster(self):
        m = read_config(CONFIG)
        roster = {r.name(): r for r in m.all_rotors()}

        self.assertEqual(m.num_rotors(), 4)
        self.assertEqual(m.num_pawls(), 3)
        self.assertEqual(list(roster), ["I", "II", "III", "Id", "B"])
        self.assertEqual(roster["II"].notches(), "E")
        self.assertEqual(roster["Id"].kind, RotorKind.FIXED)
        self.assertTrue(roster["B"].reflecting())

    def test_cycles_match_wirings(self):
        m = read_config(CONFIG)
        alpha = m.alphabet()
        roster = {r.name(): r for r in m.all_rotors()}
        for name in ("I", "II", "III"):
            wiring = Permutation.from_wiring(ROTORS[name][0], alpha)
            self.assertEqual(roster[name].permutation(), wiring, name)
        self.assertEqual(
            roster["B"].permutation(), Permutation.from_wiring(REFLECTORS["B"], alpha)
        )

    def test_drives_messages(self):
        m = read_config(CONFIG)
        out = list(process(m, ["* B I II III AAA", "AAAAA"]))
        self.assertEqual(out, ["BDZGO"])

    def test_bad_configurations(self):
        alpha = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
        cases = {
            "truncated": alpha,
            "counts": f"{alpha}\n4 x\n",
            "extra counts": f"{alpha}\n4 3 2\n",
            "rotor type": f"{alpha}\n4 3\nI X (AB)\n",
            "fixed with notch": f"{alpha}\n4 3\nI NQ (AB)\n",
            "cycles": f"{alpha}\n4 3\nI MQ (AB\n",
            "orphan cycles": f"{alpha}\n4 3\n(AB)\n",
            "duplicate": f"{alpha}\n4 3\nI MQ (AB)\nI MQ (CD)\n",
            "no type": f"{alpha}\n4 3\nI\n",
        }
        for label, text in cases.items():
            with self.subTest(label):
                with self.assertRaises(ConfigurationError):
                    read_config(text)


class SettingsTests(unittest.TestCase):
    def setUp(self):
        self.m = read_config(CONFIG)

    def test_parse_full_line(self):
        settings = parse_settings(self.m, "* B I II III AAA BBB (AB) (CD)")
        self.assertEqual(
            settings, Settings(["B", "I", "II", "III"], "AAA", "BBB", "(AB) (CD)")
        )
        self.assertEqual(settings.line(), "* B I II III AAA BBB (AB) (CD)")

    def test_parse_errors(self):
        cases = {
            "B I II III AAA": "No settings line",
            "* B I II AAA": "Wrong number of rotors",
            "* B I II III AA": "Inconsistent number of rotors",
            "* B I II III AAA BB": "Ring setting",
        }
        for line, pattern in cases.items():
            with self.subTest(line):
                with self.assertRaisesRegex(ConfigurationError, pattern):
                    parse_settings(self.m, line)

    def test_plugboard_must_pair(self):
        with self.assertRaisesRegex(ConfigurationError, "pairs"):
            set_up(self.m, "* B I II III AAA (ABC)")

    def test_rings_reset_when_omitted(self):
        set_up(self.m, "* B I II III AAA BBB")
        self.assertEqual(self.m.get_rotor(1).ring_offset, 1)

        set_up(self.m, "* B I II III AAA")
        self.assertEqual(
            [self.m.get_rotor(k).ring_offset for k in range(1, 4)], [0, 0, 0]
        )

    def test_plugboard_replaced(self):
        set_up(self.m, "* B I II III AAA (AZ)")
        self.assertEqual(self.m.plugboard().permute("A"), "Z")
        set_up(self.m, "* B I II III AAA")
        self.assertEqual(self.m.plugboard().permute("A"), "A")


class ProcessTests(unittest.TestCase):
    def test_blank_lines_and_grouping(self):
        m = read_config(CONFIG)
        lines = ["\n", "* B I II III AAA\n", "AAA AA\n", "\n", "* B I II III AAA\n", "AAAAAAAA\n"]
        out = list(process(m, lines))

        self.assertEqual(out[:3], ["", "BDZGO", ""])
        self.assertTrue(out[3].startswith("BDZGO "))
        self.assertEqual(len(out[3]), 9)

    def test_message_before_settings(self):
        m = read_config(CONFIG)
        with self.assertRaisesRegex(ConfigurationError, "No settings line"):
            list(process(m, ["HELLO"]))

    def test_format_message_line(self):
        self.assertEqual(format_message_line("ABCDEFGHIJKL"), "ABCDE FGHIJ KL")
        self.assertEqual(format_message_line("AB CD EF"), "ABCDE F")
        self.assertEqual(format_message_line("ABCDEF", block=3), "ABC DEF")
        self.assertEqual(format_message_line(""), "")


if __name__ == "__main__":
    unittest.main()
