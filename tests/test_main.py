import io
import tempfile
import unittest
from contextlib import redirect_stderr
from pathlib import Path

from main import Options, main, parse_args, run
from tests.test_utilities import CONFIG


class MainTests(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self.tmp.name)
        self.addCleanup(self.tmp.cleanup)

    def write(self, name, text):
        path = self.dir / name
        path.write_text(text, encoding="utf-8")
        return str(path)

    def test_config_input_output(self):
        conf = self.write("default.conf", CONFIG)
        inp = self.write("input.in", "* B I II III AAA\nAAAAA AAAAA\n")
        out = str(self.dir / "output.out")

        self.assertEqual(main([conf, inp, out]), 0)
        self.assertTrue(Path(out).read_text(encoding="utf-8").startswith("BDZGO "))

    def test_suite_with_stdin(self):
        stdout = io.StringIO()
        run(Options(suite="M3"), io.StringIO("* B I II III AAA BBB\nAAAAA\n"), stdout)
        self.assertEqual(stdout.getvalue(), "EWTYX\n")

    def test_errors_exit_with_status_one(self):
        conf = self.write("default.conf", CONFIG)
        bad = self.write("bad.in", "* B I I III AAA\nAAAAA\n")
        err = io.StringIO()
        with redirect_stderr(err):
            self.assertEqual(main([conf, bad]), 1)
            self.assertEqual(main([str(self.dir / "missing.conf")]), 1)
        self.assertIn("Error: Duplicate rotor names", err.getvalue())
        self.assertIn("Error: could not open", err.getvalue())

    def test_argument_shapes(self):
        self.assertEqual(parse_args(["--suite", "M4"]).config, None)
        opts = parse_args(["c.conf", "in.txt", "out.txt"])
        self.assertEqual((opts.config, opts.input, opts.output),
                         (Path("c.conf"), Path("in.txt"), Path("out.txt")))
        with redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit):
                parse_args([])
            with self.assertRaises(SystemExit):
                parse_args(["--suite", "M3", "a", "b", "c"])

    def test_verbose_run_traces(self):
        with self.assertLogs("ENIGMA", level="DEBUG") as cm:
            run(Options(suite="M3", verbose=True),
                io.StringIO("* B I II III AAA\nA\n"), io.StringIO())
        self.assertTrue(any("[MACHINE] [AAB]" in line for line in cm.output))


if __name__ == "__main__":
    unittest.main()
