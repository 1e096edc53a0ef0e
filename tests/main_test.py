import argparse
import io
import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest import mock

from lambdastep import main


@mock.patch.object(main, "configure_console")
class MainTestCase(unittest.TestCase):

    def setUp(self):
        self.tmp_dir = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmp_dir.name, "terms.lc")
        with open(self.path, "w", encoding="utf-8") as file:
            file.write("(λx.x) y z\n")

    def tearDown(self):
        self.tmp_dir.cleanup()

    def run_main(self, *argv):
        out = io.StringIO()
        with redirect_stdout(out), redirect_stderr(io.StringIO()):
            main.main(list(argv))
        return out.getvalue()

    def test_file(self, configure_console):
        self.assertEqual("λx.x y z\n(λx.x y) z\ny z\n", self.run_main(self.path))
        configure_console.assert_called_once_with("utf-8")

    def test_options(self, configure_console):
        self.assertEqual("y z\n", self.run_main(self.path, "--final"))

        out = self.run_main(self.path, "--max-steps", "1", "--encoding", "latin-1")
        self.assertTrue(out.startswith("λx.x y z\n(λx.x y) z\n"))
        self.assertIn("did not reach a fixed point", out)
        configure_console.assert_called_with("latin-1")

    def test_bad_arguments(self, configure_console):
        for argv in (["--max-steps", "-1"], ["--max-steps", "many"], ["--encoding", "no-such-codec"]):
            with self.assertRaises(SystemExit) as context:
                self.run_main(*argv)
            self.assertEqual(2, context.exception.code, argv)
        configure_console.assert_not_called()

    def test_missing_file(self, configure_console):
        with self.assertRaises(SystemExit) as context:
            self.run_main(os.path.join(self.tmp_dir.name, "missing.lc"))
        self.assertEqual(1, context.exception.code)


class ArgumentTypesTestCase(unittest.TestCase):

    def test_encoding(self):
        self.assertEqual("utf-8", main.encoding("utf-8"))
        self.assertRaises(argparse.ArgumentTypeError, main.encoding, "no-such-codec")

    def test_steps(self):
        self.assertEqual(0, main.steps("0"))
        self.assertRaises(argparse.ArgumentTypeError, main.steps, "-3")


if __name__ == '__main__':
    unittest.main()
