import io
import unittest
from contextlib import redirect_stdout

from lambdastep.lang.error import ErrorHandler, GenericException, ParseError


class GenericExceptionTestCase(unittest.TestCase):

    def test_init(self):
        error = ParseError("'{}' is not valid λ-term grammar", "x1")
        self.assertIsInstance(error, GenericException)
        self.assertEqual("'x1' is not valid λ-term grammar", str(error))
        self.assertEqual((0, 2), (error.start, error.end))

        error = GenericException("'{1}' is bad", ("a (x y)", "x"), start=3, end=4)
        self.assertEqual("'x' is bad", str(error))
        self.assertEqual("a (x y)", error.expr)


class ErrorHandlerTestCase(unittest.TestCase):

    def test_diagnose(self):
        error = GenericException("oops", "abc def", start=4, end=7)
        diagnosis = ErrorHandler.diagnose(error)
        self.assertIn("def", diagnosis)
        self.assertIn("^~~", diagnosis)

    def test_non_fatal(self):
        out = io.StringIO()
        with redirect_stdout(out):
            with ErrorHandler(fatal=False) as error_handler:
                error_handler.register_file("<in>")
                error_handler.register_line("<in>", "(x y)", 3)
                raise ParseError("'{1}' is not an abstraction, so it cannot be applied", ("(x y)", "x"), 1, 2)

        self.assertIn("error: ", out.getvalue())
        self.assertIn("<in>:3:", out.getvalue())
        self.assertIn("cannot be applied", out.getvalue())
        self.assertEqual({"<in>": (None, None)}, error_handler.traceback)

    def test_fatal(self):
        with redirect_stdout(io.StringIO()):
            with self.assertRaises(SystemExit):
                with ErrorHandler():
                    raise ParseError("'{}' has mismatched parentheses", "(x")

    def test_keyboard_interrupt(self):
        out = io.StringIO()
        with redirect_stdout(out):
            with ErrorHandler(fatal=False):
                raise KeyboardInterrupt()
        self.assertIn("keyboard interrupt", out.getvalue())

    def test_internal(self):
        out = io.StringIO()
        with redirect_stdout(out):
            with self.assertRaises(ValueError):
                with ErrorHandler(fatal=False):
                    raise ValueError("{not a format}")
        self.assertIn("[internal]", out.getvalue())

    def test_warn(self):
        out = io.StringIO()
        with redirect_stdout(out):
            ErrorHandler().warn("'{}' did not reach a fixed point within {} steps", ("x", "3"), diagnosis=False)
        self.assertIn("warning: ", out.getvalue())
        self.assertIn("did not reach a fixed point", out.getvalue())


if __name__ == '__main__':
    unittest.main()
