import io
import unittest
from contextlib import redirect_stdout

from lambdacalc.lang.error import ErrorHandler, GenericException, LexError, ParseError
from lambdacalc.pure.parser import parse


def capture(fn, *args, **kwargs):
    """Returns what fn prints, and what it raises or returns."""
    out = io.StringIO()
    with redirect_stdout(out):
        try:
            result = fn(*args, **kwargs)
        except BaseException as exc:  # SystemExit included
            result = exc
    return out.getvalue(), result


class GenericExceptionTestCase(unittest.TestCase):

    def test_init(self):
        error = GenericException("got invalid token {}", "x ? y", 2, args=("?",))
        self.assertIn("got invalid token", error.msg)
        self.assertIn("?", error.msg)
        self.assertEqual(2, error.position)
        self.assertEqual(3, error.end)
        self.assertEqual(error.msg, str(error))

        self.assertEqual(1, GenericException("empty", "", 0, length=0).end)

    def test_taxonomy(self):
        self.assertTrue(issubclass(LexError, GenericException))
        self.assertTrue(issubclass(ParseError, GenericException))
        self.assertFalse(issubclass(LexError, ParseError))


class ErrorHandlerTestCase(unittest.TestCase):

    def test_locate(self):
        source = "let x := a\nin x ?\n"
        cases = {0: ("let x := a", 1, 1), 4: ("let x := a", 1, 5), 16: ("in x ?", 2, 6), 18: ("", 3, 1)}
        for position, expected in cases.items():
            self.assertEqual(expected, ErrorHandler.locate(source, position), position)

    def test_diagnose(self):
        error = GenericException("oops", "f\nx - y", 4)
        first, second = ErrorHandler.diagnose(error).split("\n")
        self.assertTrue(first.startswith("  x "), first)
        self.assertTrue(first.endswith(" y"), first)
        self.assertTrue(second.startswith("    "), second)
        self.assertIn("^", second)

    def test_throw(self):
        error_handler = ErrorHandler()
        error_handler.register_source("<expr>", "λ -> x")
        try:
            parse("λ -> x")
        except ParseError as error:
            output, result = capture(error_handler.throw, error)

        self.assertIsInstance(result, SystemExit)
        self.assertEqual(1, result.code)
        self.assertIn("<expr>:1:3: ", output)
        self.assertIn("error: ", output)
        self.assertIn("an identifier was expected", output)
        self.assertIn("  λ ", output)

    def test_throw_not_fatal(self):
        error_handler = ErrorHandler(fatal=False)
        output, result = capture(error_handler.throw, GenericException("'{}' could not be opened", args=("f.lc",),
                                                                      diagnosis=False))
        self.assertIsNone(result)
        self.assertIn("could not be opened", output)

    def test_warn(self):
        error_handler = ErrorHandler()
        error_handler.register_source("prog.lc", "x")
        output, __ = capture(error_handler.warn, "no normal form was reached within {} steps", args=(10,))
        self.assertIn("prog.lc: ", output)
        self.assertIn("warning: ", output)
        self.assertIn("no normal form was reached within", output)

    def test_context_manager(self):
        def run(exc):
            with ErrorHandler(fatal=False):
                raise exc

        output, result = capture(run, ParseError("a term was expected", "()", 1))
        self.assertIsNone(result)
        self.assertIn("a term was expected", output)

        output, result = capture(run, RecursionError())
        self.assertIsNone(result)
        self.assertIn("maximum recursion depth exceeded", output)

        output, result = capture(run, SystemExit(3))
        self.assertIsInstance(result, SystemExit)
        self.assertEqual("", output)

        # internal errors are reported and then re-raised
        output, result = capture(run, KeyError("k"))
        self.assertIsInstance(result, KeyError)
        self.assertIn("[internal] ", output)


if __name__ == '__main__':
    unittest.main()
