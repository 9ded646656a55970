import io
import os
import tempfile
import unittest
from contextlib import redirect_stdout

from monkey.lang.error import ErrorHandler, GenericException, ParseError
from monkey.lang.session import Session
from monkey.runtime.objects import NULL, Error, Integer, String


class SessionTestCase(unittest.TestCase):

    def setUp(self):
        self.error_handler = ErrorHandler(fatal=False)
        self.sess = Session(self.error_handler, Session.SH_FILE, cmd_line=True)

    def test_bindings_persist(self):
        self.sess.add("let x = 5;", 1)
        self.sess.run()
        self.assertEqual([], self.sess.results)

        self.sess.add("let double = fn(n) { n * 2 };", 2)
        self.sess.add("double(x)", 3)
        self.sess.run()
        self.assertEqual(Integer(10), self.sess.pop())
        self.assertEqual([], self.sess.results)
        self.assertEqual({}, self.sess.to_run)

    def test_results_in_order(self):
        self.sess.add("1", 1)
        self.sess.add("\"two\"", 2)
        self.sess.add("if (false) { 3 }", 3)
        self.sess.run()

        self.assertEqual(Integer(1), self.sess.pop())
        self.assertEqual(String("two"), self.sess.pop())
        self.assertIs(NULL, self.sess.pop())

    def test_evaluation_errors_are_results(self):
        self.sess.add("5 + true;", 1)
        self.sess.run()
        self.assertEqual(Error("type mismatch: INTEGER + BOOLEAN"), self.sess.pop())

    def test_parse_errors(self):
        with self.assertRaises(ParseError) as context:
            self.sess.add("let x 5; let = 1;", 1)

        self.assertEqual(["expected next token to be =, got INT instead",
                          "expected next token to be IDENT, got = instead"], context.exception.errors)
        self.assertEqual({}, self.sess.to_run)

    def test_preprocess_line(self):
        cases = {
            "  5  ": ("5", False),
            "let f = fn(x) {": ("let f = fn(x) {", True),
            "let f = fn(x) { x };": ("let f = fn(x) { x };", False),
            "[1, 2,": ("[1, 2,", True),
            "add(1,": ("add(1,", True),
            "\"{\"": ("\"{\"", False),
            "}": ("}", False),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, Session.preprocess_line(case), case)

    def test_shadowing_warning(self):
        output = io.StringIO()
        with redirect_stdout(output):
            self.sess.add("let len = 1;", 1)
        self.assertIn("warning", output.getvalue())
        self.assertIn("shadows a built-in function", output.getvalue())

        output = io.StringIO()
        with redirect_stdout(output):
            self.sess.add("let size = 1;", 2)
        self.assertEqual("", output.getvalue())

    def test_shadowing_warning_location(self):
        output = io.StringIO()
        with redirect_stdout(output):
            self.sess.add("let x = len; let len = 1;", 1)
        self.assertIn("<in>:1:17: ", output.getvalue())

    def test_verbose(self):
        self.error_handler.verbose = True

        output = io.StringIO()
        with redirect_stdout(output):
            self.sess.add("let f = fn(x) { x + 1 };", 1)
            self.sess.add("f(2 * 3)", 2)
            self.sess.run()

        self.assertIn("[ast]", output.getvalue())
        self.assertIn("let f = fn(x) { (x + 1) };", output.getvalue())
        self.assertIn("[call]", output.getvalue())
        self.assertIn("f(6)", output.getvalue())
        self.assertEqual(Integer(7), self.sess.pop())

    def test_file(self):
        source = """let fib = fn(n) {
    if (n < 2) { return n; }
    fib(n - 1) + fib(n - 2)
};

let xs = push([1, 2], fib(7));
len(xs) + last(xs)
"""
        with tempfile.NamedTemporaryFile("w", suffix=".mk", delete=False) as file:
            file.write(source)
        try:
            sess = Session(ErrorHandler(fatal=False), file.name, cmd_line=False)
            sess.run()
        finally:
            os.remove(file.name)

        self.assertEqual([Integer(16)], sess.results)

    def test_bad_paths(self):
        self.assertRaises(GenericException, Session, ErrorHandler(fatal=False), "does/not/exist.mk", False)
        self.assertRaises(GenericException, Session, ErrorHandler(fatal=False), Session.SH_FILE, False)


if __name__ == '__main__':
    unittest.main()
