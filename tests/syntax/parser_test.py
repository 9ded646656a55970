import unittest

from monkey.syntax import ast
from monkey.syntax.parser import Parser, parse
from monkey.syntax.tokenizer import Tokenizer


def parse_expr(source):
    """Parses source, which must be a single expression statement, and returns the expression."""
    program, errors = parse(source)
    assert not errors, errors
    assert len(program.statements) == 1, program.statements
    stmt, = program.statements
    assert isinstance(stmt, ast.ExpressionStatement), stmt
    return stmt.expr


class ParserTestCase(unittest.TestCase):

    def test_let_statements(self):
        cases = {
            "let x = 5;": ("x", ast.IntegerLiteral(5)),
            "let y = true;": ("y", ast.Boolean(True)),
            "let foobar = y;": ("foobar", ast.Identifier("y")),
            "let s = \"aaa\";": ("s", ast.StringLiteral("aaa")),
        }
        for case, (name, value) in cases.items():
            program, errors = parse(case)
            self.assertEqual([], errors, case)

            stmt, = program.statements
            self.assertIsInstance(stmt, ast.LetStatement, case)
            self.assertEqual(name, stmt.name.name, case)
            self.assertEqual(value, stmt.value, case)

    def test_return_statements(self):
        cases = {
            "return 5;": ast.IntegerLiteral(5),
            "return true;": ast.Boolean(True),
            "return foobar;": ast.Identifier("foobar"),
        }
        for case, value in cases.items():
            program, errors = parse(case)
            self.assertEqual([], errors, case)

            stmt, = program.statements
            self.assertIsInstance(stmt, ast.ReturnStatement, case)
            self.assertEqual(value, stmt.value, case)

    def test_literals(self):
        cases = {
            "5;": ast.IntegerLiteral(5),
            "a;": ast.Identifier("a"),
            "true;": ast.Boolean(True),
            "false": ast.Boolean(False),
            "\"aaa\";": ast.StringLiteral("aaa"),
            "9223372036854775807": ast.IntegerLiteral(2 ** 63 - 1),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, parse_expr(case), case)

    def test_prefix_expressions(self):
        cases = {
            "!5;": ("!", ast.IntegerLiteral(5)),
            "-15;": ("-", ast.IntegerLiteral(15)),
            "+15;": ("+", ast.IntegerLiteral(15)),
            "!foobar;": ("!", ast.Identifier("foobar")),
            "-foobar;": ("-", ast.Identifier("foobar")),
            "!true;": ("!", ast.Boolean(True)),
            "!false;": ("!", ast.Boolean(False)),
        }
        for case, (operator, operand) in cases.items():
            expr = parse_expr(case)
            self.assertIsInstance(expr, ast.PrefixExpression, case)
            self.assertEqual(operator, expr.operator, case)
            self.assertEqual(operand, expr.operand, case)

    def test_infix_expressions(self):
        for operator in ["+", "-", "*", "/", ">", "<", "==", "!="]:
            for left, right in [("5", "5"), ("foobar", "barfoo"), ("true", "false")]:
                case = f"{left} {operator} {right};"
                expr = parse_expr(case)
                self.assertIsInstance(expr, ast.InfixExpression, case)
                self.assertEqual(operator, expr.operator, case)
                self.assertEqual(left, str(expr.left), case)
                self.assertEqual(right, str(expr.right), case)

    def test_precedence(self):
        cases = {
            "a + b * c": "(a + (b * c))",
            "-a * b": "((-a) * b)",
            "1 + (2 + 3) + 4": "((1 + (2 + 3)) + 4)",
            "!-a": "(!(-a))",
            "a + b + c": "((a + b) + c)",
            "a + b - c": "((a + b) - c)",
            "a * b * c": "((a * b) * c)",
            "a * b / c": "((a * b) / c)",
            "a + b / c": "(a + (b / c))",
            "a + b * c + d / e - f": "(((a + (b * c)) + (d / e)) - f)",
            "5 > 4 == 3 < 4": "((5 > 4) == (3 < 4))",
            "5 < 4 != 3 > 4": "((5 < 4) != (3 > 4))",
            "3 + 4 * 5 == 3 * 1 + 4 * 5": "((3 + (4 * 5)) == ((3 * 1) + (4 * 5)))",
            "true == !false": "(true == (!false))",
            "(5 + 5) * 2": "((5 + 5) * 2)",
            "2 / (5 + 5)": "(2 / (5 + 5))",
            "-(5 + 5)": "(-(5 + 5))",
            "!(true == true)": "(!(true == true))",
            "a + add(b * c) + d": "((a + add((b * c))) + d)",
            "add(a, b, 1, 2 * 3, 4 + 5, add(6, 7 * 8))": "add(a, b, 1, (2 * 3), (4 + 5), add(6, (7 * 8)))",
            "add(a + b + c * d / f + g)": "add((((a + b) + ((c * d) / f)) + g))",
            "-add(1)": "(-add(1))",
            "a * [1, 2, 3, 4][b * c] * d": "((a * ([1, 2, 3, 4][(b * c)])) * d)",
            "add(a * b[2], b[1], 2 * [1, 2][1])": "add((a * (b[2])), (b[1]), (2 * ([1, 2][1])))",
            "-a[0]": "(-(a[0]))",
        }
        for case, expected in cases.items():
            program, errors = parse(case)
            self.assertEqual([], errors, case)
            self.assertEqual(expected, str(program), case)

    def test_if_expression(self):
        expr = parse_expr("if (x < y) { x }")
        self.assertIsInstance(expr, ast.IfExpression)
        self.assertEqual("(x < y)", str(expr.condition))
        self.assertEqual([ast.ExpressionStatement(ast.Identifier("x"))], expr.consequence.statements)
        self.assertIsNone(expr.alternative)

        expr = parse_expr("if (x < y) { x } else { y; z }")
        self.assertEqual("x", str(expr.consequence))
        self.assertEqual(2, len(expr.alternative.statements))

    def test_function_literal(self):
        expr = parse_expr("fn(x, y) { x + y; }")
        self.assertIsInstance(expr, ast.FunctionLiteral)
        self.assertEqual([ast.Identifier("x"), ast.Identifier("y")], expr.params)
        self.assertEqual("(x + y)", str(expr.body))

        cases = {
            "fn() {};": [],
            "fn(x) {};": ["x"],
            "fn(x, y, z) {};": ["x", "y", "z"],
        }
        for case, expected in cases.items():
            self.assertEqual(expected, [param.name for param in parse_expr(case).params], case)

    def test_call_expression(self):
        expr = parse_expr("add(1, 2 * 3, 4 + 5);")
        self.assertIsInstance(expr, ast.CallExpression)
        self.assertEqual(ast.Identifier("add"), expr.callee)
        self.assertEqual(["1", "(2 * 3)", "(4 + 5)"], [str(arg) for arg in expr.args])

        self.assertEqual([], parse_expr("f()").args)

    def test_array_and_index(self):
        expr = parse_expr("[1, 2 * 2, 3 + 3]")
        self.assertIsInstance(expr, ast.ArrayLiteral)
        self.assertEqual(["1", "(2 * 2)", "(3 + 3)"], [str(element) for element in expr.elements])
        self.assertEqual([], parse_expr("[]").elements)

        expr = parse_expr("myArray[1 + 1]")
        self.assertIsInstance(expr, ast.IndexExpression)
        self.assertEqual(ast.Identifier("myArray"), expr.collection)
        self.assertEqual("(1 + 1)", str(expr.index))

    def test_errors(self):
        cases = {
            "let = 5;": ["expected next token to be IDENT, got = instead"],
            "let x 5;": ["expected next token to be =, got INT instead"],
            "let x = 5": ["expected next token to be ;, got EOF instead"],
            "return 5": ["expected next token to be ;, got EOF instead"],
            "5 +;": ["no prefix parse function for ; found"],
            "@": ["no prefix parse function for ILLEGAL found"],
            "(1 + 2": ["expected next token to be ), got EOF instead"],
            "if x { x }": ["expected next token to be (, got IDENT instead"],
            "if (x) { x": ["expected next token to be }, got EOF instead"],
            "fn(1) {}": ["expected next token to be IDENT, got INT instead"],
            "[1, 2": ["expected next token to be ], got EOF instead"],
            "99999999999999999999": ["could not parse 99999999999999999999 as integer"],
            "1" * 5000: [f"could not parse {'1' * 5000} as integer"],
        }
        for case, expected in cases.items():
            __, errors = parse(case)
            self.assertEqual(expected, errors, case)

    def test_only_identifiers_are_callable(self):
        should_fail = ["fn(x) { x }(5)", "add(1)(2)", "xs[0](1)", "(1 + 2)(3)"]
        for case in should_fail:
            __, errors = parse(case)
            self.assertTrue(errors, case)
            self.assertIn("only identifiers can be called", errors[0], case)

    def test_resynchronize(self):
        program, errors = parse("let = 1; let y = 2; let 3; y;")
        self.assertEqual(2, len(errors))
        self.assertEqual("let y = 2; y", str(program))

    def test_parser_state(self):
        parser = Parser(Tokenizer("let x = 1;"))
        self.assertEqual("let", parser.current.literal)
        self.assertEqual("x", parser.next.literal)
        self.assertEqual(1, len(parser.parse_program().statements))
        self.assertEqual([], parser.errors)


if __name__ == '__main__':
    unittest.main()
