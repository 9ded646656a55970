"""Tree-walking evaluator of the monkey language.

Evaluation dispatches on the type of each syntax tree node and returns a runtime object. Two kinds of objects travel
upward instead of being used as values:
    1. ReturnValue: produced by a return statement, unwinds blocks up to the enclosing function call (or the program)
    2. Error: produced by any failing operation, unwinds everything up to the program

Let statements evaluate to None: they only bind a name. A block whose last statement is a let evaluates to NULL, a
program whose last statement is a let evaluates to None (nothing to print).
"""

from monkey.lang.error import GenericException
from monkey.runtime.builtins import BUILTINS
from monkey.runtime.environment import Environment
from monkey.runtime.objects import (NULL, Array, Error, Function, Integer, ObjectType, ReturnValue, String, is_error,
                                    is_truthy, native_bool)
from monkey.syntax import ast

INT64_MIN = -2 ** 63
INT64_RANGE = 2 ** 64


def int64(value):
    """Wraps value to a signed 64-bit integer (two's complement)."""
    return (value - INT64_MIN) % INT64_RANGE + INT64_MIN


def _unwinds(obj):
    return obj is not None and obj.type in (ObjectType.RETURN_VALUE, ObjectType.ERROR)


class Evaluator:
    """Evaluates syntax trees. error_handler, if given, receives a step for every function call."""

    def __init__(self, error_handler=None):
        self.error_handler = error_handler
        self._rules = {
            ast.Program: self._program,
            ast.ExpressionStatement: self._expression_statement,
            ast.BlockStatement: self._block_statement,
            ast.LetStatement: self._let_statement,
            ast.ReturnStatement: self._return_statement,
            ast.IntegerLiteral: self._integer_literal,
            ast.StringLiteral: self._string_literal,
            ast.Boolean: self._boolean,
            ast.Identifier: self._identifier,
            ast.PrefixExpression: self._prefix_expression,
            ast.InfixExpression: self._infix_expression,
            ast.IfExpression: self._if_expression,
            ast.FunctionLiteral: self._function_literal,
            ast.CallExpression: self._call_expression,
            ast.ArrayLiteral: self._array_literal,
            ast.IndexExpression: self._index_expression,
        }

    def run(self, program, env):
        """Evaluates program in env. Exhausting the host stack is reported as an Error like any other failure."""
        try:
            return self.evaluate(program, env)
        except RecursionError:
            return Error("maximum recursion depth exceeded")

    def evaluate(self, node, env):
        """Evaluates node in env and returns the resulting object."""
        rule = self._rules.get(type(node))
        if rule is None:
            raise GenericException("no evaluation rule for '{}'", type(node).__name__, internal=True)
        return rule(node, env)

    # --- statements -------------------------------------------------------------------------------------------------

    def _program(self, program, env):
        result = None
        for stmt in program.statements:
            result = self.evaluate(stmt, env)

            if result is not None and result.type == ObjectType.RETURN_VALUE:
                return result.value
            elif is_error(result):
                return result
        return result if program.statements else NULL

    def _block_statement(self, block, env):
        result = None
        for stmt in block.statements:
            result = self.evaluate(stmt, env)
            if _unwinds(result):
                return result  # propagated as is: the enclosing call or program unwraps it
        return result if result is not None else NULL

    def _expression_statement(self, stmt, env):
        return self.evaluate(stmt.expr, env)

    def _let_statement(self, stmt, env):
        value = self.evaluate(stmt.value, env)
        if _unwinds(value):
            return value
        env.set(stmt.name.name, value)

    def _return_statement(self, stmt, env):
        value = self.evaluate(stmt.value, env)
        if _unwinds(value):
            return value
        return ReturnValue(value)

    # --- expressions ------------------------------------------------------------------------------------------------

    def _integer_literal(self, node, env):
        return Integer(node.value)

    def _string_literal(self, node, env):
        return String(node.value)

    def _boolean(self, node, env):
        return native_bool(node.value)

    def _identifier(self, node, env):
        value = env.get(node.name)
        if value is None:
            value = BUILTINS.get(node.name)
        if value is None:
            return Error(f"identifier not found: {node.name}")
        return value

    def _prefix_expression(self, node, env):
        operand = self.evaluate(node.operand, env)
        if _unwinds(operand):
            return operand

        if node.operator == "!":
            return native_bool(not is_truthy(operand))
        elif node.operator in ("-", "+") and operand.type == ObjectType.INTEGER:
            return Integer(int64(-operand.value)) if node.operator == "-" else operand
        return Error(f"unknown operator: {node.operator}{operand.type}")

    def _infix_expression(self, node, env):
        left = self.evaluate(node.left, env)
        if _unwinds(left):
            return left

        right = self.evaluate(node.right, env)
        if _unwinds(right):
            return right

        return self.infix(node.operator, left, right)

    def infix(self, operator, left, right):
        """Applies a binary operator to two evaluated operands."""
        if left.type == ObjectType.INTEGER and right.type == ObjectType.INTEGER:
            return self._integer_infix(operator, left.value, right.value)
        elif left.type == ObjectType.STRING and right.type == ObjectType.STRING:
            return self._string_infix(operator, left.value, right.value)
        elif operator == "==":
            return native_bool(left is right)
        elif operator == "!=":
            return native_bool(left is not right)
        elif left.type != right.type:
            return Error(f"type mismatch: {left.type} {operator} {right.type}")
        return Error(f"unknown operator: {left.type} {operator} {right.type}")

    @staticmethod
    def _integer_infix(operator, left, right):
        if operator == "+":
            return Integer(int64(left + right))
        elif operator == "-":
            return Integer(int64(left - right))
        elif operator == "*":
            return Integer(int64(left * right))
        elif operator == "/":
            if right == 0:
                return Error("division by zero")
            quotient = abs(left) // abs(right)  # truncates toward zero, unlike //
            return Integer(int64(quotient if (left < 0) == (right < 0) else -quotient))
        elif operator == "<":
            return native_bool(left < right)
        elif operator == ">":
            return native_bool(left > right)
        elif operator == "==":
            return native_bool(left == right)
        elif operator == "!=":
            return native_bool(left != right)
        return Error(f"unknown operator: {ObjectType.INTEGER} {operator} {ObjectType.INTEGER}")

    @staticmethod
    def _string_infix(operator, left, right):
        if operator == "+":
            return String(left + right)
        elif operator == "==":
            return native_bool(left == right)
        elif operator == "!=":
            return native_bool(left != right)
        return Error(f"unknown operator: {ObjectType.STRING} {operator} {ObjectType.STRING}")

    def _if_expression(self, node, env):
        condition = self.evaluate(node.condition, env)
        if _unwinds(condition):
            return condition

        if is_truthy(condition):
            return self.evaluate(node.consequence, env)
        elif node.alternative is not None:
            return self.evaluate(node.alternative, env)
        return NULL

    def _function_literal(self, node, env):
        return Function(node.params, node.body, env)

    def _call_expression(self, node, env):
        fn = self.evaluate(node.callee, env)
        if _unwinds(fn):
            return fn

        args = self._expressions(node.args, env)
        if len(args) == 1 and _unwinds(args[0]):
            return args[0]

        if self.error_handler is not None and self.error_handler.verbose:
            self.error_handler.register_step("call", f"{node.callee}({', '.join(arg.inspect() for arg in args)})")
        return self.apply(fn, args)

    def apply(self, fn, args):
        """Calls a Function or BuiltIn with evaluated arguments."""
        if fn.type == ObjectType.BUILTIN:
            return fn.fn(args)
        elif fn.type != ObjectType.FUNCTION:
            return Error(f"not a function: {fn.type}")

        if len(args) != len(fn.params):
            return Error(f"wrong number of arguments: want={len(fn.params)}, got={len(args)}")

        call_env = Environment.enclosed(fn.env)
        for param, arg in zip(fn.params, args):
            call_env.set(param.name, arg)

        result = self.evaluate(fn.body, call_env)
        if result.type == ObjectType.RETURN_VALUE:
            return result.value
        return result

    def _expressions(self, exprs, env):
        """Evaluates exprs left to right. Stops at the first Error or ReturnValue and returns it as the only element."""
        results = []
        for expr in exprs:
            value = self.evaluate(expr, env)
            if _unwinds(value):
                return [value]
            results.append(value)
        return results

    def _array_literal(self, node, env):
        elements = self._expressions(node.elements, env)
        if len(elements) == 1 and _unwinds(elements[0]):
            return elements[0]
        return Array(elements)

    def _index_expression(self, node, env):
        collection = self.evaluate(node.collection, env)
        if _unwinds(collection):
            return collection

        index = self.evaluate(node.index, env)
        if _unwinds(index):
            return index

        if collection.type == ObjectType.ARRAY and index.type == ObjectType.INTEGER:
            if 0 <= index.value < len(collection.elements):
                return collection.elements[index.value]
            return NULL
        return Error(f"index operator not supported: {collection.type}[{index.type}]")


def evaluate(node, env=None):
    """Evaluates node in env (a fresh root Environment if None)."""
    return Evaluator().run(node, env if env is not None else Environment())
