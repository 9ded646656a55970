"""Session control for the monkey language: source text -> tokens -> syntax tree -> runtime object, either in
command-line mode (one line at a time, sharing one environment) or file interpretation mode (the whole file is one
program).
"""

import re

from monkey.lang.error import GenericException, ParseError
from monkey.runtime.builtins import BUILTINS
from monkey.runtime.environment import Environment
from monkey.runtime.evaluator import Evaluator
from monkey.syntax import ast
from monkey.syntax.parser import parse
from monkey.syntax.token import TokenKind
from monkey.syntax.tokenizer import Tokenizer


class Session:
    """Governs a monkey session. The root environment persists across add/run calls, so let bindings survive."""
    SH_FILE = "<in>"  # command-line interpreter filename
    OPENERS = {TokenKind.LPAREN, TokenKind.LBRACE, TokenKind.LBRACKET}
    CLOSERS = {TokenKind.RPAREN, TokenKind.RBRACE, TokenKind.RBRACKET}

    def __init__(self, error_handler, path, cmd_line):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode

        self.env = Environment()
        self.evaluator = Evaluator(error_handler)

        self.to_run = {}   # dict of line num: Programs to evaluate
        self.results = []  # objects produced by run, oldest first

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            try:
                with open(path, "r") as file:
                    source = file.read()
            except OSError:
                raise GenericException("'{}' could not be opened", path, diagnosis=False)

            self.add(source, 1)

        elif not cmd_line:
            raise GenericException("'<in>' is a reserved filename")

    @staticmethod
    def preprocess_line(line):
        """Preprocesses a line from the command-line. Returns the stripped line and whether it leaves a parenthesis,
        brace or bracket open, in which case it should be continued on the next line before calling add.
        """
        line = line.strip()

        depth = 0
        for token in Tokenizer(line):
            if token.kind in Session.OPENERS:
                depth += 1
            elif token.kind in Session.CLOSERS:
                depth -= 1

        return line, depth > 0

    def add(self, source, line_num):
        """Parses source and queues it for evaluation. Raises a ParseError if source does not parse: nothing is queued
        in that case.
        """
        single_line = "\n" not in source.strip()
        self.error_handler.register_line(self.path, source if single_line else None, line_num)  # in case of error

        program, errors = parse(source)
        if errors:
            raise ParseError(errors, source)

        self.error_handler.register_step("ast", program)
        self._check_shadowing(program, source, single_line)

        self.to_run[line_num] = program
        self.error_handler.remove_line(self.path)  # error was not raised

    def _check_shadowing(self, program, source, diagnosis):
        """Warns about top-level let statements that hide a built-in function."""
        pos = 0
        for stmt in program.statements:
            if isinstance(stmt, ast.LetStatement) and stmt.name.name in BUILTINS:
                match = re.compile(rf"\blet\s+({re.escape(stmt.name.name)})\b").search(source, pos)
                start = match.start(1) if match else 0
                pos = match.end() if match else pos
                self.error_handler.warn("'{1}' shadows a built-in function", (source, stmt.name.name), start=start,
                                        end=start + len(stmt.name.name), diagnosis=diagnosis)

    def run(self):
        """Evaluates the queued programs in order. Results that are not None are appended to self.results."""
        for line_num, program in list(self.to_run.items()):
            try:
                result = self.evaluator.run(program, self.env)
            finally:
                del self.to_run[line_num]

            if result is not None:
                self.results.append(result)

    def pop(self):
        """Removes and returns the oldest result."""
        return self.results.pop(0)
