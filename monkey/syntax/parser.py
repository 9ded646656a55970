"""Parser for the monkey language: recursive descent for statements, precedence climbing ("Pratt" parsing) for
expressions. See ast.py for the grammar.

Every token kind that can start an expression has a prefix parse function, and every token kind that can continue one
(binary operators, "(" and "[") has an infix parse function and a binding precedence. Binary operators parse their
right-hand side with their own precedence, so only strictly tighter operators can bind to the right: all of them are
left-associative, and `a + b * c` groups as `(a + (b * c))`.

The parser does not raise on malformed input. Each failed expectation appends a message to Parser.errors and yields None
for the construct being parsed; the caller must check errors before trusting the returned Program.
"""

from monkey.syntax import ast
from monkey.syntax.token import TokenKind
from monkey.syntax.tokenizer import Tokenizer

LOWEST, EQUALS, LESSGREATER, SUM, PRODUCT, PREFIX, CALL, INDEX = range(1, 9)

PRECEDENCES = {
    TokenKind.EQ: EQUALS,
    TokenKind.NOT_EQ: EQUALS,
    TokenKind.LT: LESSGREATER,
    TokenKind.GT: LESSGREATER,
    TokenKind.PLUS: SUM,
    TokenKind.MINUS: SUM,
    TokenKind.ASTERISK: PRODUCT,
    TokenKind.SLASH: PRODUCT,
    TokenKind.LPAREN: CALL,
    TokenKind.LBRACKET: INDEX,
}

INT64_MAX = 2 ** 63 - 1


class Parser:
    """Builds a Program from a Tokenizer, with one token of lookahead."""

    def __init__(self, tokenizer):
        self.tokenizer = tokenizer
        self.errors = []

        self.prefix_fns = {
            TokenKind.IDENT: self.parse_identifier,
            TokenKind.INT: self.parse_integer_literal,
            TokenKind.STRING: self.parse_string_literal,
            TokenKind.TRUE: self.parse_boolean,
            TokenKind.FALSE: self.parse_boolean,
            TokenKind.BANG: self.parse_prefix_expression,
            TokenKind.MINUS: self.parse_prefix_expression,
            TokenKind.PLUS: self.parse_prefix_expression,
            TokenKind.LPAREN: self.parse_grouped_expression,
            TokenKind.IF: self.parse_if_expression,
            TokenKind.FUNCTION: self.parse_function_literal,
            TokenKind.LBRACKET: self.parse_array_literal,
        }

        self.infix_fns = {kind: self.parse_infix_expression for kind in PRECEDENCES}
        self.infix_fns[TokenKind.LPAREN] = self.parse_call_expression
        self.infix_fns[TokenKind.LBRACKET] = self.parse_index_expression

        self.current = None
        self.next = None
        self.advance()
        self.advance()

    def advance(self):
        """Shifts the lookahead token into the current position and reads a new lookahead token."""
        self.current = self.next
        self.next = self.tokenizer.next()

    def current_is(self, kind):
        return self.current.kind is kind

    def next_is(self, kind):
        return self.next.kind is kind

    def expect_next(self, kind):
        """Advances if the lookahead token is of kind. Otherwise, records an error and returns False."""
        if self.next_is(kind):
            self.advance()
            return True

        self.errors.append(f"expected next token to be {kind}, got {self.next.kind} instead")
        return False

    def next_precedence(self):
        return PRECEDENCES.get(self.next.kind, LOWEST)

    def current_precedence(self):
        return PRECEDENCES.get(self.current.kind, LOWEST)

    def parse_program(self):
        """Parses statements until EOF. Statements that fail to parse are skipped up to the next semicolon."""
        program = ast.Program()

        while not self.current_is(TokenKind.EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                program.statements.append(stmt)
            else:
                self.synchronize()
            self.advance()

        return program

    def synchronize(self):
        """Skips tokens until the current one ends a statement."""
        while not self.current_is(TokenKind.SEMICOLON) and not self.current_is(TokenKind.EOF):
            self.advance()

    # --- statements -------------------------------------------------------------------------------------------------

    def parse_statement(self):
        if self.current_is(TokenKind.LET):
            return self.parse_let_statement()
        elif self.current_is(TokenKind.RETURN):
            return self.parse_return_statement()
        return self.parse_expression_statement()

    def parse_let_statement(self):
        """let <ident> = <expr>;"""
        if not self.expect_next(TokenKind.IDENT):
            return None
        name = ast.Identifier(self.current.literal)

        if not self.expect_next(TokenKind.ASSIGN):
            return None
        self.advance()

        value = self.parse_expression(LOWEST)
        if value is None or not self.expect_next(TokenKind.SEMICOLON):
            return None

        return ast.LetStatement(name, value)

    def parse_return_statement(self):
        """return <expr>;"""
        self.advance()

        value = self.parse_expression(LOWEST)
        if value is None or not self.expect_next(TokenKind.SEMICOLON):
            return None

        return ast.ReturnStatement(value)

    def parse_expression_statement(self):
        """<expr> [;]"""
        expr = self.parse_expression(LOWEST)
        if expr is None:
            return None

        if self.next_is(TokenKind.SEMICOLON):
            self.advance()

        return ast.ExpressionStatement(expr)

    def parse_block_statement(self):
        """Parses statements up to the closing brace. Assumes the current token is the opening brace."""
        block = ast.BlockStatement()
        self.advance()

        while not self.current_is(TokenKind.RBRACE):
            if self.current_is(TokenKind.EOF):
                self.errors.append(f"expected next token to be {TokenKind.RBRACE}, got {TokenKind.EOF} instead")
                return None

            stmt = self.parse_statement()
            if stmt is not None:
                block.statements.append(stmt)
            self.advance()

        return block

    # --- expressions ------------------------------------------------------------------------------------------------

    def parse_expression(self, precedence):
        """Core of the Pratt parser: parses a prefix expression, then folds infix expressions into it for as long as
        the lookahead token binds tighter than precedence.
        """
        prefix = self.prefix_fns.get(self.current.kind)
        if prefix is None:
            self.errors.append(f"no prefix parse function for {self.current.kind} found")
            return None

        left = prefix()

        while left is not None and not self.next_is(TokenKind.SEMICOLON) and precedence < self.next_precedence():
            infix = self.infix_fns.get(self.next.kind)
            if infix is None:
                return left

            self.advance()
            left = infix(left)

        return left

    def parse_identifier(self):
        return ast.Identifier(self.current.literal)

    def parse_integer_literal(self):
        literal = self.current.literal
        digits = literal.lstrip("0") or "0"
        if len(digits) > len(str(INT64_MAX)) or int(digits) > INT64_MAX:
            self.errors.append(f"could not parse {literal} as integer")
            return None
        return ast.IntegerLiteral(int(digits))

    def parse_string_literal(self):
        return ast.StringLiteral(self.current.literal)

    def parse_boolean(self):
        return ast.Boolean(self.current_is(TokenKind.TRUE))

    def parse_prefix_expression(self):
        operator = self.current.literal
        self.advance()

        operand = self.parse_expression(PREFIX)
        if operand is None:
            return None
        return ast.PrefixExpression(operator, operand)

    def parse_infix_expression(self, left):
        operator = self.current.literal
        precedence = self.current_precedence()
        self.advance()

        right = self.parse_expression(precedence)
        if right is None:
            return None
        return ast.InfixExpression(operator, left, right)

    def parse_grouped_expression(self):
        self.advance()

        expr = self.parse_expression(LOWEST)
        if expr is None or not self.expect_next(TokenKind.RPAREN):
            return None
        return expr

    def parse_if_expression(self):
        """if (<expr>) <block> [else <block>]"""
        if not self.expect_next(TokenKind.LPAREN):
            return None
        self.advance()

        condition = self.parse_expression(LOWEST)
        if condition is None or not self.expect_next(TokenKind.RPAREN):
            return None
        if not self.expect_next(TokenKind.LBRACE):
            return None

        consequence = self.parse_block_statement()
        if consequence is None:
            return None

        alternative = None
        if self.next_is(TokenKind.ELSE):
            self.advance()
            if not self.expect_next(TokenKind.LBRACE):
                return None

            alternative = self.parse_block_statement()
            if alternative is None:
                return None

        return ast.IfExpression(condition, consequence, alternative)

    def parse_function_literal(self):
        """fn(<ident>, ...) <block>"""
        if not self.expect_next(TokenKind.LPAREN):
            return None

        params = self.parse_function_params()
        if params is None or not self.expect_next(TokenKind.LBRACE):
            return None

        body = self.parse_block_statement()
        if body is None:
            return None
        return ast.FunctionLiteral(params, body)

    def parse_function_params(self):
        """Comma-separated identifiers up to the closing parenthesis. Assumes the current token is "("."""
        params = []

        if self.next_is(TokenKind.RPAREN):
            self.advance()
            return params

        if not self.expect_next(TokenKind.IDENT):
            return None
        params.append(ast.Identifier(self.current.literal))

        while self.next_is(TokenKind.COMMA):
            self.advance()
            if not self.expect_next(TokenKind.IDENT):
                return None
            params.append(ast.Identifier(self.current.literal))

        if not self.expect_next(TokenKind.RPAREN):
            return None
        return params

    def parse_expression_list(self, end):
        """Comma-separated expressions up to the end token. Assumes the current token is the opening one."""
        exprs = []

        if self.next_is(end):
            self.advance()
            return exprs

        self.advance()
        expr = self.parse_expression(LOWEST)
        if expr is None:
            return None
        exprs.append(expr)

        while self.next_is(TokenKind.COMMA):
            self.advance()
            self.advance()

            expr = self.parse_expression(LOWEST)
            if expr is None:
                return None
            exprs.append(expr)

        if not self.expect_next(end):
            return None
        return exprs

    def parse_call_expression(self, callee):
        """<ident>(<expr>, ...). Only identifiers can be called."""
        if not isinstance(callee, ast.Identifier):
            self.errors.append(f"cannot call {callee}: only identifiers can be called")
            return None

        args = self.parse_expression_list(TokenKind.RPAREN)
        if args is None:
            return None
        return ast.CallExpression(callee, args)

    def parse_array_literal(self):
        elements = self.parse_expression_list(TokenKind.RBRACKET)
        if elements is None:
            return None
        return ast.ArrayLiteral(elements)

    def parse_index_expression(self, collection):
        self.advance()

        index = self.parse_expression(LOWEST)
        if index is None or not self.expect_next(TokenKind.RBRACKET):
            return None
        return ast.IndexExpression(collection, index)


def parse(source):
    """Returns (program, errors) for source."""
    parser = Parser(Tokenizer(source))
    program = parser.parse_program()
    return program, parser.errors
