"""Lexical analysis for the monkey language: a forward scanner that converts source text into tokens on demand.

Grammar of the tokens:

```
<ident>   ::= (<letter> | "_")+            ; checked against token.KEYWORDS before being classified as IDENT
<int>     ::= <digit>+                     ; no sign: "-5" is a prefix operator applied to "5"
<string>  ::= '"' <char>* '"'              ; no escape sequences, "\" is a literal character
<symbol>  ::= "==" | "!=" | "=" | "!" | "+" | "-" | "*" | "/" | "<" | ">"
            | "," | ";" | "(" | ")" | "{" | "}" | "[" | "]"
```

Whitespace (space, tab, newline, carriage return) separates tokens and is otherwise ignored. Anything else is an
ILLEGAL token.
"""

import string

from monkey.syntax.token import SYMBOLS, Token, TokenKind, lookup_ident


class Tokenizer:
    """Produces tokens from input one at a time. Once the end of input is reached, next() keeps returning EOF."""
    WHITESPACE = " \t\n\r"
    LETTERS = string.ascii_letters + "_"
    DIGITS = string.digits
    QUOTE = "\""

    def __init__(self, source):
        self.source = source
        self.pos = 0
        self._peeked = None

    @property
    def char(self):
        """Current character, or "" at end of input."""
        return self.source[self.pos] if self.pos < len(self.source) else ""

    def peek_char(self):
        """Character after the current one, or "" at end of input."""
        return self.source[self.pos + 1] if self.pos + 1 < len(self.source) else ""

    def _skip_whitespace(self):
        while self.char and self.char in Tokenizer.WHITESPACE:
            self.pos += 1

    def _read_while(self, chars):
        """Reads the longest run of chars starting at the current position."""
        start = self.pos
        while self.char and self.char in chars:
            self.pos += 1
        return self.source[start:self.pos]

    def _read_string(self):
        """Reads up to the closing quote (or end of input, if unterminated). Assumes self.char is the opening quote."""
        start = self.pos + 1
        end = self.source.find(Tokenizer.QUOTE, start)
        if end == -1:
            end = len(self.source)

        self.pos = end + 1
        return self.source[start:end]

    def _scan(self):
        self._skip_whitespace()
        char = self.char

        if not char:
            return Token(TokenKind.EOF, "")

        if char in "=!":
            if self.peek_char() == "=":
                self.pos += 2
                return Token(TokenKind.EQ if char == "=" else TokenKind.NOT_EQ, char + "=")
            self.pos += 1
            return Token(TokenKind.ASSIGN if char == "=" else TokenKind.BANG, char)

        if char in SYMBOLS:
            self.pos += 1
            return Token(SYMBOLS[char], char)

        if char == Tokenizer.QUOTE:
            return Token(TokenKind.STRING, self._read_string())

        if char in Tokenizer.LETTERS:
            literal = self._read_while(Tokenizer.LETTERS)
            return Token(lookup_ident(literal), literal)

        if char in Tokenizer.DIGITS:
            return Token(TokenKind.INT, self._read_while(Tokenizer.DIGITS))

        self.pos += 1
        return Token(TokenKind.ILLEGAL, char)

    def next(self):
        """Returns the next token, consuming it."""
        if self._peeked is not None:
            token, self._peeked = self._peeked, None
            return token
        return self._scan()

    def peek(self):
        """Returns the next token without consuming it."""
        if self._peeked is None:
            self._peeked = self._scan()
        return self._peeked

    def __iter__(self):
        """Yields the remaining tokens, up to and including EOF."""
        while True:
            token = self.next()
            yield token
            if token.kind is TokenKind.EOF:
                return
