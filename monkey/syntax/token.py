"""Tokens of the monkey language. A token is an immutable (kind, literal) pair produced by the Tokenizer."""

from dataclasses import dataclass
from enum import Enum


class TokenKind(Enum):
    """Closed set of token kinds. The value of each kind is how it is displayed in parser errors."""
    ILLEGAL = "ILLEGAL"
    EOF = "EOF"

    IDENT = "IDENT"
    INT = "INT"
    STRING = "STRING"

    ASSIGN = "="
    PLUS = "+"
    MINUS = "-"
    BANG = "!"
    ASTERISK = "*"
    SLASH = "/"
    LT = "<"
    GT = ">"
    EQ = "=="
    NOT_EQ = "!="

    COMMA = ","
    SEMICOLON = ";"
    LPAREN = "("
    RPAREN = ")"
    LBRACE = "{"
    RBRACE = "}"
    LBRACKET = "["
    RBRACKET = "]"

    LET = "LET"
    FUNCTION = "FUNCTION"
    IF = "IF"
    ELSE = "ELSE"
    RETURN = "RETURN"
    TRUE = "TRUE"
    FALSE = "FALSE"

    def __str__(self):
        return self.value


KEYWORDS = {
    "let": TokenKind.LET,
    "fn": TokenKind.FUNCTION,
    "if": TokenKind.IF,
    "else": TokenKind.ELSE,
    "return": TokenKind.RETURN,
    "true": TokenKind.TRUE,
    "false": TokenKind.FALSE,
}

# single characters that always form a token on their own; "=" and "!" are handled separately because of "==", "!="
SYMBOLS = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.ASTERISK,
    "/": TokenKind.SLASH,
    "<": TokenKind.LT,
    ">": TokenKind.GT,
    ",": TokenKind.COMMA,
    ";": TokenKind.SEMICOLON,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
    "[": TokenKind.LBRACKET,
    "]": TokenKind.RBRACKET,
}


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    literal: str

    def __repr__(self):
        return f"Token({self.kind.name}, '{self.literal}')"


def lookup_ident(literal):
    """Returns the keyword kind of literal, or IDENT if literal is not a keyword."""
    return KEYWORDS.get(literal, TokenKind.IDENT)
