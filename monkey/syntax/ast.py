"""Abstract syntax tree of the monkey language.

Formally, the language can be defined as

```
<program>    ::= <statement>*
<statement>  ::= "let" <ident> "=" <expr> ";"
               | "return" <expr> ";"
               | <expr> [";"]
<block>      ::= "{" <statement>* "}"
<expr>       ::= <int> | <string> | "true" | "false" | <ident>
               | ("!" | "-" | "+") <expr>
               | <expr> ("+" | "-" | "*" | "/" | "<" | ">" | "==" | "!=") <expr>
               | "(" <expr> ")"
               | "if" "(" <expr> ")" <block> ["else" <block>]
               | "fn" "(" [<ident> ("," <ident>)*] ")" <block>
               | <ident> "(" [<expr> ("," <expr>)*] ")"     ; only identifiers can be called
               | "[" [<expr> ("," <expr>)*] "]"
               | <expr> "[" <expr> "]"
```

Nodes are plain data. Their only behavior is rendering to canonical source text with str(), where every inferred
grouping is made explicit with parentheses: `a + b * c` renders as `(a + (b * c))`. Two nodes are equal if they are of
the same type and render identically.
"""

from abc import ABC, abstractmethod


class Node(ABC):
    """Superclass representing any node of a monkey syntax tree."""

    @abstractmethod
    def __str__(self):
        """Canonical source text of this node."""

    def __repr__(self):
        return f"{type(self).__name__}('{self}')"

    def __eq__(self, other):
        return isinstance(other, type(self)) and str(self) == str(other)

    def __hash__(self):
        return hash(str(self))


class Statement(Node, ABC):
    """Superclass for nodes that do not produce a value by themselves."""


class Expression(Node, ABC):
    """Superclass for nodes that produce a value."""


class Program(Node):
    """Root of every syntax tree."""

    def __init__(self, statements=None):
        self.statements = statements if statements is not None else []

    def __str__(self):
        return " ".join(str(stmt) for stmt in self.statements)


class Identifier(Expression):

    def __init__(self, name):
        self.name = name

    def __str__(self):
        return self.name


class IntegerLiteral(Expression):

    def __init__(self, value):
        self.value = value

    def __str__(self):
        return str(self.value)


class StringLiteral(Expression):

    def __init__(self, value):
        self.value = value

    def __str__(self):
        return f"\"{self.value}\""


class Boolean(Expression):

    def __init__(self, value):
        self.value = value

    def __str__(self):
        return "true" if self.value else "false"


class PrefixExpression(Expression):
    """<operator><operand>, e.g. -5 or !ok."""

    def __init__(self, operator, operand):
        self.operator = operator
        self.operand = operand

    def __str__(self):
        return f"({self.operator}{self.operand})"


class InfixExpression(Expression):
    """<left> <operator> <right>, e.g. 1 + 2."""

    def __init__(self, operator, left, right):
        self.operator = operator
        self.left = left
        self.right = right

    def __str__(self):
        return f"({self.left} {self.operator} {self.right})"


class LetStatement(Statement):

    def __init__(self, name, value):
        self.name = name  # Identifier
        self.value = value

    def __str__(self):
        return f"let {self.name} = {self.value};"


class ReturnStatement(Statement):

    def __init__(self, value):
        self.value = value

    def __str__(self):
        return f"return {self.value};"


class ExpressionStatement(Statement):
    """Wraps an expression that is used as a statement, e.g. a bare `x + 1;`."""

    def __init__(self, expr):
        self.expr = expr

    def __str__(self):
        return str(self.expr)


class BlockStatement(Statement):
    """Statements between braces. Renders without the braces, which are added by the owning expression."""

    def __init__(self, statements=None):
        self.statements = statements if statements is not None else []

    def braced(self):
        return f"{{ {self} }}" if self.statements else "{}"

    def __str__(self):
        return " ".join(str(stmt) for stmt in self.statements)


class IfExpression(Expression):

    def __init__(self, condition, consequence, alternative=None):
        self.condition = condition
        self.consequence = consequence  # BlockStatement
        self.alternative = alternative  # BlockStatement or None

    def __str__(self):
        result = f"if {self.condition} {self.consequence.braced()}"
        if self.alternative is not None:
            result += f" else {self.alternative.braced()}"
        return result


class FunctionLiteral(Expression):

    def __init__(self, params, body):
        self.params = params  # list of Identifier
        self.body = body      # BlockStatement

    def __str__(self):
        return f"fn({', '.join(str(param) for param in self.params)}) {self.body.braced()}"


class CallExpression(Expression):

    def __init__(self, callee, args):
        self.callee = callee  # Identifier
        self.args = args

    def __str__(self):
        return f"{self.callee}({', '.join(str(arg) for arg in self.args)})"


class ArrayLiteral(Expression):

    def __init__(self, elements):
        self.elements = elements

    def __str__(self):
        return f"[{', '.join(str(element) for element in self.elements)}]"


class IndexExpression(Expression):
    """<collection>[<index>]."""

    def __init__(self, collection, index):
        self.collection = collection
        self.index = index

    def __str__(self):
        return f"({self.collection}[{self.index}])"
