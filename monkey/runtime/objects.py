"""Runtime values of the monkey language.

Every value exposes a type tag (used for dispatch and in error messages) and inspect(), its human-readable rendering.
Internal logic must never dispatch on inspect().

TRUE, FALSE and NULL are module-level singletons: the evaluator only ever hands out these instances, so booleans and
null compare by identity.
"""

from abc import ABC, abstractmethod


class ObjectType:
    INTEGER = "INTEGER"
    STRING = "STRING"
    BOOLEAN = "BOOLEAN"
    NULL = "NULL"
    ARRAY = "ARRAY"
    FUNCTION = "FUNCTION"
    BUILTIN = "BUILTIN"
    RETURN_VALUE = "RETURN_VALUE"
    ERROR = "ERROR"


class MonkeyObject(ABC):
    """Superclass of every runtime value."""
    type = None

    @abstractmethod
    def inspect(self):
        """Human-readable representation, as printed by the shell."""

    def __str__(self):
        return self.inspect()

    def __repr__(self):
        return f"{type(self).__name__}({self.inspect()})"


class Integer(MonkeyObject):
    type = ObjectType.INTEGER

    def __init__(self, value):
        self.value = value

    def inspect(self):
        return str(self.value)

    def __eq__(self, other):
        return isinstance(other, Integer) and self.value == other.value

    def __hash__(self):
        return hash(self.value)


class String(MonkeyObject):
    type = ObjectType.STRING

    def __init__(self, value):
        self.value = value

    def inspect(self):
        return self.value

    def __eq__(self, other):
        return isinstance(other, String) and self.value == other.value

    def __hash__(self):
        return hash(self.value)


class Boolean(MonkeyObject):
    type = ObjectType.BOOLEAN

    def __init__(self, value):
        self.value = value

    def inspect(self):
        return "true" if self.value else "false"


class Null(MonkeyObject):
    type = ObjectType.NULL

    def inspect(self):
        return "null"


class Array(MonkeyObject):
    type = ObjectType.ARRAY

    def __init__(self, elements):
        self.elements = elements

    def inspect(self):
        return f"[{', '.join(element.inspect() for element in self.elements)}]"


class Function(MonkeyObject):
    """User-defined function. env is the environment the function literal was evaluated in, not the caller's."""
    type = ObjectType.FUNCTION

    def __init__(self, params, body, env):
        self.params = params  # list of ast.Identifier
        self.body = body      # ast.BlockStatement
        self.env = env

    def inspect(self):
        return f"fn({', '.join(str(param) for param in self.params)}) {self.body.braced()}"


class BuiltIn(MonkeyObject):
    """Native function. fn receives the list of evaluated arguments and returns a MonkeyObject (possibly an Error)."""
    type = ObjectType.BUILTIN

    def __init__(self, name, fn):
        self.name = name
        self.fn = fn

    def inspect(self):
        return f"builtin function {self.name}"


class ReturnValue(MonkeyObject):
    """Signal used by the evaluator to unwind blocks after a return statement. Never escapes the evaluator."""
    type = ObjectType.RETURN_VALUE

    def __init__(self, value):
        self.value = value

    def inspect(self):
        return self.value.inspect()


class Error(MonkeyObject):
    """Evaluation error. Returned like any other value and propagated up to the program root."""
    type = ObjectType.ERROR

    def __init__(self, message):
        self.message = message

    def inspect(self):
        return f"ERROR: {self.message}"

    def __eq__(self, other):
        return isinstance(other, Error) and self.message == other.message

    def __hash__(self):
        return hash(self.message)


TRUE = Boolean(True)
FALSE = Boolean(False)
NULL = Null()


def native_bool(value):
    """Returns the TRUE or FALSE singleton for a Python bool."""
    return TRUE if value else FALSE


def is_error(obj):
    return obj is not None and obj.type == ObjectType.ERROR


def is_truthy(obj):
    """FALSE and NULL are falsy, everything else (including 0) is truthy."""
    return obj is not FALSE and obj is not NULL
