"""Built-in functions of the monkey language. They are only resolved when no user binding shadows their name.

Every built-in checks its own arity and argument types and reports misuse as an Error object.
"""

from monkey.runtime.objects import NULL, Array, BuiltIn, Error, Integer, ObjectType


def _arity(args, want):
    if len(args) != want:
        return Error(f"wrong number of arguments. got={len(args)}, want={want}")
    return None


def _len(args):
    error = _arity(args, 1)
    if error:
        return error

    arg, = args
    if arg.type == ObjectType.STRING:
        return Integer(len(arg.value.encode("utf-8")))  # byte count
    elif arg.type == ObjectType.ARRAY:
        return Integer(len(arg.elements))
    return Error(f"argument to `len` not supported, got {arg.type}")


def _array_arg(name, args):
    """Returns (array, None) if args is exactly one Array, (None, error) otherwise."""
    error = _arity(args, 1)
    if error:
        return None, error

    arg, = args
    if arg.type != ObjectType.ARRAY:
        return None, Error(f"argument to `{name}` must be ARRAY, got {arg.type}")
    return arg, None


def _first(args):
    array, error = _array_arg("first", args)
    if error:
        return error
    return array.elements[0] if array.elements else NULL


def _last(args):
    array, error = _array_arg("last", args)
    if error:
        return error
    return array.elements[-1] if array.elements else NULL


def _rest(args):
    array, error = _array_arg("rest", args)
    if error:
        return error
    return Array(array.elements[1:]) if array.elements else NULL


def _push(args):
    error = _arity(args, 2)
    if error:
        return error

    array, element = args
    if array.type != ObjectType.ARRAY:
        return Error(f"argument to `push` must be ARRAY, got {array.type}")
    return Array(array.elements + [element])  # the original array is left untouched


BUILTINS = {name: BuiltIn(name, fn) for name, fn in [
    ("len", _len),
    ("first", _first),
    ("last", _last),
    ("rest", _rest),
    ("push", _push),
]}
