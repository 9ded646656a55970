"""Lexical scopes of the monkey language."""


class Environment:
    """Mapping of names to values, chained to an optional outer Environment.

    Lookups search from the innermost frame outward. Bindings only ever go into the current frame: an inner `let` shadows
    an outer binding of the same name, it never rewrites it.
    """

    def __init__(self, outer=None):
        self.store = {}
        self.outer = outer

    @classmethod
    def enclosed(cls, outer):
        """New frame chained to outer. Used once per function call, with outer being the function's captured env."""
        return cls(outer)

    def get(self, name):
        """Returns the value bound to name in the closest frame that has it, or None if no frame does."""
        env = self
        while env is not None:
            if name in env.store:
                return env.store[name]
            env = env.outer
        return None

    def set(self, name, value):
        """Binds name to value in this frame. Returns value."""
        self.store[name] = value
        return value

    def __contains__(self, name):
        return self.get(name) is not None

    def __repr__(self):
        return f"Environment({list(self.store)}, outer={self.outer!r})"
