"""Environment-based substitution, the only thing beta reduction does in this implementation.

An Environment maps Symbols to the Expressions that replace them. It is built fresh for a single call to beta_reduce
and discarded afterwards: nothing is carried from one reduction step to the next.

The substitution rules reproduce the interpreter's historical behaviour rather than textbook capture-avoiding
substitution:

- a Symbol is replaced by its binding (inserted as-is, never reduced eagerly), or left alone if it is free
- an Abstraction is only entered when the environment already binds its own parameter; otherwise it is returned
  untouched. When entered, the binder is consumed, and if its body is an Application `(λr.C D)`, the result is
  `(λr.C' r)`, i.e. D is replaced by the inner parameter
- an Application `(λq.B A)` is walked as its Abstraction under an environment extended with q -> A

Only a single path through the tree is ever walked.
"""

from collections.abc import Mapping

from lambdastep.pure.expression import Abstraction, Application, Symbol


class Environment(Mapping):
    """Persistent Symbol -> Expression mapping. extend never mutates self: it returns a new Environment whose frame
    shadows (and shares everything else with) its parent.
    """
    __slots__ = ("_symbol", "_value", "_parent", "_size")

    def __init__(self, bindings=None):
        self._symbol = None
        self._value = None
        self._parent = None
        self._size = 0

        if bindings:
            env = Environment()
            for symbol, value in dict(bindings).items():
                env = env.extend(symbol, value)
            self._symbol, self._value, self._parent, self._size = env._symbol, env._value, env._parent, env._size

    def extend(self, symbol, value):
        """Returns a new Environment with symbol bound to value."""
        if not isinstance(symbol, Symbol):
            raise TypeError(f"only symbols can be bound, got '{symbol!r}'")

        env = Environment()
        env._symbol = symbol
        env._value = value
        env._parent = self
        env._size = self._size if symbol in self else self._size + 1
        return env

    def _frames(self):
        env = self
        while env is not None and env._symbol is not None:
            yield env
            env = env._parent

    def __getitem__(self, symbol):
        for frame in self._frames():
            if frame._symbol == symbol:
                return frame._value
        raise KeyError(symbol)

    def __iter__(self):
        seen = set()
        for frame in self._frames():
            if frame._symbol not in seen:
                seen.add(frame._symbol)
                yield frame._symbol

    def __len__(self):
        return self._size

    def __repr__(self):
        bindings = ", ".join(f"{symbol}: {value}" for symbol, value in self.items())
        return f"Environment({{{bindings}}})"


def substitute(expr, env):
    """Walks expr under env and returns the substituted Expression (possibly expr itself)."""
    if isinstance(expr, Symbol):
        return env.get(expr, expr)

    elif isinstance(expr, Abstraction):
        value = env.get(expr.parameter)
        if value is None:
            return expr  # parameter unbound here: body is left alone

        inner = env.extend(expr.parameter, value)
        if isinstance(expr.body, Application):
            nested = expr.body.function
            return Application(Abstraction(nested.parameter, substitute(nested.body, inner)), nested.parameter)
        return substitute(expr.body, inner)

    elif isinstance(expr, Application):
        return substitute(expr.function, env.extend(expr.function.parameter, expr.argument))

    raise TypeError(f"'{expr!r}' is not a λ-term")


def beta_reduce(application):
    """Reduces (λparameter.body argument) using a fresh Environment."""
    if not isinstance(application, Application):
        raise TypeError(f"only applications can be beta-reduced, got '{application}'")
    return substitute(application, Environment())
