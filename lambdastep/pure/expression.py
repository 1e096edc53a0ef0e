"""Pure lambda calculus expression tree.

The `pure` directory contains everything needed to parse and reduce a single line of pure lambda calculus: this module
holds the (immutable) tree itself.

```
<λ-term> ::= <symbol>                      ; "variable": one or more ASCII letters
           | "λ" <symbol> "." <λ-term>     ; "abstraction": "\" is accepted in place of "λ" when parsing
           | "(" <abstraction> " " <λ-term> ")"
                                           ; "application": the function is always an abstraction
```

Every node is a frozen dataclass, so equality is structural and any transformation builds a new tree. Note that an
Application can only ever be applied to an Abstraction: `(x y)` or `((λx.x y) z)` cannot be represented.
"""

from dataclasses import dataclass


LAMBDA = "λ"


@dataclass(frozen=True)
class Symbol:
    """Free or bound variable. Whether it is bound depends only on the enclosing Abstractions."""
    identifier: str

    def __str__(self):
        return self.identifier


@dataclass(frozen=True)
class Abstraction:
    """λparameter.body"""
    parameter: Symbol
    body: "Expression"

    def __post_init__(self):
        if not isinstance(self.parameter, Symbol):
            raise TypeError(f"abstraction parameter must be a Symbol, got '{self.parameter!r}'")
        check_expression(self.body)

    def __str__(self):
        return f"{LAMBDA}{self.parameter}.{self.body}"


@dataclass(frozen=True)
class Application:
    """(function argument), where function is always an Abstraction."""
    function: Abstraction
    argument: "Expression"

    def __post_init__(self):
        if not isinstance(self.function, Abstraction):
            raise TypeError(f"only abstractions can be applied, got '{self.function}'")
        check_expression(self.argument)

    def __str__(self):
        return f"({self.function} {self.argument})"


Expression = (Symbol, Abstraction, Application)  # closed: no other node types exist


def check_expression(expr):
    """Raises TypeError if expr is not one of the three expression nodes."""
    if not isinstance(expr, Expression):
        raise TypeError(f"'{expr!r}' is not a λ-term")
    return expr


def sym(identifier):
    """Builds a Symbol from its identifier."""
    return Symbol(identifier)


def lam(parameter, body):
    """Builds λparameter.body. parameter may be given as a plain identifier."""
    if isinstance(parameter, str):
        parameter = Symbol(parameter)
    return Abstraction(parameter, body)


def app(function, argument):
    """Builds (function argument)."""
    return Application(function, argument)

