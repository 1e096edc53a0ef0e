"""Parser for one line of pure lambda calculus.

A line is a head expression followed by any number of trailing arguments, separated by spaces at parenthesis depth
zero: `(λx.x) y z` is the head `λx.x` applied to `y`, then to `z`. Each expression is matched against the following
rules, in order, and the first one that matches wins:

```
<application> ::= "(" <abstraction> " " <λ-term> ")"   ; the function must be an abstraction
                | "(" <λ-term> ")"                      ; no top-level space: parentheses only group
<abstraction> ::= ("λ" | "\") <symbol> "." <λ-term>
<symbol>      ::= [A-Za-z]+
```

Anything else is a ParseError. Errors keep track of where in the line the offending expression starts, so that
ErrorHandler can point at it.
"""

import re

from lambdastep.lang.error import ParseError
from lambdastep.pure.expression import Abstraction, Application, Symbol
from lambdastep.pure.reducer import State


BINDERS = ("λ", "\\")
SYMBOL = re.compile(r"[A-Za-z]+")
ABSTRACTION = re.compile(r"[λ\\]([A-Za-z]+)\.(.+)", re.DOTALL)


def are_parens_balanced(expr):
    """Checks if parentheses are balanced within expr."""
    parens_balance = 0
    for char in expr:
        if char == "(":
            parens_balance += 1
        elif char == ")":
            parens_balance -= 1
        if parens_balance < 0:
            return False
    return parens_balance == 0


def matching_paren(expr, open_pos=0):
    """Returns index of the parenthesis closing the one at open_pos, or -1 if it is never closed."""
    parens_balance = 0
    for idx in range(open_pos, len(expr)):
        if expr[idx] == "(":
            parens_balance += 1
        elif expr[idx] == ")":
            parens_balance -= 1
            if parens_balance == 0:
                return idx
    return -1


def split_top_level(expr, maxsplit=-1):
    """Splits expr on spaces that are not inside parentheses. Returns a list of (offset, token) pairs, offset being
    the position of token within expr.
    """
    tokens = []
    parens_balance = 0
    begin = 0

    for idx, char in enumerate(expr):
        if char == "(":
            parens_balance += 1
        elif char == ")":
            parens_balance -= 1
        elif char == " " and parens_balance == 0 and (maxsplit < 0 or len(tokens) < maxsplit):
            tokens.append((begin, expr[begin:idx]))
            begin = idx + 1

    tokens.append((begin, expr[begin:]))
    return tokens


def parse_application(expr, start, line):
    if not expr.startswith("(") or matching_paren(expr) != len(expr) - 1:
        return None

    inner = expr[1:-1]
    parts = split_top_level(inner, maxsplit=1)
    if len(parts) == 1:
        return parse_expression(inner, start + 1, line)

    (head_pos, head), (arg_pos, arg) = parts
    function = parse_expression(head, start + 1 + head_pos, line)
    if not isinstance(function, Abstraction):
        begin = start + 1 + head_pos
        msg = "'{1}' is not an abstraction, so it cannot be applied"
        raise ParseError(msg, (line, head), start=begin, end=begin + len(head))

    return Application(function, parse_expression(arg, start + 1 + arg_pos, line))


def parse_abstraction(expr, start, line):
    if not expr.startswith(BINDERS):
        return None

    match = ABSTRACTION.fullmatch(expr)
    if match is None:
        msg = "'{1}' is not a valid abstraction (expected λNAME.BODY)"
        raise ParseError(msg, (line, expr), start=start, end=start + len(expr))

    body = parse_expression(match.group(2), start + match.start(2), line)
    return Abstraction(Symbol(match.group(1)), body)


def parse_symbol(expr, start, line):
    if SYMBOL.fullmatch(expr):
        return Symbol(expr)
    return None


RULES = (parse_application, parse_abstraction, parse_symbol)


def parse_expression(expr, start=0, line=None):
    """Converts expr to the matching Expression. start is the position of expr in line, which is only used for error
    messages.
    """
    if line is None:
        line = expr

    if not expr:
        raise ParseError("λ-term cannot be empty", line, start=start, end=start + 1)

    for rule in RULES:
        result = rule(expr, start, line)
        if result is not None:
            return result

    raise ParseError("'{1}' is not valid λ-term grammar", (line, expr), start=start, end=start + len(expr))


def parse_line(text):
    """Parses a line of text into its initial State. Returns None if the line is empty."""
    line = text.strip()
    if not line:
        return None

    if not are_parens_balanced(line):
        raise ParseError("'{}' has mismatched parentheses", line)

    head, *pending = (parse_expression(token, pos, line) for pos, token in split_top_level(line))
    return State(head, tuple(pending))
