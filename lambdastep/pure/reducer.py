"""Curried, weak-head reduction of a single line.

A line `head a b c` is held as a State: the head expression plus the trailing arguments that are still waiting to be
applied. Each call to step performs exactly one transition:

- Symbol head: free variable, nothing to do
- Abstraction head with no pending arguments: a value, nothing to do
- Abstraction head with pending arguments: the first argument is consumed, giving an Application head
- Application head: the application is beta-reduced (see environment.py)

A state that step maps onto itself is a fixed point. Nothing guarantees one is reached: evaluate can be given a step
bound, but by default it runs for as long as the state keeps changing.
"""

from dataclasses import dataclass

from lambdastep.pure.environment import beta_reduce
from lambdastep.pure.expression import Abstraction, Application, Symbol, check_expression


@dataclass(frozen=True)
class State:
    """head pending[0] pending[1] ..."""
    head: object
    pending: tuple = ()

    def __post_init__(self):
        check_expression(self.head)
        object.__setattr__(self, "pending", tuple(check_expression(expr) for expr in self.pending))

    @classmethod
    def of(cls, head, *pending):
        return cls(head, pending)

    @property
    def terminal(self):
        """Whether or not no transition applies to this state."""
        return isinstance(self.head, Symbol) or (isinstance(self.head, Abstraction) and not self.pending)

    def __str__(self):
        return " ".join(str(expr) for expr in (self.head, *self.pending))


def step(state):
    """Returns the next State, or state itself if it is a fixed point."""
    head = state.head

    if isinstance(head, Symbol):
        return state

    elif isinstance(head, Abstraction):
        if not state.pending:
            return state
        argument, *rest = state.pending
        return State(Application(head, argument), tuple(rest))

    elif isinstance(head, Application):
        return State(beta_reduce(head), state.pending)

    raise TypeError(f"incorrect state head '{head!r}'")


def evaluate(state, max_steps=None):
    """Yields state and then every successor produced by step, stopping (without repeating it) once a state maps onto
    itself. If max_steps is given, at most that many transitions are made.
    """
    yield state

    steps = 0
    while max_steps is None or steps < max_steps:
        successor = step(state)
        if successor == state:
            return

        yield successor
        state = successor
        steps += 1
