"""Session control for lambdastep: feeds lines, either from a file or from the shell, through the parser and prints
every state of their reduction.
"""

from lambdastep.lang.error import GenericException
from lambdastep.pure.lexical import parse_line
from lambdastep.pure.reducer import evaluate, step


class Session:
    """Governs a lambdastep session: lines are parsed on add and reduced on run."""
    SH_FILE = "<in>"  # command-line interpreter filename
    COMMENT = ";;"

    def __init__(self, error_handler, path, cmd_line, max_steps=None, final_only=False):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path              # used for error messages
        self.cmd_line = cmd_line      # whether or not in command-line mode
        self.max_steps = max_steps    # transition bound per line, None for no bound
        self.final_only = final_only  # only print the last state of each reduction

        self.to_exec = {}  # dict of line num: initial State to reduce
        self.results = []  # last State of every reduction, in order

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            try:
                with open(path, "r", encoding="utf-8") as file:
                    self._load(file)
            except OSError:
                raise GenericException("'{}' could not be opened", path, diagnosis=False)

        elif not cmd_line:
            raise GenericException("'<in>' is a reserved filename")

    def _load(self, file):
        """Adds every line of file, joining lines whose parentheses are left open."""
        unfinished = ""
        first_line_num = 0

        for line_num, line in enumerate(file, 1):
            if not unfinished:
                first_line_num = line_num

            line, add_to_prev = Session.preprocess_line(line, unfinished)
            if add_to_prev:
                unfinished = line
                continue

            unfinished = ""
            if line:
                self.add(line, first_line_num)

        if unfinished:
            self.add(unfinished, first_line_num)  # reported as mismatched parentheses

    @staticmethod
    def preprocess_line(line, prev=""):
        """Preprocesses a line from a file or command-line: strips comments and surrounding whitespace, and appends it
        to prev, the unfinished line it continues (if any). Returns the resulting line and whether or not it has to
        be continued on the next line.
        """
        if Session.COMMENT in line:
            line = line[:line.index(Session.COMMENT)]

        line = line.strip()
        if prev:
            line = f"{prev} {line}" if line else prev

        return line, line.count("(") > line.count(")")

    def add(self, expr, line_num):
        """Parses expr into a State to be reduced by run. Returns the State, or None if expr is empty."""
        self.error_handler.register_line(self.path, expr, line_num)  # in case error is raised

        state = parse_line(expr)
        if state is not None:
            self.to_exec[line_num] = state

        self.error_handler.remove_line(self.path)  # error was not raised
        return state

    def run(self):
        """Reduces every added State, printing intermediate states as they are produced."""
        for line_num, state in list(self.to_exec.items()):
            self.error_handler.register_line(self.path, str(state), line_num)

            try:
                self.results.append(self.reduce(state))
            finally:
                del self.to_exec[line_num]

            self.error_handler.remove_line(self.path)

    def reduce(self, state):
        """Prints the reduction of state and returns its last state. Warns if max_steps cut the reduction short."""
        last = state
        for last in evaluate(state, self.max_steps):
            if not self.final_only:
                print(last)

        if self.final_only:
            print(last)

        if self.max_steps is not None and step(last) != last:
            msg = "'{}' did not reach a fixed point within {} steps"
            self.error_handler.warn(msg, (str(state), str(self.max_steps)), diagnosis=False)

        return last
