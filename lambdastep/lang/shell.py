"""Handles interactive/command-line mode for lambdastep. Uses cmd as backend."""

import cmd

from lambdastep.lang.session import Session


class Shell(cmd.Cmd):
    """Lambda calculus stepper shell."""
    intro = ("Lambda calculus stepper :: Python backend\n"
             "Type '?' or 'help' for more information, or an empty line to exit.")
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

        self._tmp_line = ""
        self.line_num = 0

    def default(self, line):
        """Reduces an arbitrary line, printing every step."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            line, add_to_prev = Session.preprocess_line(line, self._tmp_line)

            if add_to_prev:
                self._tmp_line = line
                self.prompt = self.secondary_prompt
            else:
                self._execute(line)

    def _execute(self, line):
        self._tmp_line = ""
        self.prompt = self._tmp_prompt

        self.sess.add(line, self.line_num)
        self.sess.run()

    def emptyline(self):
        """An empty line ends the session. Inside a line continuation, it submits the unfinished line instead."""
        if not self._tmp_line:
            return True

        with self.sess.error_handler:
            self._execute(self._tmp_line)
        return False

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the lambdastep interpreter!\n\n"
              "Type a λ-term, optionally followed by arguments, and every reduction step will be \n"
              "printed until the term stops changing. Abstractions are written 'λx.x' or '\\x.x', \n"
              "and applications '(λx.x y)': only abstractions can be applied.\n\n"
              "Try it out by typing '(λx.x) y z'. This will apply 'λx.x' to 'y', giving 'y z' \n"
              "as the result.")

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
