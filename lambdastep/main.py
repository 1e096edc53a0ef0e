"""Runs lambdastep on a file of λ-terms, or in command-line mode if no file is given. Also uses the error handling
context manager. Called from the lambdastep console script.
"""

import argparse
import codecs
import sys

from lambdastep.lang.error import ErrorHandler
from lambdastep.lang.session import Session
from lambdastep.lang.shell import Shell


def encoding(name):
    """argparse type for --encoding."""
    try:
        codecs.lookup(name)
    except LookupError:
        raise argparse.ArgumentTypeError(f"unknown encoding '{name}'")
    return name


def steps(value):
    """argparse type for --max-steps."""
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative number of steps, got '{value}'")
    return number


def configure_console(name):
    """Makes stdin/stdout use encoding name, so that λ can be typed and printed."""
    for stream in (sys.stdin, sys.stdout):
        reconfigure = getattr(stream, "reconfigure", None)
        if reconfigure is not None:
            reconfigure(encoding=name)


def build_parser():
    parser = argparse.ArgumentParser(prog="lambdastep", description="Step-by-step lambda calculus reduction.")
    parser.add_argument("file", help="file to reduce line by line (if empty, goes to command-line mode)", nargs="?")
    parser.add_argument("--max-steps", type=steps, default=None, metavar="N",
                        help="stop reducing a line after N steps (default: no limit)")
    parser.add_argument("--final", action="store_true", help="only print the last state of each line")
    parser.add_argument("--encoding", type=encoding, default="utf-8", help="console encoding (default: utf-8)")
    return parser


def main(argv=None):
    """Runs lambdastep interpreter. Called from the lambdastep console script."""
    with ErrorHandler() as error_handler:
        args = build_parser().parse_args(argv)
        configure_console(args.encoding)

        if args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False, max_steps=args.max_steps, final_only=args.final)
            sess.run()

        else:
            sess = Session(error_handler, Session.SH_FILE, cmd_line=True, max_steps=args.max_steps,
                           final_only=args.final)
            Shell(sess).cmdloop()


if __name__ == "__main__":
    main()
