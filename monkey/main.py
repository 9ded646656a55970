"""Runs monkey files or the interactive shell, inside the error handling context manager. Called from the monkey
executable script.

Python version must be >=3.7, because error handling requires that dicts are insertion-ordered.
"""

import argparse
import sys

from monkey.lang.error import ErrorHandler
from monkey.lang.session import Session
from monkey.lang.shell import Shell
from monkey.runtime.objects import NULL


def main(argv=None):
    """Runs monkey interpreter. Called from monkey executable script."""
    assert sys.version_info >= (3, 7), "monkey cannot be run with python < 3.7"

    parser = argparse.ArgumentParser(prog="monkey")
    parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
    parser.add_argument("-v", "--verbose", help="print parsed programs and function calls", action="store_true")
    args = parser.parse_args(argv)

    with ErrorHandler(verbose=args.verbose) as error_handler:
        if args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False)
            sess.run()

            for result in sess.results:
                if result is not NULL:
                    print(result.inspect())

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True)).cmdloop()


if __name__ == "__main__":
    main()
