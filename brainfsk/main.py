"""Runs brainfsk programs from files or in command-line mode, inside the error handling context manager. Called from
the brainfsk console script.
"""

import argparse

from brainfsk.lang.error import ErrorHandler, GenericException
from brainfsk.lang.session import Session
from brainfsk.lang.shell import Shell
from brainfsk.lang.streams import StreamInput


def parse_args(argv=None):
    """Parses command-line arguments."""
    parser = argparse.ArgumentParser(prog="brainfsk")
    parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
    parser.add_argument("-d", "--dump", action="store_true",
                        help="instead of executing, dump string representation of ops to stdout")
    parser.add_argument("-i", "--input", metavar="FILE", help="read ',' bytes from FILE instead of the console")
    return parser.parse_args(argv)


def main(argv=None):
    """Runs brainfsk interpreter. Called from brainfsk console script."""
    with ErrorHandler() as error_handler:
        args = parse_args(argv)

        input_file = None
        if args.input is not None:
            try:
                input_file = open(args.input, "rb")
            except OSError:
                raise GenericException("'{}' could not be opened", args.input, diagnosis=False)

        try:
            input_source = StreamInput(input_file) if input_file else None

            if args.file is not None:
                sess = Session(error_handler, args.file, cmd_line=False, input_source=input_source)
                if args.dump:
                    print(sess.dump())
                else:
                    sess.run()

            else:
                Shell(Session(error_handler, Session.SH_FILE, cmd_line=True, input_source=input_source)).cmdloop()

        finally:
            if input_file:
                input_file.close()


if __name__ == "__main__":
    main()
