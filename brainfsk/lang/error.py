"""Error handling for brainfsk. Only GenericExceptions should be encountered during running: if another type of error is
raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error message so that it can be used to throw a brainfsk error. msg is a format string whose '{}'
    slots are filled with bolded exprs.
    """

    def __init__(self, msg, exprs=None, diagnosis=True, internal=False):
        """Parses args for GenericException."""
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]

        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.expr = exprs[0]  # exprs[0] should be the offending expr that caused the error
        self.end = len(self.expr)  # needed for error display

        self.start = 0
        self.diagnosis = diagnosis
        self.internal = internal

        super().__init__(msg.format(*exprs))


class ParseError(GenericException):
    """Unbalanced loop markers. line and column locate the offending bracket in the source."""
    EXTRA_CLOSE = "extra ']'"
    MISSING_CLOSE = "missing ']' character"

    def __init__(self, kind, line=1, column=0):
        super().__init__(kind, diagnosis=False)
        self.kind = kind
        self.line = line
        self.column = column
        self._source_line = line  # line as counted by parse, before any pin

    def pin(self, source, first_line=1):
        """Points this error's diagnosis at its bracket in source, where source starts at line first_line. Returns the
        offending line of source.
        """
        self.line = self._source_line + first_line - 1
        self.expr = source.split("\n")[self._source_line - 1].rstrip()
        self.start = self.column
        self.end = self.column + 1
        self.diagnosis = True
        return self.expr


class ExecutionError(GenericException):
    """Aborts a running program. Raised when a byte cannot be read or the tape cannot be grown."""

    def __init__(self, msg, exprs=None):
        super().__init__(msg, exprs, diagnosis=False)


class ErrorHandler:
    """Context manager that will silently suppress Python errors and raise custom brainfsk errors."""
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True):
        self.fatal = fatal
        self.traceback = {}

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Registers line in traceback given path. Should be called prior to Session add/run."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Removes line from traceback given path. Should be called after successful Session add/run."""
        self.traceback[path] = (None, None)

    @staticmethod
    def diagnose(error):
        """Returns offending part of error.expr highlighted and bolded."""
        diagnosis = "  " + error.expr[:error.start]

        end = max(error.end, error.start + 1)
        diagnosis += colored(error.expr[error.start:end], ErrorHandler.ERROR, attrs=["bold"])
        diagnosis += error.expr[end:] + "\n"

        diagnosis += "  " + " " * error.start
        diagnosis += colored("^" + "~" * (end - error.start - 1), ErrorHandler.ERROR, attrs=["bold"])

        return diagnosis

    @staticmethod
    def warning(msg):
        """Returns msg formatted as a warning."""
        return colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + msg

    def throw(self, error):
        """Throws error using error and self.traceback. error must be a GenericException, and self.traceback must be a
        dict of file: (line, line_num) representing origination of error.
        """
        error_msg = ""
        lines = 0
        for file, (line, line_num) in self.traceback.items():
            if line:
                error_msg += f"  File '{file}', line {line_num}:\n"
                error_msg += f"    {line}\n"
                lines += 1

        if lines > 1:
            error_msg = "Traceback:\n" + error_msg

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error))

        if self.fatal:
            sys.exit(1)
        self.traceback = {path: (None, None) for path in self.traceback}  # error reported, forget offending lines

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is None:
            return False

        if issubclass(exc_type, KeyboardInterrupt):
            self.throw(GenericException("keyboard interrupt", diagnosis=False))
        elif issubclass(exc_type, SystemExit):
            do_exit = True
        elif issubclass(exc_type, RecursionError):
            self.throw(GenericException("maximum nesting depth exceeded", diagnosis=False))
        elif issubclass(exc_type, GenericException):
            self.throw(exc_val)
        else:
            self.throw(GenericException("unknown error: {}", f"{exc_type.__name__}: {exc_val}", internal=True))
            do_exit = True

        return not do_exit
