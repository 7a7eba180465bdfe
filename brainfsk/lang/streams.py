"""Byte sources for the ',' command. The evaluator only ever asks a ByteSource for one byte at a time, so console,
file-based, or scripted input can be swapped in without touching it.
"""

from abc import ABC, abstractmethod
import sys

from brainfsk.lang.error import ErrorHandler, ExecutionError


class ByteSource(ABC):
    """Superclass for anything that can supply single bytes to a running program."""

    @abstractmethod
    def read_byte(self):
        """This method should block until one byte is available and return it as an int in [0, 255]. It should raise an
        ExecutionError if no byte can be read.
        """


class ConsoleInput(ByteSource):
    """Prompts for each byte on the console. Malformed entries are rejected with a warning and re-prompted; I/O failures
    and end of input are fatal.
    """
    PROMPT = "enter single byte: "

    def __init__(self, stdin=None, stdout=None):
        self._stdin = stdin
        self._stdout = stdout

    @property
    def stdin(self):
        return self._stdin if self._stdin is not None else sys.stdin

    @property
    def stdout(self):
        return self._stdout if self._stdout is not None else sys.stdout

    def read_byte(self):
        while True:
            print(self.PROMPT, file=self.stdout)
            try:
                entry = self.stdin.readline()
            except OSError as error:
                raise ExecutionError("could not read char: {}", str(error))

            if not entry:
                raise ExecutionError("could not read char: {}", "end of input")

            entry = entry.rstrip("\r\n")
            if len(entry) != 1:
                print(ErrorHandler.warning("only a single char, please"), file=self.stdout)
            elif ord(entry) > 0xff:
                print(ErrorHandler.warning("char must fit in a single byte"), file=self.stdout)
            else:
                return ord(entry)


class StreamInput(ByteSource):
    """Reads bytes in order from a binary stream, e.g. a file opened with 'rb' or an io.BytesIO."""

    def __init__(self, stream):
        self.stream = stream

    def read_byte(self):
        try:
            byte = self.stream.read(1)
        except OSError as error:
            raise ExecutionError("could not read char: {}", str(error))

        if not byte:
            raise ExecutionError("could not read char: {}", "end of input")
        return byte[0]
