"""Tree-walking evaluation of a Program against a tape of byte cells and a single data pointer."""

import struct
import sys

from brainfsk.lang.error import ExecutionError
from brainfsk.lang.streams import ConsoleInput
from brainfsk.pure.lexical import Command, Loop


class ExecutionContext:
    """Context in which a Program executes: a tape that is zero everywhere until written and grows on demand, plus the
    data pointer. One context per run.
    """
    ADDRESS_SPACE = 2 ** (8 * struct.calcsize("P"))  # pointer wraps like the platform's unsigned pointer-sized int
    CELL_SIZE = 256

    def __init__(self, input_source=None, output=None):
        self.pointer = 0
        self.tape = bytearray()

        self.input_source = input_source if input_source is not None else ConsoleInput()
        self._output = output

    @property
    def output(self):
        """Sink for '.' commands. Resolved lazily so a redirected sys.stdout is honored."""
        return self._output if self._output is not None else sys.stdout

    def execute(self, program):
        """Executes program in this context. An ExecutionError aborts the whole call, including enclosing loops; tape
        changes made before the error are kept.

        Running loops are kept on an explicit stack of (loop, remaining body nodes). When a body runs out, the cell
        under the pointer is checked again and the body restarts if it is non-zero.
        """
        running = [(None, iter(program))]
        while running:
            loop, nodes = running[-1]
            node = next(nodes, None)

            if node is None:
                running.pop()
                if loop is not None and self.getdata(self.pointer) != 0:
                    running.append((loop, iter(loop.body)))
                continue

            if isinstance(node, Loop):
                if self.getdata(self.pointer) != 0:
                    running.append((node, iter(node.body)))
                continue

            command = node.command
            if command is Command.MovePointerRight:
                self.pointer = (self.pointer + 1) % self.ADDRESS_SPACE
            elif command is Command.MovePointerLeft:
                self.pointer = (self.pointer - 1) % self.ADDRESS_SPACE
            elif command is Command.IncrementCell:
                self.setdata(self.pointer, (self.getdata(self.pointer) + 1) % self.CELL_SIZE)
            elif command is Command.DecrementCell:
                self.setdata(self.pointer, (self.getdata(self.pointer) - 1) % self.CELL_SIZE)
            elif command is Command.ReadByte:
                self.setdata(self.pointer, self.input_source.read_byte())
            elif command is Command.WriteByte:
                self.output.write(chr(self.getdata(self.pointer)))

    def getdata(self, address):
        """Gets data cell at address. Addresses that were never written read as 0."""
        if address >= len(self.tape):
            return 0
        return self.tape[address]

    def setdata(self, address, value):
        """Sets data cell at address to value, zero-filling the tape up to address first if needed."""
        if address >= len(self.tape):
            try:
                self.tape.extend(bytes(address - len(self.tape) + 1))
            except (MemoryError, OverflowError):
                raise ExecutionError("tape cannot grow to address {}", str(address))
        self.tape[address] = value

    def __repr__(self):
        return f"ExecutionContext(pointer={self.pointer}, tape={list(self.tape)})"
