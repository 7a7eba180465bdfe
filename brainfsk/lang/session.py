"""Session control for brainfsk. Parses and runs programs, either from a source file or line by line in command-line
mode.
"""

from brainfsk.lang.error import GenericException, ParseError
from brainfsk.pure.context import ExecutionContext
from brainfsk.pure.lexical import LOOP_END, LOOP_START, parse


class Session:
    """Governs a brainfsk session: the programs waiting to run and the one ExecutionContext they all run in."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path, cmd_line, input_source=None, output=None):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode

        self.context = ExecutionContext(input_source, output)
        self.to_exec = {}  # dict of line num: Programs to execute

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            try:
                with open(path, "r") as file:
                    source = file.read()
            except OSError:
                raise GenericException("'{}' could not be opened", path, diagnosis=False)

            self.add(source, 1)

        elif not cmd_line:
            raise GenericException("'<in>' is a reserved filename")

    @staticmethod
    def preprocess_line(line, add_to_prev):
        """Preprocesses a line from the command-line. add_to_prev is the text of previous lines still waiting for their
        loops to close. Returns the joined text and whether or not a line continuation is necessary.
        """
        if add_to_prev:
            line = add_to_prev + "\n" + line
        return line, line.count(LOOP_START) > line.count(LOOP_END)

    def add(self, source, line_num):
        """Parses source, which starts at line line_num, and queues the Program for run. Raises ParseError if source has
        unbalanced loop markers.
        """
        self.error_handler.register_line(self.path, source.split("\n")[0].rstrip(), line_num)  # in case error is raised

        try:
            program = parse(source)
        except ParseError as error:
            line = error.pin(source, line_num)
            self.error_handler.register_line(self.path, line, error.line)
            raise

        self.to_exec[line_num] = program
        self.error_handler.remove_line(self.path)  # error was not raised
        return program

    def dump(self):
        """Returns the debug rendering of every queued Program."""
        return "\n".join(program.display() for program in self.to_exec.values() if program)

    def run(self):
        """Runs this session's queued Programs in order. Will raise any errors that are encountered."""
        for line_num, program in list(self.to_exec.items()):
            try:
                self.context.execute(program)
            finally:
                if self.cmd_line:
                    del self.to_exec[line_num]
