"""Handles interactive/command-line mode for brainfsk. Uses cmd as backend."""

import cmd


class Shell(cmd.Cmd):
    """brainfsk interpreter shell. Every line runs in the same context, so the tape survives between lines."""
    intro = "brainfsk interpreter :: Python backend\nType '?' or 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used for line continutations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

        self._tmp_line = ""
        self._first_line_num = 0
        self.line_num = 0

    def default(self, line):
        """Executes arbitrary brainfsk code."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            if not self._tmp_line:
                self._first_line_num = self.line_num

            line, add_to_prev = self.sess.preprocess_line(line, self._tmp_line)

            if add_to_prev:
                self._tmp_line = line
                self.prompt = self.secondary_prompt
            else:
                self._tmp_line = ""
                self.prompt = self._tmp_prompt

                self.sess.add(line, self._first_line_num)
                self.sess.run()

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the brainfsk interpreter!\n\n"
              "Programs run on a tape of byte cells, all zero to begin with, and a data pointer\n"
              "starting at cell 0. Commands: '>' and '<' move the pointer, '+' and '-' change the\n"
              "current cell, '.' prints it and ',' reads one byte into it. '[' ... ']' repeats\n"
              "its body while the current cell is non-zero. Everything else is a comment.\n\n"
              "The tape is kept between lines. Try '++++++++[>++++++++<-]>+.' to print 'A'.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
