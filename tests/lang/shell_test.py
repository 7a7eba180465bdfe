import contextlib
import io
import unittest

from brainfsk.lang.error import ErrorHandler
from brainfsk.lang.session import Session
from brainfsk.lang.shell import Shell
from brainfsk.lang.streams import StreamInput


class ShellTestCase(unittest.TestCase):

    def setUp(self):
        self.output = io.StringIO()
        self.sess = Session(ErrorHandler(), Session.SH_FILE, True, StreamInput(io.BytesIO(b"x")), self.output)
        self.shell = Shell(self.sess, stdin=io.StringIO(), stdout=io.StringIO())

    def test_tape_persists(self):
        self.shell.onecmd("++")
        self.shell.onecmd(">+")
        self.assertEqual(bytearray([2, 1]), self.sess.context.tape)
        self.assertEqual(1, self.sess.context.pointer)

    def test_traceback_cleared(self):
        self.shell.onecmd("+[-]+")
        self.assertEqual({Session.SH_FILE: (None, None)}, self.sess.error_handler.traceback)

    def test_continuation(self):
        self.shell.onecmd("++[")
        self.assertEqual(Shell.secondary_prompt, self.shell.prompt)
        self.assertEqual(bytearray(), self.sess.context.tape)

        self.shell.onecmd(">+<-]")
        self.assertEqual(Shell.prompt, self.shell.prompt)
        self.assertEqual(bytearray([0, 2]), self.sess.context.tape)

    def test_errors_are_not_fatal(self):
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout):
            self.shell.onecmd("+]")
            self.shell.onecmd(",.,")
        self.assertIn("extra ']'", stdout.getvalue())
        self.assertIn("end of input", stdout.getvalue())

        self.assertEqual("x", self.output.getvalue())
        self.assertEqual({}, self.sess.to_exec)

        self.shell.onecmd("+")
        self.assertEqual(ord("x") + 1, self.sess.context.getdata(0))

    def test_exit(self):
        self.assertTrue(self.shell.onecmd("exit"))
        with contextlib.redirect_stdout(io.StringIO()):
            self.assertTrue(self.shell.onecmd("EOF"))
        self.assertFalse(self.shell.onecmd(""))

    def test_cmdloop(self):
        self.shell = Shell(self.sess, stdin=io.StringIO("+++[>++\n<-]>.\nexit\n"), stdout=io.StringIO())
        self.shell.use_rawinput = False
        self.shell.cmdloop()
        self.assertEqual("\x06", self.output.getvalue())
        self.assertIn("brainfsk interpreter", self.shell.stdout.getvalue())


if __name__ == '__main__':
    unittest.main()
