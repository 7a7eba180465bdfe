import unittest

from brainfsk.lang.error import ParseError
from brainfsk.pure.lexical import LOOP_END, LOOP_START, Command, Loop, Operation, Program, classify, parse


class ClassifyTestCase(unittest.TestCase):

    def test_classify(self):
        cases = {
            ">": Operation(Command.MovePointerRight),
            "<": Operation(Command.MovePointerLeft),
            "+": Operation(Command.IncrementCell),
            "-": Operation(Command.DecrementCell),
            ",": Operation(Command.ReadByte),
            ".": Operation(Command.WriteByte),
            "[": LOOP_START,
            "]": LOOP_END,
        }
        for case, expected in cases.items():
            self.assertEqual(expected, classify(case), case)

        should_ignore = ["a", " ", "\n", "#", "(", "λ", "0"]
        for case in should_ignore:
            self.assertIsNone(classify(case), case)


class ParseTestCase(unittest.TestCase):

    def test_operation_count(self):
        cases = {
            "": 0,
            "[]": 0,
            "+-<>,.": 6,
            "hello, world.": 2,
            "+[->+<]": 5,
            "[[[]]]": 0,
            "++ comment [>+ more\n comment <-]": 6,
            "[-][+[.,[<>]]]": 6,
        }
        for case, expected in cases.items():
            self.assertEqual(expected, len(list(parse(case).operations())), case)

    def test_structure(self):
        cases = {
            "+": Program([Operation(Command.IncrementCell)]),
            "[]": Program([Loop(Program())]),
            "x[-]x": Program([Loop(Program([Operation(Command.DecrementCell)]))]),
            "+[>[-]<]": Program([
                Operation(Command.IncrementCell),
                Loop(Program([
                    Operation(Command.MovePointerRight),
                    Loop(Program([Operation(Command.DecrementCell)])),
                    Operation(Command.MovePointerLeft),
                ])),
            ]),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, parse(case), case)

    def test_extra_close(self):
        cases = {
            "]": (1, 0),
            "[]]": (1, 2),
            "+-]+[": (1, 2),
            "++\n +]": (2, 2),
        }
        for case, (line, column) in cases.items():
            with self.assertRaises(ParseError, msg=case) as cm:
                parse(case)
            self.assertEqual(ParseError.EXTRA_CLOSE, cm.exception.kind, case)
            self.assertEqual((line, column), (cm.exception.line, cm.exception.column), case)

    def test_missing_close(self):
        cases = {
            "[": (1, 0),
            "+[[]": (1, 1),
            "[]\n[[-]": (2, 0),
            "[[[]]": (1, 0),
        }
        for case, (line, column) in cases.items():
            with self.assertRaises(ParseError, msg=case) as cm:
                parse(case)
            self.assertEqual(ParseError.MISSING_CLOSE, cm.exception.kind, case)
            self.assertEqual((line, column), (cm.exception.line, cm.exception.column), case)

    def test_single_pass(self):
        program = parse(iter("+[-]."))
        self.assertEqual(3, len(program))
        self.assertIsInstance(program[1], Loop)

    def test_deep_nesting(self):
        depth = 5000
        program = parse("[" * depth + "+" + "]" * depth)
        self.assertEqual(1, len(program))
        self.assertEqual(1, len(list(program.operations())))

        with self.assertRaises(ParseError) as cm:
            parse("[" * depth)
        self.assertEqual(ParseError.MISSING_CLOSE, cm.exception.kind)
        self.assertEqual((1, depth - 1), (cm.exception.line, cm.exception.column))

    def test_idempotent(self):
        source = "++++++++[>++++[>++>+++>+++>+<<<<-]>+>+>->>+[<]<-]>>.>---.+++++++..+++."
        self.assertEqual(parse(source), parse(source))
        self.assertEqual(hash(parse(source)), hash(parse(source)))

    def test_display(self):
        cases = {
            "+": "IncrementCell",
            "[]": "Loop()",
            "+[-[]]": "IncrementCell\nLoop(\n    DecrementCell\n    Loop()\n)",
            "[>[.]]": "Loop(\n    MovePointerRight\n    Loop(\n        WriteByte\n    )\n)",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, parse(case).display(), case)


if __name__ == '__main__':
    unittest.main()
