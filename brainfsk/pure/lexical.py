"""Abstract syntax tree token generator and parser for the tape language.

Formally, the grammar can be defined as

```
<program> ::= <node>*
<node>    ::= <command>                 ; "operation"
            | "[" <program> "]"         ; "loop"
                                        ; - brackets are matched by nesting, not by position
<command> ::= ">" | "<" | "+" | "-" | "," | "."
<comment> ::= any other character       ; ignored, takes no slot in the AST
```

Note that loops are the only non-terminals: a Program is a strict tree of Operations and Loops, each Loop owning the
Program that makes up its body.
"""

from abc import ABC, abstractmethod
from enum import Enum

from brainfsk.lang.error import ParseError


class Command(Enum):
    """The six primitive operations, valued by the character that denotes them."""
    MovePointerRight = ">"
    MovePointerLeft = "<"
    IncrementCell = "+"
    DecrementCell = "-"
    ReadByte = ","
    WriteByte = "."


LOOP_START = "["
LOOP_END = "]"


def classify(char):
    """Returns the Operation denoted by char, LOOP_START or LOOP_END for brackets, and None for ignored characters."""
    if char in (LOOP_START, LOOP_END):
        return char
    try:
        return Operation(Command(char))
    except ValueError:
        return None


class Node(ABC):
    """Superclass representing any node in a Program."""

    def __init__(self):
        self._cls = type(self).__name__

    @abstractmethod
    def display(self, indents=0):
        """This method should recursively render this node (and its children) for debugging, indented by indents."""

    @abstractmethod
    def operations(self):
        """This method should yield every Operation in this subtree, depth-first."""


class Operation(Node):
    """Single primitive command."""

    def __init__(self, command):
        super().__init__()
        self.command = command

    def display(self, indents=0):
        return f"{'    ' * indents}{self.command.name}"

    def operations(self):
        yield self

    def __repr__(self):
        return f"{self._cls}({self.command.name})"

    def __eq__(self, other):
        return isinstance(other, type(self)) and self.command is other.command

    def __hash__(self):
        return hash(self.command)


class Loop(Node):
    """Loop node: body is repeated while the cell under the data pointer is non-zero."""

    def __init__(self, body):
        super().__init__()
        self.body = body

    def display(self, indents=0):
        """Format:
        Loop(
            <child>
            Loop(
                ...
            )
        )
        """
        if not self.body:
            return f"{'    ' * indents}Loop()"

        result = f"{'    ' * indents}Loop("
        for node in self.body:
            result += "\n" + node.display(indents + 1)
        return result + f"\n{'    ' * indents})"

    def operations(self):
        return self.body.operations()

    def __repr__(self):
        return f"{self._cls}({', '.join(repr(node) for node in self.body)})"

    def __eq__(self, other):
        return isinstance(other, type(self)) and self.body == other.body

    def __hash__(self):
        return hash(self.body)


class Program:
    """Ordered, immutable sequence of nodes. Insertion order is execution order."""

    def __init__(self, nodes=()):
        self.nodes = tuple(nodes)

    def display(self, indents=0):
        """Renders every top-level node on its own line."""
        return "\n".join(node.display(indents) for node in self.nodes)

    def operations(self):
        pending = [iter(self.nodes)]
        while pending:
            node = next(pending[-1], None)
            if node is None:
                pending.pop()
            elif isinstance(node, Loop):
                pending.append(iter(node.body))
            else:
                yield node

    def __iter__(self):
        return iter(self.nodes)

    def __len__(self):
        return len(self.nodes)

    def __getitem__(self, idx):
        return self.nodes[idx]

    def __repr__(self):
        return f"Program({', '.join(repr(node) for node in self.nodes)})"

    def __str__(self):
        return self.display()

    def __eq__(self, other):
        return isinstance(other, Program) and self.nodes == other.nodes

    def __hash__(self):
        return hash(self.nodes)


def _located(stream):
    """Yields (char, line, column) for every char in stream. Lines start at 1, columns at 0."""
    line, column = 1, 0
    for char in stream:
        yield char, line, column
        if char == "\n":
            line, column = line + 1, 0
        else:
            column += 1


def parse(stream):
    """Parses stream (any iterable of characters) into a Program in a single forward pass. Raises a ParseError if loop
    markers are unbalanced; nothing is returned in that case.

    Open loops are kept on an explicit stack of (enclosing nodes, position of the '['), so nesting depth is not bound
    by the call stack.
    """
    nodes = []
    opened = []
    for char, line, column in _located(stream):
        token = classify(char)

        if token is None:
            continue
        elif token == LOOP_START:
            opened.append((nodes, (line, column)))
            nodes = []
        elif token == LOOP_END:
            if not opened:
                raise ParseError(ParseError.EXTRA_CLOSE, line, column)
            enclosing, __ = opened.pop()
            enclosing.append(Loop(Program(nodes)))
            nodes = enclosing
        else:
            nodes.append(token)

    if opened:
        raise ParseError(ParseError.MISSING_CLOSE, *opened[-1][1])  # innermost unclosed '['
    return Program(nodes)
