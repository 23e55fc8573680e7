"""
Vertical ("rotated") tree printing for the execution trace.

The right child is drawn above a node's label and the left child below it,
each level indented five more columns. Statement lists are drawn as a chain
of ``stmtlist`` labels: newest statement on the right, the earlier ones on
the left.
"""
import io
from typing import Optional, Sequence, TextIO

from toyl.classes import Constants
from toyl.nodes import Node, StmtList


class TreeRenderer:

    def __init__(self, sink: TextIO, spacing: int = Constants.SPACING_PER_LEVEL):
        self.sink = sink
        self.spacing = spacing

    def render(self, node: Optional[Node]) -> None:
        """Draw ``node`` followed by the separator line. Nothing is written for None."""
        if node is None:
            return
        self._print_vertical(node, 0)
        self.sink.write(Constants.SEPARATOR)

    def to_string(self, node: Optional[Node]) -> str:
        sink, self.sink = self.sink, io.StringIO()
        try:
            self.render(node)
            return self.sink.getvalue()
        finally:
            self.sink = sink

    def _print_vertical(self, node: Optional[Node], space: int) -> None:
        if node is None:
            return
        if isinstance(node, StmtList):
            self._print_chain(node.statements, len(node.statements), space)
            return

        space += self.spacing
        left, right = node.children()
        self._print_vertical(right, space)
        self._write_label(node.label, space)
        self._print_vertical(left, space)

    def _print_chain(self, statements: Sequence[Node], count: int, space: int) -> None:
        # statements[:count] seen as stmtlist(previous=statements[:count-1], statement=statements[count-1])
        if count == 0:
            return
        space += self.spacing
        self._print_vertical(statements[count - 1], space)
        self._write_label(StmtList.label, space)
        self._print_chain(statements, count - 1, space)

    def _write_label(self, label: str, space: int) -> None:
        self.sink.write("\n" + " " * (space - self.spacing) + f"{label}\n")

