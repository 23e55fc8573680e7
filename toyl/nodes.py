"""
Abstract syntax tree of a toyl program.

Every node kind is its own frozen dataclass carrying only the fields it needs.
The builder functions at the bottom are the only way the grammar driver creates
nodes; they never evaluate anything and never touch the symbol store.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from toyl.classes import Constants


class Operator(Enum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    EQ = "=="
    NE = "!="
    LE = "<="
    GE = ">="
    LT = "<"
    GT = ">"

    @property
    def is_comparison(self) -> bool:
        return self not in (Operator.ADD, Operator.SUB, Operator.MUL, Operator.DIV)

    @classmethod
    def from_symbol(cls, symbol: str) -> "Operator":
        try:
            return cls(symbol)
        except ValueError:
            raise ValueError(f"unknown operator {symbol!r}") from None


class Node:
    """Common base: a label for the tree renderer and a (left, right) view of the children."""
    label = ""

    def children(self) -> Tuple[Optional["Node"], Optional["Node"]]:
        return None, None


# --- expressions ---

@dataclass(frozen=True)
class IntLiteral(Node):
    value: int
    line: Optional[int] = field(default=None, compare=False)

    @property
    def label(self) -> str:
        return f"INTEGER({self.value})"


@dataclass(frozen=True)
class VariableRef(Node):
    id: int
    line: Optional[int] = field(default=None, compare=False)

    @property
    def label(self) -> str:
        return f"VAR(id={self.id})"


@dataclass(frozen=True)
class BinaryOp(Node):
    operator: Operator
    left: Node
    right: Node
    line: Optional[int] = field(default=None, compare=False)

    @property
    def label(self) -> str:
        return self.operator.value if isinstance(self.operator, Operator) else str(self.operator)

    def children(self):
        return self.left, self.right


# --- statements ---

@dataclass(frozen=True)
class Declaration(Node):
    variable: VariableRef
    init_expr: Node
    line: Optional[int] = field(default=None, compare=False)

    label = "dec"

    def children(self):
        return self.variable, self.init_expr


@dataclass(frozen=True)
class Assignment(Node):
    variable: VariableRef
    expr: Node
    line: Optional[int] = field(default=None, compare=False)

    label = "assign"

    def children(self):
        return self.variable, self.expr


@dataclass(frozen=True)
class PrintStmt(Node):
    expr: Node
    line: Optional[int] = field(default=None, compare=False)

    label = "print"

    def children(self):
        return self.expr, None


@dataclass(frozen=True)
class StmtList(Node):
    statements: Tuple[Node, ...] = ()
    line: Optional[int] = field(default=None, compare=False)

    label = "stmtlist"

    def __len__(self) -> int:
        return len(self.statements)

    def __iter__(self):
        return iter(self.statements)


EMPTY_LIST = StmtList()


@dataclass(frozen=True)
class Branches(Node):
    """Branch holder of an if statement. ``else_list`` is empty when no else was written."""
    then_list: StmtList
    else_list: StmtList = EMPTY_LIST
    line: Optional[int] = field(default=None, compare=False)

    label = "branches"

    def children(self):
        return self.then_list, self.else_list


@dataclass(frozen=True)
class IfStmt(Node):
    condition: Node
    branches: Branches
    line: Optional[int] = field(default=None, compare=False)

    label = "if"

    def children(self):
        return self.condition, self.branches


@dataclass(frozen=True)
class Program:
    """Result of the construction phase: the root list and the variable names in id order."""
    body: StmtList = EMPTY_LIST
    variables: Tuple[str, ...] = ()


# ===== builders =====

def int_literal(value: int, line=None) -> IntLiteral:
    return IntLiteral(int(value), line)


def variable_ref(var_id: int, line=None) -> VariableRef:
    if not 0 <= var_id < Constants.MAX_VARIABLES:
        raise ValueError(f"variable id {var_id} outside [0, {Constants.MAX_VARIABLES})")
    return VariableRef(var_id, line)


def binary_op(symbol: str, left: Node, right: Node, line=None) -> BinaryOp:
    return BinaryOp(Operator.from_symbol(symbol), left, right, line)


def declaration(variable: VariableRef, init_expr: Node, line=None) -> Declaration:
    return Declaration(variable, init_expr, line)


def assignment(variable: VariableRef, expr: Node, line=None) -> Assignment:
    return Assignment(variable, expr, line)


def print_stmt(expr: Node, line=None) -> PrintStmt:
    return PrintStmt(expr, line)


def if_stmt(condition: Node, then_list: Optional[StmtList], else_list: Optional[StmtList] = None,
            line=None) -> IfStmt:
    branches = Branches(then_list or EMPTY_LIST, else_list or EMPTY_LIST, line)
    return IfStmt(condition, branches, line)


def stmt_list(previous: Optional[StmtList], statement: Node, line=None) -> StmtList:
    """Return a new list holding the statements of ``previous`` followed by ``statement``."""
    if isinstance(statement, StmtList):
        raise TypeError("a statement list cannot hold another statement list")
    if previous is None:
        return StmtList((statement,), line)
    return StmtList(previous.statements + (statement,), previous.line if previous.line is not None else line)


def stmt_block(statements, line=None) -> StmtList:
    """The list of ``statements`` in order, built in one step."""
    statements = tuple(statements)
    for statement in statements:
        if isinstance(statement, StmtList):
            raise TypeError("a statement list cannot hold another statement list")
    return StmtList(statements, line)
