"""
Grammar driver: turns the lark parse tree of ``toyl.lark`` into toyl nodes.

Only the node builders of ``toyl.nodes`` are called here; nothing is evaluated.
Variable names get ids in the order they first appear in the source.
"""
from typing import Dict

from lark import Transformer, Token, v_args

from toyl import nodes
from toyl.classes import Constants
from toyl.errors import ToylSyntaxError

import logging
logger = logging.getLogger(__name__)


def _line(meta):
    # empty rules (e.g. a block with no statements) carry no position
    return getattr(meta, "line", None)


@v_args(inline=True, meta=True)
class ToylBuilder(Transformer):
    def __init__(self):
        super().__init__(visit_tokens=True)
        self._ids: Dict[str, int] = {}

    @property
    def variables(self):
        return tuple(self._ids)

    # -------- tokens --------

    def VARIABLE(self, token: Token) -> int:
        name = str(token)
        if name not in self._ids:
            if len(self._ids) >= Constants.MAX_VARIABLES:
                raise ToylSyntaxError(Constants.ERR_TOO_MANY_VARS, token.line)
            self._ids[name] = len(self._ids)
            logger.debug(f"variable {name} -> id {self._ids[name]}")
        return self._ids[name]

    # -------- statements --------

    def start(self, meta, *stmts):
        return nodes.Program(self._fold(stmts, meta), self.variables)

    def block(self, meta, *stmts):
        return self._fold(stmts, meta)

    def declaration(self, meta, var_id, expr):
        return nodes.declaration(nodes.variable_ref(var_id, _line(meta)), expr, _line(meta))

    def assignment(self, meta, var_id, expr):
        return nodes.assignment(nodes.variable_ref(var_id, _line(meta)), expr, _line(meta))

    def print_stmt(self, meta, expr):
        return nodes.print_stmt(expr, _line(meta))

    def expr_stmt(self, meta, expr):
        # a bare expression statement prints its value
        return nodes.print_stmt(expr, _line(meta))

    def if_stmt(self, meta, condition, then_list, else_list=None):
        return nodes.if_stmt(condition, then_list, else_list, _line(meta))

    # -------- expressions --------

    def compare(self, meta, left, op, right):
        return nodes.binary_op(str(op), left, right, _line(meta))

    def add(self, meta, left, right):
        return nodes.binary_op("+", left, right, _line(meta))

    def sub(self, meta, left, right):
        return nodes.binary_op("-", left, right, _line(meta))

    def mul(self, meta, left, right):
        return nodes.binary_op("*", left, right, _line(meta))

    def div(self, meta, left, right):
        return nodes.binary_op("/", left, right, _line(meta))

    # -------- atoms --------

    def integer(self, meta, token):
        return nodes.int_literal(int(token), _line(meta))

    def variable(self, meta, var_id):
        return nodes.variable_ref(var_id, _line(meta))

    # -------- helpers --------

    @staticmethod
    def _fold(stmts, meta):
        if not stmts:
            return nodes.EMPTY_LIST
        return nodes.stmt_block(stmts, _line(meta))
