"""
Statement executor: the execution phase of a toyl run.

A run has two phases. While the grammar driver builds the tree the executor
is BUILDING and does nothing; ``run`` moves it to RUNNING exactly once, with
the finished root, and there is no way back.
"""
from enum import Enum
from typing import Optional, Union

from toyl.channels import OutputChannels
from toyl.classes import Constants
from toyl.errors import ExecutorStateError, InternalError, MalformedTree
from toyl.evaluator import ExpressionEvaluator
from toyl.nodes import (
    Assignment, Branches, Declaration, IfStmt, Node, PrintStmt, Program, StmtList, VariableRef,
)
from toyl.renderer import TreeRenderer
from toyl.symbols import SymbolStore

import logging
logger = logging.getLogger(__name__)


class ExecutorState(Enum):
    BUILDING = "Building"
    RUNNING = "Running"


class StatementExecutor:

    def __init__(self, store: SymbolStore, channels: OutputChannels,
                 evaluator: Optional[ExpressionEvaluator] = None,
                 renderer: Optional[TreeRenderer] = None):
        self.store = store
        self.channels = channels
        self.evaluator = evaluator or ExpressionEvaluator(store, channels)
        self.renderer = renderer or TreeRenderer(channels.trace)
        self.state = ExecutorState.BUILDING

    def run(self, root: Union[Program, StmtList, Node, None]) -> int:
        """Execute the whole tree once. Returns the number of errors reported meanwhile."""
        if self.state is ExecutorState.RUNNING:
            raise ExecutorStateError(Constants.ERR_ALREADY_RAN)
        self.state = ExecutorState.RUNNING

        if isinstance(root, Program):
            root = root.body
        errors_before = self.channels.error_count
        self.execute_list(root)
        return self.channels.error_count - errors_before

    def execute_list(self, stmts: Optional[Node]) -> None:
        if stmts is None:
            return
        if isinstance(stmts, StmtList):
            for stmt in stmts:
                self.execute_statement(stmt)
        else:
            self.execute_statement(stmts)

    def execute_statement(self, stmt: Optional[Node]) -> None:
        if stmt is None:
            return

        # only executed statements show up in the trace
        self.renderer.render(stmt)
        self.channels.locate(getattr(stmt, "line", None))

        try:
            match stmt:
                case Declaration(variable=variable, init_expr=init_expr):
                    value = self.evaluator.evaluate(init_expr)
                    var_id = self._target(variable, Constants.ERR_DECL_TARGET, stmt)
                    self.store.write(var_id, value)
                    self.channels.effect(f"Declared var[{var_id}] = {value}")
                case Assignment(variable=variable, expr=expr):
                    # no check that the variable was declared first
                    value = self.evaluator.evaluate(expr)
                    var_id = self._target(variable, Constants.ERR_ASSIGN_TARGET, stmt)
                    self.store.write(var_id, value)
                    self.channels.effect(f"Assigned var[{var_id}] = {value}")
                case PrintStmt(expr=expr):
                    value = self.evaluator.evaluate(expr)
                    self.channels.effect(f"Print: {value}")
                case IfStmt(condition=condition, branches=branches):
                    cond_val = self.evaluator.evaluate(condition)
                    if not isinstance(branches, Branches):
                        raise MalformedTree(Constants.ERR_IF_BRANCHES, stmt.line)
                    logger.debug(f"if at line {stmt.line}: condition={cond_val}")
                    if cond_val:
                        self.execute_list(branches.then_list)
                    else:
                        self.execute_list(branches.else_list)
                case StmtList():
                    self.execute_list(stmt)
                case _:
                    raise InternalError(Constants.ERR_UNKNOWN_STMT, getattr(stmt, "line", None))
        except (MalformedTree, InternalError) as e:
            self.channels.report(e)

    @staticmethod
    def _target(variable, message: str, stmt: Node) -> int:
        if not isinstance(variable, VariableRef):
            raise MalformedTree(message, stmt.line)
        return variable.id
