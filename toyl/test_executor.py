"""
Unit tests for the statement executor (trees built by hand, no grammar)

Usage:
    python -m pytest toyl/test_executor.py -v
"""
import unittest

from toyl import nodes
from toyl.channels import OutputChannels
from toyl.classes import Constants
from toyl.errors import ExecutorStateError
from toyl.executor import ExecutorState, StatementExecutor
from toyl.nodes import Assignment, Declaration, IfStmt, IntLiteral, Program, StmtList, VariableRef
from toyl.symbols import SymbolStore


def block(*stmts):
    result = None
    for stmt in stmts:
        result = nodes.stmt_list(result, stmt)
    return result if result is not None else nodes.EMPTY_LIST


def show(value, line=None):
    return nodes.print_stmt(nodes.int_literal(value), line)


class TestStatementExecutor(unittest.TestCase):
    """Statement execution"""

    def setUp(self):
        self.store = SymbolStore(4)
        self.channels = OutputChannels()
        self.executor = StatementExecutor(self.store, self.channels)

    def effects(self):
        return self.channels.effects.getvalue()

    def diagnostics(self):
        return self.channels.diagnostics.getvalue()

    def blocks(self):
        return self.channels.trace.getvalue().count(Constants.SEPARATOR)

    def test_source_order(self):
        """top-level statements run left to right"""
        self.executor.run(block(show(3), show(1), show(2)))
        self.assertEqual(self.effects(), "Print: 3\nPrint: 1\nPrint: 2\n")

    def test_declare_assign_print(self):
        """declare, assign and print go through the store"""
        a = nodes.variable_ref(0)
        program = block(
            nodes.declaration(a, nodes.int_literal(3)),
            nodes.assignment(nodes.variable_ref(0), nodes.binary_op("+", nodes.variable_ref(0), nodes.int_literal(4))),
            nodes.print_stmt(nodes.variable_ref(0)),
        )
        self.executor.run(program)
        self.assertEqual(self.effects(), "Declared var[0] = 3\nAssigned var[0] = 7\nPrint: 7\n")
        self.assertEqual(self.store.read(0), 7)

    def test_assignment_without_declaration(self):
        """assigning an undeclared variable is allowed"""
        self.executor.run(block(nodes.assignment(nodes.variable_ref(1), nodes.int_literal(5))))
        self.assertEqual(self.effects(), "Assigned var[1] = 5\n")
        self.assertEqual(self.diagnostics(), "")

    def test_if_runs_exactly_one_branch(self):
        """only the taken branch runs"""
        cond = nodes.binary_op("==", nodes.int_literal(1), nodes.int_literal(1))
        self.executor.run(block(nodes.if_stmt(cond, block(show(1)), block(show(2)))))
        self.assertEqual(self.effects(), "Print: 1\n")

    def test_false_condition_runs_else(self):
        """a zero condition runs the else list"""
        self.executor.run(block(nodes.if_stmt(nodes.int_literal(0), block(show(1)), block(show(2)))))
        self.assertEqual(self.effects(), "Print: 2\n")

    def test_false_condition_without_else(self):
        """a false if without else does nothing"""
        cond = nodes.binary_op("==", nodes.int_literal(1), nodes.int_literal(2))
        self.executor.run(block(nodes.if_stmt(cond, block(show(1)))))
        self.assertEqual(self.effects(), "")
        self.assertEqual(self.diagnostics(), "")

    def test_trace_only_for_executed_statements(self):
        """untaken statements get no trace block"""
        untaken = block(show(10), show(11), show(12))
        self.executor.run(block(nodes.if_stmt(nodes.int_literal(0), untaken), show(4)))
        self.assertEqual(self.blocks(), 2)
        self.assertEqual(self.effects(), "Print: 4\n")

    def test_division_by_zero_does_not_stop_the_program(self):
        """the next statement still runs"""
        div = nodes.binary_op("/", nodes.int_literal(5), nodes.int_literal(0), line=1)
        self.executor.run(block(nodes.print_stmt(div, 1), show(9, 2)))
        self.assertEqual(self.effects(), "Print: 0\nPrint: 9\n")
        self.assertEqual(self.diagnostics(), "Error: Division by zero at line 1\n")

    def test_malformed_declaration(self):
        """a declaration of a non-variable is reported and skipped"""
        bad = Declaration(IntLiteral(1), IntLiteral(2), 5)
        errors = self.executor.run(block(bad, show(7)))
        self.assertEqual(self.effects(), "Print: 7\n")
        self.assertEqual(self.diagnostics(), "Error: Declaration left side is not a variable at line 5\n")
        self.assertEqual(errors, 1)

    def test_malformed_assignment(self):
        """an assignment to a non-variable is reported and skipped"""
        self.executor.run(block(Assignment(IntLiteral(1), IntLiteral(2), 2)))
        self.assertEqual(self.effects(), "")
        self.assertEqual(self.diagnostics(), "Error: Assignment left side is not a variable at line 2\n")

    def test_malformed_if(self):
        """an if whose branch holder is not Branches is reported"""
        bad = IfStmt(IntLiteral(1), block(show(1)), 3)
        self.executor.run(block(bad, show(2)))
        self.assertEqual(self.effects(), "Print: 2\n")
        self.assertEqual(self.diagnostics(), "Error: If branches malformed at line 3\n")

    def test_unknown_statement_kind(self):
        """an expression in statement position is an internal error"""
        self.executor.run(StmtList((IntLiteral(1, 8), show(3))))
        self.assertEqual(self.effects(), "Print: 3\n")
        self.assertEqual(self.diagnostics(), "Error: Unknown statement kind at line 8\n")

    def test_bare_statement_and_nested_list(self):
        """a bare statement and a list in statement position both run"""
        self.executor.execute_list(show(1))
        self.executor.execute_statement(block(show(2), show(3)))
        self.assertEqual(self.effects(), "Print: 1\nPrint: 2\nPrint: 3\n")

    def test_program_root(self):
        """run accepts the Program of the construction phase"""
        self.executor.run(Program(block(show(5)), ()))
        self.assertEqual(self.effects(), "Print: 5\n")

    def test_empty_program(self):
        """nothing happens for an empty list"""
        self.assertEqual(self.executor.run(nodes.EMPTY_LIST), 0)
        self.assertEqual(self.channels.trace.getvalue(), "")

    def test_runs_only_once(self):
        """running is terminal"""
        self.assertIs(self.executor.state, ExecutorState.BUILDING)
        self.executor.run(block(show(1)))
        self.assertIs(self.executor.state, ExecutorState.RUNNING)
        with self.assertRaises(ExecutorStateError):
            self.executor.run(block(show(2)))
        self.assertEqual(self.effects(), "Print: 1\n")

    def test_error_line_falls_back_to_statement(self):
        """an error in a node without line is reported at its statement's line"""
        div = nodes.binary_op("/", nodes.int_literal(1), nodes.int_literal(0))
        self.executor.run(block(nodes.print_stmt(div, 4)))
        self.assertEqual(self.diagnostics(), "Error: Division by zero at line 4\n")

    def test_statement_with_variable_ref(self):
        """variable refs keep their ids through execution"""
        self.executor.run(block(nodes.declaration(VariableRef(3), nodes.int_literal(-2))))
        self.assertEqual(self.effects(), "Declared var[3] = -2\n")


if __name__ == '__main__':
    unittest.main(verbosity=2)
