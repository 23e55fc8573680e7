from toyl.channels import OutputChannels
from toyl.classes import Constants
from toyl.errors import DivisionByZero, InternalError, ToylError
from toyl.nodes import BinaryOp, IntLiteral, Node, Operator, VariableRef
from toyl.symbols import SymbolStore

import logging
logger = logging.getLogger(__name__)


def _truncating_div(left: int, right: int) -> int:
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


class ExpressionEvaluator:
    """Computes the integer value of an expression subtree."""

    def __init__(self, store: SymbolStore, channels: OutputChannels):
        self.store = store
        self.channels = channels

    def evaluate(self, node: Node) -> int:
        """
        Value of ``node``. Problems are reported on the diagnostics channel and
        the offending node counts as 0; evaluation of the rest carries on.
        """
        match node:
            case None:
                return 0
            case IntLiteral(value=value):
                return value
            case VariableRef(id=var_id):
                return self.store.read(var_id)
            case BinaryOp(operator=operator, left=left, right=right):
                # both sides, left first, no short circuit
                lhs = self.evaluate(left)
                rhs = self.evaluate(right)
                try:
                    return self.apply(operator, lhs, rhs, node.line)
                except ToylError as e:
                    self.channels.report(e)
                    return 0
            case _:
                self.channels.report(InternalError(Constants.ERR_NOT_EXPR, getattr(node, "line", None)))
                return 0

    def apply(self, operator: Operator, lhs: int, rhs: int, line=None) -> int:
        logger.debug(f"apply: {lhs} {getattr(operator, 'value', operator)} {rhs}")
        match operator:
            case Operator.ADD:
                return lhs + rhs
            case Operator.SUB:
                return lhs - rhs
            case Operator.MUL:
                return lhs * rhs
            case Operator.DIV:
                if rhs == 0:
                    raise DivisionByZero(Constants.ERR_DIV_ZERO, line)
                return _truncating_div(lhs, rhs)
            case Operator.EQ:
                return int(lhs == rhs)
            case Operator.NE:
                return int(lhs != rhs)
            case Operator.LE:
                return int(lhs <= rhs)
            case Operator.GE:
                return int(lhs >= rhs)
            case Operator.LT:
                return int(lhs < rhs)
            case Operator.GT:
                return int(lhs > rhs)
            case _:
                raise InternalError(Constants.ERR_UNKNOWN_OP, line)
