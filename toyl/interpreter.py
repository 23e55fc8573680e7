"""
Two calls make a toyl run: ``build_program`` (construction phase) and ``run``
(execution phase). Nothing executes unless the whole source was recognized.

"""
from pathlib import Path
from typing import Optional

from lark import Lark
from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedInput, VisitError

from toyl.builder import ToylBuilder
from toyl.channels import OutputChannels
from toyl.classes import Constants
from toyl.errors import ToylError, ToylSyntaxError
from toyl.executor import StatementExecutor
from toyl.nodes import Program
from toyl.symbols import SymbolStore

import logging
logger = logging.getLogger(__name__)

GRAMMAR_FILE = Path(__file__).with_name("toyl.lark")


def _last_line(source: str) -> int:
    return max(1, len(source.splitlines()))


class ToylInterpreter:

    def __init__(self, grammar_file: Path = GRAMMAR_FILE):
        with open(grammar_file, "r", encoding="utf-8") as f:
            grammar = f.read()
        self.parser = Lark(
            grammar,
            parser="lalr",
            lexer="basic",
            start="start",
            propagate_positions=True,
            maybe_placeholders=False,
        )

    def parse(self, source: str):
        """Raw lark tree of ``source``; lark exceptions are left to the caller."""
        tree = self.parser.parse(source)
        logger.debug(tree.pretty())
        return tree

    def build_program(self, source: str) -> Program:
        """Construction phase. Raises ToylSyntaxError if the source is not a complete program."""
        try:
            tree = self.parse(source)
            return ToylBuilder().transform(tree)
        except UnexpectedCharacters as e:
            raise ToylSyntaxError(Constants.ERR_CHARACTER.format(char=e.char), e.line) from e
        except UnexpectedEOF as e:
            raise ToylSyntaxError(Constants.ERR_SYNTAX, _last_line(source)) from e
        except UnexpectedInput as e:
            line = e.line if e.line is not None and e.line > 0 else _last_line(source)
            raise ToylSyntaxError(Constants.ERR_SYNTAX, line) from e
        except VisitError as e:
            if isinstance(e.orig_exc, ToylError):
                raise e.orig_exc from e
            raise

    def run(self, program: Program, channels: OutputChannels) -> int:
        """Execution phase with a fresh symbol store. Returns the number of errors reported."""
        store = SymbolStore(len(program.variables))
        executor = StatementExecutor(store, channels)
        errors = executor.run(program)
        logger.debug(f"symbols: {store.snapshot()}")
        return errors

    def execute(self, source: str, channels: OutputChannels) -> int:
        """Build then run ``source``; a construction failure is reported and nothing runs."""
        try:
            program = self.build_program(source)
        except ToylSyntaxError as e:
            channels.report(e)
            return 1
        return self.run(program, channels)

    @staticmethod
    def incomplete(error: Optional[BaseException]) -> bool:
        """True when ``error`` only means the source stopped before the program was finished."""
        cause = error.__cause__ if isinstance(error, ToylSyntaxError) else error
        if isinstance(cause, UnexpectedEOF):
            return True
        token = getattr(cause, "token", None)
        return token is not None and token.type == "$END"
