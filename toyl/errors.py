"""
Conditions raised while building or running a toyl program.

Runtime conditions (DivisionByZero, MalformedTree, InternalError) are caught
where they are detected and written to the diagnostics channel; none of them
stops the rest of the program.
"""


class ToylError(Exception):
    """Base class. Carries the message and the source line, if known."""

    def __init__(self, message: str, line=None):
        super().__init__(message)
        self.message = message
        self.line = line

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        return f"{self.message} at line {self.line}"


class DivisionByZero(ToylError):
    pass


class MalformedTree(ToylError):
    """A statement or branch holder does not have the shape its builder gives it."""


class InternalError(ToylError):
    """A node kind showed up where the evaluator or executor does not expect it."""


class ToylSyntaxError(ToylError):
    """The source text could not be turned into a program tree."""


class ExecutorStateError(ToylError):
    """An executor was asked to run twice."""
