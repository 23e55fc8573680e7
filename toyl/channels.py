"""
The three output streams of a run: execution trace, effects and diagnostics.

"""
import io
from contextlib import contextmanager, ExitStack
from typing import Dict, Optional, TextIO

from toyl.errors import ToylError

import logging
logger = logging.getLogger(__name__)


class OutputChannels:
    """Append-only text sinks of one run plus the count of reported errors."""

    def __init__(self, trace: Optional[TextIO] = None, effects: Optional[TextIO] = None,
                 diagnostics: Optional[TextIO] = None):
        self.trace = trace if trace is not None else io.StringIO()
        self.effects = effects if effects is not None else io.StringIO()
        self.diagnostics = diagnostics if diagnostics is not None else io.StringIO()
        self.error_count = 0
        # line of the statement being executed, used when a node has none
        self.line = 0

    def locate(self, line: Optional[int]) -> None:
        if line is not None:
            self.line = line

    def effect(self, text: str) -> None:
        self.effects.write(text + "\n")

    def report(self, error: ToylError) -> None:
        line = error.line if error.line is not None else self.line
        self.diagnostics.write(f"Error: {error.message} at line {line}\n")
        self.error_count += 1
        logger.info(f"{type(error).__name__}: {error.message} (line {line})")

    def getvalues(self) -> Dict[str, str]:
        """Contents of in-memory channels (the shell and the tests read these)."""
        return {
            name: stream.getvalue()
            for name, stream in (("trace", self.trace), ("effects", self.effects),
                                 ("diagnostics", self.diagnostics))
            if isinstance(stream, io.StringIO)
        }


@contextmanager
def open_channels(files: Dict[str, str]):
    """Open the out/tree/error files named in ``files`` and close them when the run is over."""
    with ExitStack() as stack:
        effects = stack.enter_context(open(files["out"], "w", encoding="utf-8"))
        trace = stack.enter_context(open(files["tree"], "w", encoding="utf-8"))
        diagnostics = stack.enter_context(open(files["error"], "w", encoding="utf-8"))
        logger.debug(f"channels: out={files['out']} tree={files['tree']} error={files['error']}")
        yield OutputChannels(trace=trace, effects=effects, diagnostics=diagnostics)
