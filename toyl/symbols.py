from toyl.classes import Constants

import logging
logger = logging.getLogger(__name__)


class SymbolStore:
    """
    Values of the variables of one run, indexed by variable id.

    The store is sized by the number of distinct variables the program uses
    and starts zeroed. Reading an id that is out of range gives 0; writing one
    is a caller error.
    """

    def __init__(self, capacity: int = Constants.MAX_VARIABLES):
        if not 0 <= capacity <= Constants.MAX_VARIABLES:
            raise ValueError(f"capacity must be in [0, {Constants.MAX_VARIABLES}], got {capacity}")
        self._values = [0] * capacity

    @property
    def capacity(self) -> int:
        return len(self._values)

    def read(self, var_id: int) -> int:
        if 0 <= var_id < len(self._values):
            return self._values[var_id]
        logger.debug(f"read of out-of-range var[{var_id}], defaulting to 0")
        return 0

    def write(self, var_id: int, value: int) -> None:
        if not 0 <= var_id < len(self._values):
            raise IndexError(f"var[{var_id}] outside store of {len(self._values)} slots")
        self._values[var_id] = value

    def snapshot(self) -> dict:
        return {var_id: value for var_id, value in enumerate(self._values)}
