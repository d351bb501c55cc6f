"""Run-scoped sequence counter for action container identifiers."""

import threading


class SequenceAllocator:
    """
    Monotonic counter shared by initial writes and update batches.

    One instance per run, handed to the report writer at construction. The
    first allocated index is 1.
    """

    def __init__(self, start: int = 0) -> None:
        self._value = start
        self._lock = threading.Lock()

    def next(self) -> int:
        """Allocate the next index."""
        with self._lock:
            self._value += 1
            return self._value

    @property
    def current(self) -> int:
        """Last allocated index (0 before the first allocation)."""
        with self._lock:
            return self._value

    def reset(self) -> None:
        """Restart numbering. Only valid at the start of a new run."""
        with self._lock:
            self._value = 0
