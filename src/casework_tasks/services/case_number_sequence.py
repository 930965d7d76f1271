"""Thread-safe generator for human-readable case numbers."""

import threading

from casework_tasks.domain.entities.task import CASE_NUMBER_DIGITS, CASE_NUMBER_PREFIX


class CaseNumberSequence:
    """
    Monotonic counter formatted as ``TASK000001``.

    The counter only proposes candidates. Uniqueness is enforced by the
    storage constraint on ``tasks.case_number``.
    """

    def __init__(
        self,
        start: int = 1,
        prefix: str = CASE_NUMBER_PREFIX,
        width: int = CASE_NUMBER_DIGITS,
    ):
        if start < 0:
            raise ValueError(f"Case number sequence cannot start below 0, got {start}")
        self._next = start
        self.prefix = prefix
        self.width = width
        self._lock = threading.Lock()

    def next_value(self) -> int:
        """Return the current counter value and advance it."""
        with self._lock:
            value = self._next
            self._next += 1
            return value

    def format(self, value: int) -> str:
        return f"{self.prefix}{value:0{self.width}d}"

    def next_case_number(self) -> str:
        """Take the next value and format it as a case number."""
        return self.format(self.next_value())
