"""Single-use result slots for racing background workers."""

import queue
import threading
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Outcome:
    """A result delivered by a background worker.

    Exactly one of ``value`` or ``error`` is meaningful; ``source`` names the
    worker that produced it.
    """

    source: str
    value: Any = None
    error: BaseException | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


class OneShot:
    """Write-once slot feeding a shared results queue.

    Several workers share one queue observed by a single consumer. Each
    worker gets its own ``OneShot`` so it can never deliver more than one
    outcome, whatever path it takes through its loop.
    """

    def __init__(self, source: str, results: "queue.Queue[Outcome]"):
        self.source = source
        self._results = results
        self._lock = threading.Lock()
        self._sent = False

    def send(self, value: Any) -> bool:
        """Deliver a successful value. Returns False if already used."""
        return self._deliver(Outcome(source=self.source, value=value))

    def fail(self, error: BaseException) -> bool:
        """Deliver an error. Returns False if already used."""
        return self._deliver(Outcome(source=self.source, error=error))

    def _deliver(self, outcome: Outcome) -> bool:
        with self._lock:
            if self._sent:
                return False
            self._sent = True
        # Unbounded queue: put never blocks, so abandoned workers cannot hang.
        self._results.put_nowait(outcome)
        return True
