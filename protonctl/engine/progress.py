# Path: protonctl/engine/progress.py
"""
Download Progress

Aggregated byte counter shared by the concurrent asset transfers.
This is the only mutable state the pipeline shares between tasks;
every mutation goes through the lock.
"""

import threading
from typing import Optional, Protocol


class ProgressListener(Protocol):
    """Receives progress events (e.g. a terminal progress bar)."""

    def started(self, total: int) -> None: ...

    def advanced(self, delta: int, completed: int) -> None: ...

    def finished(self) -> None: ...


class ProgressTracker:
    """
    Thread-safe aggregate progress counter.

    Example:
        tracker = ProgressTracker(listener=bar)
        tracker.start(pair.total_size)
        tracker.advance(len(chunk))
        tracker.finish()
    """

    def __init__(self, listener: Optional[ProgressListener] = None):
        self._lock = threading.Lock()
        self._listener = listener
        self._total = 0
        self._completed = 0

    @property
    def total(self) -> int:
        with self._lock:
            return self._total

    @property
    def completed(self) -> int:
        with self._lock:
            return self._completed

    def start(self, total: int) -> None:
        with self._lock:
            self._total = total
            self._completed = 0
        if self._listener:
            self._listener.started(total)

    def advance(self, delta: int) -> int:
        """Add ``delta`` bytes and return the new aggregate."""
        with self._lock:
            self._completed += delta
            completed = self._completed
        if self._listener:
            self._listener.advanced(delta, completed)
        return completed

    def finish(self) -> None:
        if self._listener:
            self._listener.finished()


__all__ = ['ProgressTracker', 'ProgressListener']
