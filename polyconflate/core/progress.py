"""Progress reporting and cooperative cancellation.

Long running passes report after each top-level item and check for a
cancellation request between items, never in the middle of one.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class TaskMonitor(Protocol):
    """Progress sink supplied by the caller.

    Responsibilities:
      • Receive ``(processed, total, unit)`` after each top-level item.
      • Answer whether the caller wants the pass to stop early.
    Reporting never affects control flow; only the cancellation query does.
    """

    def report(self, processed: int, total: int, unit: str) -> None: ...
    def is_cancel_requested(self) -> bool: ...


class NullTaskMonitor:
    """Monitor that ignores reports and never cancels."""

    def report(self, processed: int, total: int, unit: str) -> None:
        pass

    def is_cancel_requested(self) -> bool:
        return False


class RecordingTaskMonitor:
    """Monitor that keeps every report and can cancel after ``cancel_after``
    reports. Handy for scripted runs and tests."""

    def __init__(self, cancel_after: int = -1):
        self.reports = []
        self.cancel_after = cancel_after
        self.cancelled = False

    def report(self, processed: int, total: int, unit: str) -> None:
        self.reports.append((processed, total, unit))

    def cancel(self) -> None:
        self.cancelled = True

    def is_cancel_requested(self) -> bool:
        if self.cancel_after >= 0 and len(self.reports) >= self.cancel_after:
            return True
        return self.cancelled


__all__ = [
    'TaskMonitor',
    'NullTaskMonitor',
    'RecordingTaskMonitor',
]
