from __future__ import annotations

from collections.abc import Callable


class CompletionTracker:
    """Count finished files against the number queued.

    ``on_complete`` fires exactly once, when the completed count reaches the
    queued count. A tracker with nothing queued never fires; callers report
    the empty case themselves.
    """

    def __init__(self, queued: int, on_complete: Callable[[], None] | None = None) -> None:
        if queued < 0:
            raise ValueError("queued must be non-negative")
        self._queued = queued
        self._completed = 0
        self._on_complete = on_complete

    @property
    def queued(self) -> int:
        return self._queued

    @property
    def completed(self) -> int:
        return self._completed

    @property
    def remaining(self) -> int:
        return self._queued - self._completed

    @property
    def done(self) -> bool:
        return self._queued > 0 and self._completed == self._queued

    def mark_done(self) -> int:
        """Record one finished file and return the new completed count."""

        if self._completed >= self._queued:
            raise ValueError(
                f"completed count would exceed queued count ({self._queued})"
            )
        self._completed += 1
        if self._completed == self._queued and self._on_complete is not None:
            self._on_complete()
        return self._completed


__all__ = ["CompletionTracker"]
