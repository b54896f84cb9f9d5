"""Rich progress display driven by pipeline events.

The pipeline knows nothing about rendering; it calls ``emit(event, payload)``
and this reporter maps events onto rich progress tasks.
"""

from __future__ import annotations

from types import TracebackType

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
)


class ProgressReporter:
    """Context manager wrapping a transient ``rich.progress.Progress``."""

    def __init__(self, console: Console | None = None, *, transient: bool = True) -> None:
        self.progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            console=console,
            transient=transient,
        )
        self._tasks: dict[str, TaskID] = {}
        self._totals: dict[str, int] = {}
        self._completed: dict[str, int] = {}

    def __enter__(self) -> ProgressReporter:
        self.progress.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.progress.stop()

    def add_step(self, description: str, total: int | None = None) -> TaskID:
        return self.progress.add_task(description, total=total)

    def finish_task(self, task_id: TaskID) -> None:
        self.progress.remove_task(task_id)

    def emit(self, event: str, payload: dict[str, int | str]) -> None:
        """Update progress tasks for a pipeline event; unknown events are ignored."""

        if event == "run:start":
            total = int(payload.get("total", 0))
            self._totals["files"] = total
            self._tasks["files"] = self.add_step("processing", total=total)
        elif event == "file:written":
            task_id = self._tasks.get("files")
            if task_id is None:
                return
            completed = self._completed.get("files", 0) + 1
            self._completed["files"] = completed
            total = self._totals.get("files", 0)
            self.progress.update(
                task_id,
                completed=completed,
                description=f"processed {completed} out of {total}",
            )
        elif event in ("run:done", "run:empty"):
            task_id = self._tasks.pop("files", None)
            if task_id is not None:
                self.finish_task(task_id)


__all__ = ["ProgressReporter"]
