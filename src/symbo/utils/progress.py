"""Rich progress bar utilities."""

from __future__ import annotations

from collections.abc import Callable
from contextlib import contextmanager
from typing import Generator

from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)


def create_progress() -> Progress:
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        transient=True,
    )


@contextmanager
def fraction_progress(description: str) -> Generator[Callable[[float], None], None, None]:
    """Context manager yielding a handler that moves a bar to a 0.0-1.0 fraction."""
    progress = create_progress()
    with progress:
        task_id = progress.add_task(description, total=1.0)

        def _update(fraction: float) -> None:
            progress.update(task_id, completed=min(max(fraction, 0.0), 1.0))

        yield _update
