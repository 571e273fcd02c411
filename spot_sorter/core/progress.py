"""
Progress bar handling for spot-sorter using Rich library.

Planning a reorder is instantaneous; applying it can take a while against
a remote container (one API call per move), so only the apply step has a
progress bar.

Usage:
    from spot_sorter.core.progress import ReorderProgressBar

    with ReorderProgressBar(total=len(plan.moves)) as progress:
        for move in plan.moves:
            container.move(move.source, move.destination)
            progress.update()
"""

from abc import ABC, abstractmethod
from typing import Optional

from rich import get_console
from rich.console import OverflowMethod
from rich.progress import (
    BarColumn,
    Progress,
    ProgressColumn,
    Task,
    TaskID,
)
from rich.style import StyleType
from rich.text import Text
from rich.theme import Theme


PROGRESS_THEME = Theme({
    "bar.back": "grey23",
    "bar.complete": "rgb(165,66,129)",
    "bar.finished": "rgb(114,156,31)",
    "bar.pulse": "rgb(165,66,129)",
    "progress.percentage": "white",
})


class SizedTextColumn(ProgressColumn):
    """
    Rich markup column padded or truncated to a fixed width.

    Keeps the bar from jumping around while the status text grows
    ("✓ 9 / 120" -> "✓ 10 / 120").
    """

    def __init__(
        self,
        text_format: str,
        width: int,
        style: StyleType = "none",
        overflow: OverflowMethod = "ellipsis",
    ) -> None:
        self.text_format = text_format
        self.width = width
        self.style = style
        self.overflow: OverflowMethod = overflow
        super().__init__()

    def render(self, task: Task) -> Text:
        text = Text.from_markup(self.text_format.format(task=task), style=self.style)
        text.truncate(max_width=self.width, overflow=self.overflow, pad=True)
        return text


class BaseProgressBar(ABC):
    """
    Rich progress bar with a fixed-width status column.

    Use as a context manager; the shared theme is only pushed on the
    console while the bar is running. Subclasses supply the status text
    and decide what one update() means.
    """

    def __init__(self, total: int, description: str, status_width: int = 25):
        self.total = total
        self.description = description
        self.completed = 0

        self.console = get_console()

        self.progress = Progress(
            SizedTextColumn("[white]{task.description}", width=15),
            SizedTextColumn("{task.fields[status]}", width=status_width, style="white"),
            BarColumn(bar_width=40, finished_style="green"),
            "[progress.percentage]{task.percentage:>3.0f}%",
            console=self.console,
            transient=False,
            refresh_per_second=10,
        )

        self.task_id: Optional[TaskID] = None
        self._started = False

    def __enter__(self) -> "BaseProgressBar":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()

    def start(self) -> None:
        """Start the progress bar (can be called manually)."""
        if not self._started:
            self.console.push_theme(PROGRESS_THEME)
            self.progress.start()
            self.task_id = self.progress.add_task(
                description=self.description,
                total=self.total,
                status=self._get_status_text(),
            )
            self._started = True

    def stop(self) -> None:
        """Stop the progress bar and restore the console theme."""
        if self._started:
            self.progress.stop()
            self.console.pop_theme()
            self._started = False

    def _update_progress(self) -> None:
        if self.task_id is not None:
            self.progress.update(
                self.task_id,
                completed=self.completed,
                status=self._get_status_text(),
            )

    @abstractmethod
    def _get_status_text(self) -> str:
        """Return the status text (Rich markup) for the bar."""

    @abstractmethod
    def update(self, *args, **kwargs) -> None:
        """Record one completed unit of work."""


class ReorderProgressBar(BaseProgressBar):
    """
    Progress bar for applying a reorder plan.

    Example:
        Reordering      ✓ 12 / 40            ━━━━━━━━━━━━━━━━━  30%
    """

    def __init__(self, total: int, description: str = "Reordering"):
        super().__init__(total=total, description=description)
        self.moved = 0

    def _get_status_text(self) -> str:
        return f"[green]✓ {self.moved}[/green] / {self.total}"

    def update(self) -> None:
        """Record one applied move."""
        self.completed += 1
        self.moved += 1
        self._update_progress()
