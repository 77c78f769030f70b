"""Rich-based observers for displaying validation diagnostics.

Provides Rich console components that collect issues as they are raised
and render them as a table once a validation completes.

Requires the 'rich' package: pip install rich
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from parse_diagnostics.events import (
    ValidationEvent,
    ValidationEventType,
    ValidationObserver,
)

if TYPE_CHECKING:
    from rich.console import Console
    from rich.panel import Panel
    from rich.progress import Progress, TaskID
    from rich.table import Table

    from parse_diagnostics.issues import Issue

__all__ = ["RichIssueObserver", "SimpleIssueCounter", "build_issue_table", "format_path"]


def format_path(path: Iterable[str | int]) -> str:
    """Render a path as ``a[0].b``; the root path renders as ``(root)``."""
    rendered = ""
    for segment in path:
        if isinstance(segment, int):
            rendered += f"[{segment}]"
        else:
            rendered += f".{segment}" if rendered else segment
    return rendered or "(root)"


def build_issue_table(issues: Iterable[Issue], *, max_message_length: int = 80) -> Table:
    """Build a Rich table with one row per issue.

    Args:
        issues: Issues to render, in order.
        max_message_length: Longer messages are truncated.

    Returns:
        Rich Table with path, code and message columns.
    """
    from rich.table import Table

    table = Table(
        title="Validation Issues",
        show_header=True,
        header_style="bold magenta",
        expand=True,
    )
    table.add_column("#", justify="right", width=4)
    table.add_column("Path", style="cyan")
    table.add_column("Code", style="yellow")
    table.add_column("Message", style="red")

    count = 0
    for count, issue in enumerate(issues, start=1):
        message = issue.message or ""
        if len(message) > max_message_length:
            message = message[:max_message_length] + "..."
        table.add_row(str(count), format_path(issue.path), issue.code, message)

    if count == 0:
        table.add_row("-", "-", "-", "No issues")

    return table


class RichIssueObserver(ValidationObserver):
    """Collect issues and print a summary table after each validation.

    Example:
        observer = RichIssueObserver()
        outcome = safe_parse(check, payload, observers=[observer])
        # table printed on VALIDATION_COMPLETED

        observer = RichIssueObserver(auto_print=False)
        ...
        observer.print_summary()

    Requires:
        pip install rich
    """

    def __init__(
        self,
        console: Console | None = None,
        *,
        auto_print: bool = True,
        max_message_length: int = 80,
    ) -> None:
        """Initialize the observer.

        Args:
            console: Rich Console instance. If None, creates a new one.
            auto_print: Print the summary when a validation completes.
            max_message_length: Truncation width for messages.
        """
        from rich.console import Console

        self._console = console or Console()
        self._auto_print = auto_print
        self._max_message_length = max_message_length
        self._issues: list[Issue] = []
        self._last_status: str | None = None

    @property
    def issues(self) -> list[Issue]:
        """Issues collected since the last VALIDATION_STARTED."""
        return self._issues.copy()

    def on_event(self, event: ValidationEvent) -> None:
        """Handle validation events.

        Args:
            event: The validation event to handle.
        """
        if event.event_type == ValidationEventType.VALIDATION_STARTED:
            self._issues.clear()
            self._last_status = None

        elif event.event_type == ValidationEventType.ISSUE_ADDED:
            self._issues.append(event.data["issue"])

        elif event.event_type == ValidationEventType.VALIDATION_COMPLETED:
            status = event.data.get("status")
            self._last_status = getattr(status, "value", status)
            if self._auto_print:
                self.print_summary()

    def print_summary(self) -> None:
        """Print the status panel and the issue table."""
        self._console.print(self._build_status_panel())
        if self._issues:
            self._console.print(
                build_issue_table(self._issues, max_message_length=self._max_message_length)
            )

    def _build_status_panel(self) -> Panel:
        from rich.panel import Panel
        from rich.text import Text

        status = self._last_status or "unknown"
        style = {"valid": "green", "dirty": "yellow", "aborted": "red"}.get(status, "white")

        text = Text()
        text.append("Status: ", style="bold")
        text.append(status, style=f"bold {style}")
        text.append(f"  Issues: {len(self._issues):,}", style="bold")

        return Panel(text, title="[bold]Validation[/]", border_style=style)


class SimpleIssueCounter(ValidationObserver):
    """Progress task counting validations and the issues they raise.

    Must be used within a Rich Progress context.

    Example:
        from rich.progress import Progress

        with Progress() as progress:
            counter = SimpleIssueCounter(progress)
            runner.add_observer(counter)
            for payload in payloads:
                runner.safe_parse(payload)
    """

    def __init__(self, progress: Progress, task_description: str = "Validating") -> None:
        self._progress = progress
        self._description = task_description
        self._task_id: TaskID | None = None
        self._passed = 0
        self._failed = 0
        self._issue_count = 0

    def on_event(self, event: ValidationEvent) -> None:
        if event.event_type == ValidationEventType.VALIDATION_STARTED:
            if self._task_id is None:
                self._task_id = self._progress.add_task(self._description, total=None)

        elif event.event_type == ValidationEventType.ISSUE_ADDED:
            self._issue_count += 1

        elif event.event_type == ValidationEventType.VALIDATION_COMPLETED:
            if event.data.get("success"):
                self._passed += 1
            else:
                self._failed += 1
            if self._task_id is not None:
                self._progress.update(
                    self._task_id,
                    advance=1,
                    description=(
                        f"{self._description} [green]✓{self._passed}[/] "
                        f"[red]✗{self._failed}[/] [yellow]issues {self._issue_count}[/]"
                    ),
                )

    @property
    def counts(self) -> dict[str, int]:
        return {"passed": self._passed, "failed": self._failed, "issues": self._issue_count}
