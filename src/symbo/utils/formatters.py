"""Rich output for the CLI.

Report text and diagnostic messages are printed with markup and highlighting
off: crash reports are full of ``[...]`` sequences Rich would otherwise eat.
"""

from __future__ import annotations

from typing import Any, Sequence

from rich.console import Console
from rich.table import Table

console = Console()
err_console = Console(stderr=True)


def print_table(
    rows: Sequence[dict[str, Any]],
    title: str | None = None,
    columns: Sequence[str] | None = None,
) -> None:
    """Render a list of dicts as a table. UUIDs and paths fold instead of truncating."""
    if not rows:
        console.print(f"[dim]{title + ': ' if title else ''}nothing to show.[/dim]")
        return

    cols = columns or list(rows[0].keys())
    table = Table(title=title, show_lines=False, header_style="bold")
    for col in cols:
        table.add_column(col, overflow="fold")

    for row in rows:
        table.add_row(*(str(row.get(c, "")) for c in cols))

    console.print(table)


def print_status(label: str, text: str) -> None:
    err_console.print(f"[bold]{label}:[/bold] ", end="")
    err_console.print(text, markup=False, highlight=False)


def print_report(content: str) -> None:
    console.print(content, markup=False, highlight=False, soft_wrap=True)


def print_logs(messages: Sequence[str], title: str = "Log") -> None:
    """Print the diagnostic messages of a run, verbatim and in order."""
    err_console.rule(f"[bold]{title}[/bold]")
    for message in messages:
        err_console.print(message, markup=False, highlight=False)


def print_success(msg: str) -> None:
    err_console.print(f"[bold green]{msg}[/bold green]")


def print_error(msg: str) -> None:
    err_console.print(f"[bold red]Error:[/bold red] {msg}", highlight=False)


def print_warning(msg: str) -> None:
    err_console.print(f"[bold yellow]Warning:[/bold yellow] {msg}", highlight=False)
