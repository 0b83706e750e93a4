"""symbo search — locate the dSYM bundles a crash report needs."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer


def search_cmd(
    report: Path = typer.Argument(..., help="Crash report to find dSYMs for"),
    timeout: Optional[float] = typer.Option(None, "--timeout", "-t", help="Overall search timeout in seconds"),
    show_logs: bool = typer.Option(False, "--show-logs", help="Print the search log"),
) -> None:
    """Search Spotlight, the report's folder and the Xcode archives for dSYMs."""
    from symbo.cli.app import get_context
    from symbo.errors import ReportError
    from symbo.utils.formatters import print_error, print_logs, print_table, print_warning
    from symbo.utils.progress import fraction_progress

    session = get_context().new_session()

    try:
        session.load_report(report)
    except ReportError as exc:
        print_error(str(exc))
        raise typer.Exit(1)

    with fraction_progress("Searching for dSYMs") as update:
        outcome = session.search_for_dsyms(progress_handler=update, timeout=timeout)

    if show_logs:
        print_logs(session.log_sink.messages, title="Search log")

    rows = [{"uuid": r.matched_uuid, "path": r.path} for r in outcome.results]
    print_table(rows, title=f"dSYMs found, {session.dsym_status_text()}")

    if not outcome.succeeded:
        print_warning("Some search locations failed.")
    if session.remaining_uuids:
        print_warning(f"Still missing: {', '.join(sorted(session.remaining_uuids))}")
        raise typer.Exit(2)
