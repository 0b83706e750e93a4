"""symbo symbolicate — resolve a crash report's addresses using dSYMs."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer


def symbolicate_cmd(
    report: Path = typer.Argument(..., help="Crash report (.crash, .ips or .txt)"),
    dsym: Optional[List[Path]] = typer.Option(
        None, "--dsym", "-d", help="dSYM bundle, or folder of bundles (repeatable)"
    ),
    search: bool = typer.Option(True, "--search/--no-search", help="Search for missing dSYMs"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the result to a file"),
    save: bool = typer.Option(False, "--save", help="Write the result next to the report as '[S] <name>.txt'"),
    workers: Optional[int] = typer.Option(None, "--workers", "-w", min=1, help="Parallel atos invocations"),
    show_logs: bool = typer.Option(False, "--show-logs", help="Print the symbolication log"),
) -> None:
    """Symbolicate a crash report."""
    from symbo.cli.app import get_context
    from symbo.errors import ReportError
    from symbo.utils.formatters import (
        print_error,
        print_logs,
        print_report,
        print_status,
        print_success,
        print_warning,
    )
    from symbo.utils.progress import fraction_progress

    session = get_context().new_session()

    try:
        session.load_report(report)
    except ReportError as exc:
        print_error(f"Error loading report file: {exc}")
        raise typer.Exit(1)

    print_status("Report", f"{report} {session.report_status_text()}")

    if dsym:
        session.add_dsyms(dsym)

    if search and session.remaining_uuids:
        with fraction_progress("Searching for dSYMs") as update:
            outcome = session.search_for_dsyms(progress_handler=update)
        if not outcome.succeeded:
            print_warning("Some dSYM search locations failed; see --show-logs.")
        if show_logs:
            print_logs(session.log_sink.messages, title="Search log")

    print_status("dSYMs", session.dsym_status_text() or "none needed")

    if not session.dsym_files:
        print_error("No dSYM files available. Pass --dsym or enable --search.")
        raise typer.Exit(1)

    outcome = session.symbolicate(workers=workers)

    if show_logs:
        print_logs(outcome.logs)

    destination = output or (outcome.save_path if save else None)
    if outcome.content is not None:
        if destination is not None:
            try:
                destination.write_text(outcome.content, encoding="utf-8")
            except OSError as exc:
                print_error(f"Could not write {destination}: {exc}")
                raise typer.Exit(1)
            print_success(f"Symbolicated report written to {destination}")
        else:
            print_report(outcome.content)

    if not outcome.success:
        print_warning("Symbolication failed for some frames. Run with --show-logs for details.")
        raise typer.Exit(2)
