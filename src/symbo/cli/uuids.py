"""symbo uuids — list the processes of a report and the UUIDs they need."""

from __future__ import annotations

from pathlib import Path

import typer


def uuids_cmd(
    report: Path = typer.Argument(..., help="Crash report to inspect"),
) -> None:
    """Show each process, its architecture and the binary UUIDs to symbolicate."""
    from symbo.cli.app import get_context
    from symbo.errors import ReportError
    from symbo.utils.formatters import console, print_error, print_table

    session = get_context().new_session()
    try:
        report_file = session.load_report(report)
    except ReportError as exc:
        print_error(str(exc))
        raise typer.Exit(1)

    rows = []
    for process in report_file.processes:
        arch = process.architecture.value if process.architecture else "-"
        for image in process.binaries_for_symbolication:
            rows.append(
                {
                    "process": process.display_name,
                    "arch": arch,
                    "binary": image.name,
                    "load address": image.load_address,
                    "uuid": image.uuid.pretty,
                }
            )

    print_table(rows, title=f"{report.name} {session.report_status_text()}")
    console.print(f"{len(report_file.processes)} process(es)")
