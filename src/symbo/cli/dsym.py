"""symbo dsym — show the UUIDs and DWARF binaries of dSYM bundles."""

from __future__ import annotations

from pathlib import Path

import typer


def dsym_cmd(
    path: Path = typer.Argument(..., help="dSYM bundle or folder containing bundles"),
) -> None:
    """Inspect a dSYM bundle (or a folder of embedded bundles)."""
    import functools

    from symbo.cli.app import get_context
    from symbo.models.dsym import DSYMFile
    from symbo.tools.dwarfdump import dump_uuids
    from symbo.utils.formatters import print_error, print_table

    if not path.exists():
        print_error(f"Path not found: {path}")
        raise typer.Exit(1)

    config = get_context().ensure_config()
    bundles = DSYMFile.dsym_files(path, functools.partial(dump_uuids, config=config.tools))
    if not bundles:
        print_error(f"No dSYM bundles found at {path}")
        raise typer.Exit(1)

    rows = []
    for bundle in bundles:
        for dsym_slice in bundle.slices:
            rows.append(
                {
                    "bundle": bundle.filename,
                    "uuid": dsym_slice.uuid.pretty,
                    "arch": dsym_slice.architecture.value,
                    "binary": dsym_slice.binary_path,
                }
            )
        if not bundle.slices:
            rows.append({"bundle": bundle.filename, "uuid": "-", "arch": "-", "binary": ", ".join(bundle.binary_paths)})

    print_table(rows, title=f"{len(bundles)} dSYM bundle(s)")
