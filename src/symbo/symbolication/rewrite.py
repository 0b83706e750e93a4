"""Reassembly of the report text with resolved frames substituted in place."""

from __future__ import annotations

import re
from collections.abc import Iterable

from symbo.config.defaults import SYMBOLICATED_MARKER
from symbo.models.report import ReportProcess


def rewrite_content(
    content: str,
    processes: Iterable[ReportProcess],
    marker: str = SYMBOLICATED_MARKER,
) -> str:
    """Replace every resolved frame line of ``content``.

    Frame lines are located in the original text, each search starting where
    the previous match ended, so identical lines map to successive
    occurrences and replacements come in increasing position order. The
    running ``offset`` shifts each range by the length change of the
    replacements made before it.
    """
    result = content
    offset = 0
    cursor = 0

    for process in processes:
        for frame in process.stack_frames:
            if frame.resolved_symbol is None:
                continue

            pattern = re.compile(r"^" + re.escape(frame.original_line) + r"$", re.MULTILINE)
            match = pattern.search(content, cursor)
            if match is None:
                continue

            start, end = match.span()
            replacement = frame.symbolicated_line(frame.resolved_symbol, marker)
            result = result[: start + offset] + replacement + result[end + offset:]
            offset += len(replacement) - (end - start)
            cursor = end

    return result
