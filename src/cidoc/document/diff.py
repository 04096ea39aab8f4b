"""Unified diff between the current and generated document, used by dry runs."""

import difflib
from pathlib import Path

from cidoc.markdown.content import Content


def unified_diff(path: Path | str, before: Content | bytes | None, after: Content | bytes) -> str:
    """Render a unified diff of a document change.

    Args:
        path: Destination path, shown in the diff headers
        before: Existing bytes, or None for a new file
        after: Generated bytes

    Returns:
        Diff text, empty when nothing changed
    """
    old = str(Content.of(before)) if before is not None else ""
    new = str(Content.of(after))
    if old == new:
        return ""

    name = str(path)
    lines = difflib.unified_diff(
        old.splitlines(keepends=True),
        new.splitlines(keepends=True),
        fromfile=name if before is not None else "/dev/null",
        tofile=name,
    )
    return "".join(line if line.endswith("\n") else line + "\n" for line in lines)
