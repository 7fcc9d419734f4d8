"""
Overflow helpers.

Tool output can be arbitrarily long.  These functions cut it down for
the verbose diagnostic stream and for the payload sent back to the
model.
"""

from typing import List

PREVIEW_LIMIT = 200
PREVIEW_NEWLINE_WINDOW = 50
PREVIEW_MARKER = "... (truncated)"

LINES_MARKER = "... (output truncated)"


def truncate_preview(
    text: str,
    max_length: int = PREVIEW_LIMIT,
    newline_window: int = PREVIEW_NEWLINE_WINDOW,
    marker: str = PREVIEW_MARKER,
) -> str:
    """Shorten *text* to *max_length* characters plus *marker*.

    If the last newline inside the cut lies within *newline_window*
    characters of the limit, the cut is moved back to that newline.
    Text that already fits is returned unchanged.
    """
    if len(text) <= max_length:
        return text
    truncated = text[:max_length]
    idx = truncated.rfind("\n")
    if idx > max_length - newline_window:
        truncated = truncated[:idx]
    return truncated + marker


def truncate_lines(text: str, max_length: int, marker: str = LINES_MARKER) -> str:
    """Keep whole lines of *text* while the total stays under *max_length*.

    When lines are dropped, *marker* is appended on its own line.
    """
    if len(text) <= max_length:
        return text
    kept: List[str] = []
    total = 0
    for line in text.split("\n"):
        if total + len(line) + 1 > max_length:
            kept.append(marker)
            break
        kept.append(line)
        total += len(line) + 1
    return "\n".join(kept)


__all__ = ["truncate_preview", "truncate_lines", "PREVIEW_LIMIT", "PREVIEW_MARKER", "LINES_MARKER"]
