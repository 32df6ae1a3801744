"""Line-alignment diff between two snapshots of a live transcript.

A caption window shows the most recent part of a transcript. Between two
observations it can:

- grow (new lines appended at the bottom),
- scroll (old lines disappear from the top),
- revise its last line in place (the recognizer changed its mind).

`extract_new_lines` works out which trailing lines of the current snapshot
have not been seen before. It aligns the *start* of the current snapshot with
every possible start position in the previous one and keeps the longest run of
consecutive equal lines. Everything after that run is new.

Example
-------
>>> extract_new_lines("Line 1\\nLine 2\\nLine 3", "Line 2\\nLine 3\\nLine 4")
'Line 4\\n'

The module is pure: no state, no I/O.
"""

from __future__ import annotations

from collections.abc import Sequence

LINE_TERMINATOR = "\n"


def split_lines(text: str) -> list[str]:
    """Split ``text`` into lines without their terminators.

    A trailing terminator does not open an extra empty line, and a carriage
    return right before the terminator is dropped. ``""`` has no lines while
    ``"\\n\\n"`` has two empty ones.
    """
    if not text:
        return []
    lines = text.split(LINE_TERMINATOR)
    if text.endswith(LINE_TERMINATOR):
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def overlap_length(previous_lines: Sequence[str], current_lines: Sequence[str]) -> int:
    """Return the longest run of equal lines aligning ``current_lines[0:]``.

    Every start index ``s`` in ``previous_lines`` is tried; the run counts
    consecutive equal lines from ``previous_lines[s]`` and ``current_lines[0]``
    and stops at the first mismatch or at the end of either sequence. Ties keep
    the lowest ``s``.
    """
    best = 0
    for start in range(len(previous_lines)):
        limit = min(len(previous_lines) - start, len(current_lines))
        run = 0
        while run < limit and previous_lines[start + run] == current_lines[run]:
            run += 1
        if run > best:
            best = run
    return best


def extract_new_lines(previous: str, current: str) -> str:
    """Return the part of ``current`` that was not present in ``previous``.

    Parameters
    ----------
    previous:
        The last snapshot the caller has fully processed. ``""`` means
        "nothing seen yet".
    current:
        The snapshot just captured.

    Returns
    -------
    str
        - ``current`` unchanged when ``previous`` is empty or when no line of
          the two snapshots can be aligned (the window was reset);
        - the unmatched trailing lines of ``current`` joined with ``"\\n"``
          plus one trailing ``"\\n"`` when part of it aligns;
        - ``""`` when all of ``current`` aligns.
    """
    if not previous:
        return current

    previous_lines = split_lines(previous)
    current_lines = split_lines(current)

    matched = overlap_length(previous_lines, current_lines)
    if matched == 0:
        return current
    if matched >= len(current_lines):
        return ""

    new_content = LINE_TERMINATOR.join(current_lines[matched:])
    if new_content:
        return new_content + LINE_TERMINATOR
    return new_content


def is_blank(delta: str) -> bool:
    """Return True when ``delta`` carries nothing worth delivering."""
    return not delta.strip()


__all__ = [
    "LINE_TERMINATOR",
    "extract_new_lines",
    "is_blank",
    "overlap_length",
    "split_lines",
]
