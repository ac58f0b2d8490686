"""Line splitting that keeps terminators."""

from __future__ import annotations

from typing import List


def split_keeping_terminators(text: str) -> List[str]:
    """Split ``text`` into lines, each keeping its ``\\n`` (or ``\\r\\n``).

    A final line without a terminator is kept as-is, so joining the result
    always reproduces ``text``.
    """

    lines: List[str] = []
    start = 0
    while start < len(text):
        end = text.find("\n", start)
        if end < 0:
            lines.append(text[start:])
            break
        lines.append(text[start:end + 1])
        start = end + 1
    return lines
