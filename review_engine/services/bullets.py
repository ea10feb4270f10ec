from __future__ import annotations

import re
from typing import List, Optional

# "-", "*" or "•" list markers; "---" rules and "**bold**" lines are not bullets
BULLET = re.compile(r"^[ \t]*(?:-(?!-)|\*(?!\*)|•)[ \t]*(?P<text>\S.*)$")
NUMBERED = re.compile(r"^[ \t]*\d+[.)][ \t]+(?P<text>\S.*)$")
_PARAGRAPH_BREAK = re.compile(r"\n[ \t]*\n")


def _is_marker(line: str) -> bool:
    return bool(BULLET.match(line) or NUMBERED.match(line))


def _runs(lines: List[str], marker: re.Pattern) -> List[str]:
    """Each marker line starts a point that runs to the next list marker or blank line."""
    points: List[str] = []
    current: Optional[List[str]] = None
    for line in lines:
        m = marker.match(line)
        if m:
            if current:
                points.append(" ".join(current))
            current = [m.group("text").strip()]
        elif not line.strip() or _is_marker(line):
            if current:
                points.append(" ".join(current))
            current = None
        elif current is not None:
            current.append(line.strip())
    if current:
        points.append(" ".join(current))
    return [p for p in points if p]


def extract_bullet_points(text: str) -> List[str]:
    """
    Split one section into points: bullets first, then numbered items,
    then blank-line separated paragraphs. Non-empty text always yields
    at least one point.
    """
    if not text or not text.strip():
        return []
    lines = text.splitlines()

    points = _runs(lines, BULLET)
    if points:
        return points

    points = _runs(lines, NUMBERED)
    if points:
        return points

    paragraphs = (" ".join(l.strip() for l in p.splitlines() if l.strip()) for p in _PARAGRAPH_BREAK.split(text))
    return [p for p in paragraphs if p]
