from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, List, Sequence

from review_engine.core.config import (
    MAX_LINE_RANGE,
    PLACEHOLDER_DETECTION,
    PLACEHOLDER_FLAGS,
    PLACEHOLDER_MARKERS,
)
from review_engine.models.report import Level, Suggestion

CRITICAL_TERMS = (
    "critical", "severe", "serious", "major", "dangerous", "security",
    "vulnerability", "crash", "error", "bug", "incorrect", "wrong",
)
CAUTION_TERMS = (
    "warning", "caution", "careful", "consider", "improve", "enhancement",
    "suggestion", "recommend", "could", "might", "may", "should",
)


def _term_pattern(terms: Iterable[str]) -> re.Pattern:
    # anchored at a word start so "debug" is not a bug and "dismay" not a may
    return re.compile(r"\b(?:" + "|".join(re.escape(t) for t in terms) + ")", re.IGNORECASE)


_CRITICAL = _term_pattern(CRITICAL_TERMS)
_CAUTION = _term_pattern(CAUTION_TERMS)

# digit runs are capped so absurd numbers are ignored rather than converted
_DIGITS = r"\d{1,9}(?!\d)"
_NUM = _DIGITS + r"(?:\s*(?:-|–|to)\s*" + _DIGITS + r")?"
_LINE_REF = re.compile(
    r"\blines?\s+(" + _NUM + r"(?:\s*(?:,|and|&)\s*" + _NUM + r")*)",
    re.IGNORECASE,
)
_RANGE = re.compile(r"(" + _DIGITS + r")\s*(?:-|–|to)\s*(" + _DIGITS + r")", re.IGNORECASE)


def classify_severity(text: str) -> Level:
    """Keyword heuristic: critical vocabulary wins over caution vocabulary."""
    if not text:
        return Level.LOW
    if _CRITICAL.search(text):
        return Level.HIGH
    if _CAUTION.search(text):
        return Level.MEDIUM
    return Level.LOW


def extract_line_numbers(text: str) -> List[int]:
    """
    Line numbers mentioned in one point of text, deduplicated and ascending.

    "line 10" -> [10]; "lines 10-15" -> [10..15]; "lines 10, 12, 15" -> [10, 12, 15].
    """
    if not text:
        return []
    numbers = set()
    for m in _LINE_REF.finditer(text):
        for part in re.split(r"\s*(?:,|\band\b|&)\s*", m.group(1)):
            if not part:
                continue
            rng = _RANGE.fullmatch(part.strip())
            if rng:
                start, end = sorted((int(rng.group(1)), int(rng.group(2))))
                if end - start > MAX_LINE_RANGE:
                    numbers.update((start, end))
                else:
                    numbers.update(range(start, end + 1))
            elif part.strip().isdigit():
                numbers.add(int(part.strip()))
    return sorted(numbers)


@dataclass(frozen=True)
class PlaceholderPolicy:
    """Decides whether review text says the submission was placeholder/test content."""
    markers: Sequence[str] = PLACEHOLDER_MARKERS
    flags: Sequence[str] = PLACEHOLDER_FLAGS
    enabled: bool = PLACEHOLDER_DETECTION

    def matches_text(self, text: str) -> bool:
        if not self.enabled or not text:
            return False
        if any(f in text for f in self.flags):
            return True
        lowered = text.lower()
        return any(m.lower() in lowered for m in self.markers)

    def matches(self, suggestions: Sequence[Suggestion]) -> bool:
        if not suggestions:
            return False
        joined = "\n".join(f"{s.title}\n{s.content}" for s in suggestions)
        return self.matches_text(joined)


DEFAULT_POLICY = PlaceholderPolicy()
