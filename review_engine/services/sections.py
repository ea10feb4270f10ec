from __future__ import annotations

import re
from typing import Dict, List, Optional, Sequence, Tuple

FALLBACK_LABEL = "general"

# (label, synonyms) in priority order; first matching label wins a header line
ARTICLE_SECTIONS: Tuple[Tuple[str, str], ...] = (
    ("logic", r"logic(?:al)?(?:\s+flow)?|reasoning"),
    ("structure", r"structure|organi[sz]ation"),
    ("citations", r"citations?|references"),
    ("general", r"general|other"),
)

CODE_SECTIONS: Tuple[Tuple[str, str], ...] = (
    ("bug", r"bugs?|errors?|issues"),
    ("performance", r"performance"),
    ("security", r"security"),
    ("readability", r"readability|maintainability"),
    ("suggestion", r"suggestions?|improvements?|recommendations?"),
)

_SUFFIX = r"(?:\s+(?:issues|problems|concerns|comments|feedback|notes))?"


def header_pattern(synonyms: str) -> re.Pattern:
    """
    A header line: optional markdown decoration (#, **, "1.") then a synonym,
    an optional suffix word, and either a colon or the end of the line.
    Group "rest" is whatever follows the colon on the same line.
    """
    return re.compile(
        r"^[ \t]*(?:#{1,6}[ \t]*)?(?:\d+[.)][ \t]*)?(?:\*\*|__)?[ \t]*"
        r"(?:" + synonyms + r")" + _SUFFIX +
        r"[ \t]*(?:\*\*|__)?[ \t]*(?::(?:\*\*|__)?(?P<rest>[^\n]*)|[ \t]*$)",
        re.IGNORECASE | re.MULTILINE,
    )


def compile_sections(sections: Sequence[Tuple[str, str]]) -> List[Tuple[str, re.Pattern]]:
    return [(label, header_pattern(syn)) for label, syn in sections]


ARTICLE_PATTERNS = compile_sections(ARTICLE_SECTIONS)
CODE_PATTERNS = compile_sections(CODE_SECTIONS)


def match_header(line: str, patterns: Sequence[Tuple[str, re.Pattern]]) -> Optional[Tuple[str, str]]:
    for label, pat in patterns:
        m = pat.match(line)
        if m:
            return label, (m.group("rest") or "")
    return None


def normalize_label(
    name: str,
    patterns: Sequence[Tuple[str, re.Pattern]] = ARTICLE_PATTERNS,
) -> Optional[str]:
    """Map a free-form section name ("Reasoning Issues") to its label."""
    hit = match_header(name.strip(), patterns)
    return hit[0] if hit else None


def extract_sections(
    text: str,
    patterns: Sequence[Tuple[str, re.Pattern]] = ARTICLE_PATTERNS,
) -> Dict[str, str]:
    """
    Split a review into labeled sections.

    Each section runs from its header to the next recognized header of any
    label. A label seen twice accumulates both spans. Text without any
    recognized header comes back whole under FALLBACK_LABEL.
    """
    if not text or not text.strip():
        return {}

    sections: Dict[str, List[str]] = {}
    current: Optional[str] = None
    for line in text.splitlines():
        hit = match_header(line, patterns)
        if hit:
            current, rest = hit
            sections.setdefault(current, [])
            if sections[current]:
                sections[current].append("")  # keep spans apart as paragraphs
            if rest.strip():
                sections[current].append(rest.strip())
            continue
        if current is not None:
            sections[current].append(line)

    if not sections:
        return {FALLBACK_LABEL: text.strip()}
    return {label: "\n".join(lines).strip() for label, lines in sections.items()}
