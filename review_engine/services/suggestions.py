from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Mapping, Optional, Sequence, Tuple

from review_engine.models.report import Level, ReviewScope, SourceKind, Suggestion
from review_engine.services.bullets import extract_bullet_points
from review_engine.services.rules import DEFAULT_POLICY, PlaceholderPolicy, classify_severity, extract_line_numbers
from review_engine.services.sections import (
    ARTICLE_PATTERNS,
    CODE_PATTERNS,
    FALLBACK_LABEL,
    extract_sections,
)
from review_engine.services.structured import parse_structured_review

log = logging.getLogger("suggestions")

ARTICLE_KINDS = {
    "logic": "Logic Issue",
    "structure": "Structure Issue",
    "citations": "Citation Issue",
    "general": "General Issue",
}
CODE_KINDS = {
    "bug": "Bug",
    "performance": "Performance Issue",
    "security": "Security Issue",
    "readability": "Readability Issue",
    "suggestion": "Suggestion",
    "general": "Review Point",
}
# code-review sections with a fixed level regardless of wording
CODE_LEVELS = {
    "bug": Level.HIGH,
    "security": Level.HIGH,
    "readability": Level.LOW,
}

PLACEHOLDER_ARTICLE = (
    "This appears to be test or placeholder content rather than a real academic article. "
    "Please provide substantial content for a meaningful review."
)
PLACEHOLDER_CODE = (
    "This appears to be test or placeholder code rather than real implementation. "
    "Please provide substantial code for a meaningful review."
)


@dataclass(frozen=True)
class ReviewPoint:
    text: str
    level: Level
    line_numbers: Tuple[int, ...] = ()


def classify_points(points: Sequence[str]) -> List[ReviewPoint]:
    return [
        ReviewPoint(text=p, level=classify_severity(p), line_numbers=tuple(extract_line_numbers(p)))
        for p in points
    ]


def scope_prefix(scope: ReviewScope, source_kind: SourceKind) -> str:
    if source_kind != "code":
        return scope.article_id
    if scope.snippet_id:
        return f"{scope.article_id}-code-{scope.snippet_id}"
    return f"{scope.article_id}-code"


def _kind(category: str, source_kind: SourceKind) -> str:
    kinds = CODE_KINDS if source_kind == "code" else ARTICLE_KINDS
    return kinds.get(category) or f"{category.replace('_', ' ').title()} Issue"


def _title(kind: str, ordinal: int, scope: ReviewScope, source_kind: SourceKind) -> str:
    if source_kind == "code":
        return f"{scope.language or 'Code'} {kind} {ordinal + 1}"
    return f"{kind} {ordinal + 1}"


def build_suggestions(
    sections: Mapping[str, Sequence[ReviewPoint]],
    scope: ReviewScope,
    source_kind: SourceKind = "article",
    kind_override: Optional[str] = None,
) -> List[Suggestion]:
    """
    Turn classified points into Suggestions.

    Ids are {prefix}-{category}-{ordinal}, so identical input always yields
    identical ids. Code-review bug/security points are always high and
    readability points always low; everything else keeps its keyword level.
    """
    prefix = scope_prefix(scope, source_kind)
    snippet_id = scope.snippet_id if source_kind == "code" else None
    out: List[Suggestion] = []
    for category, points in sections.items():
        kind = kind_override or _kind(category, source_kind)
        for i, point in enumerate(points):
            level = point.level
            if source_kind == "code":
                level = CODE_LEVELS.get(category, level)
            out.append(Suggestion(
                id=f"{prefix}-{category}-{i}",
                category=category,
                title=_title(kind, i, scope, source_kind),
                content=point.text.strip(),
                level=level,
                line_numbers=point.line_numbers,
                code_snippet_id=snippet_id,
            ))
    return out


def placeholder_suggestion(scope: ReviewScope, source_kind: SourceKind) -> Suggestion:
    if source_kind == "code":
        return Suggestion(
            id=f"{scope_prefix(scope, source_kind)}-test",
            category="code",
            title="Test Code Detected",
            content=PLACEHOLDER_CODE,
            level=Level.HIGH,
            code_snippet_id=scope.snippet_id,
        )
    return Suggestion(
        id=f"{scope.article_id}-test-content",
        category=FALLBACK_LABEL,
        title="Test Content Detected",
        content=PLACEHOLDER_ARTICLE,
        level=Level.HIGH,
    )


def _point_map(text: str, source_kind: SourceKind):
    """Section -> points, plus the parsed structured review when there was one."""
    patterns = CODE_PATTERNS if source_kind == "code" else ARTICLE_PATTERNS
    structured = parse_structured_review(text)
    if structured is not None:
        return structured.point_map(patterns), structured
    sections = extract_sections(text, patterns)
    return {label: extract_bullet_points(body) for label, body in sections.items()}, None


def extract_suggestions(
    text: str,
    scope: ReviewScope,
    source_kind: SourceKind = "article",
    policy: PlaceholderPolicy = DEFAULT_POLICY,
) -> List[Suggestion]:
    """
    Raw AI-reviewer response -> Suggestion list.

    Structured JSON responses are read directly; anything else goes through
    section and bullet extraction. When that yields nothing, bullet points of
    the whole text become general suggestions. Returns [] only for text
    without content.
    """
    if not isinstance(text, str) or not text.strip():
        return []

    if policy.matches_text(text):
        log.info("Placeholder content flagged for %s", scope.article_id)
        return [placeholder_suggestion(scope, source_kind)]

    points, structured = _point_map(text, source_kind)
    if structured is not None and structured.is_test_content and policy.enabled:
        log.info("Structured review flagged placeholder content for %s", scope.article_id)
        return [placeholder_suggestion(scope, source_kind)]

    suggestions = build_suggestions(
        {label: classify_points(p) for label, p in points.items()}, scope, source_kind
    )
    if suggestions or structured is not None:
        return suggestions

    log.debug("No sectioned points for %s, falling back to whole-text bullets", scope.article_id)
    fallback = classify_points(extract_bullet_points(text))
    return build_suggestions({FALLBACK_LABEL: fallback}, scope, source_kind, kind_override="Review Point")
