from __future__ import annotations

import asyncio
import logging
from typing import Dict, List, Optional, Sequence

from pydantic import BaseModel
from starlette.concurrency import run_in_threadpool

from review_engine.core.config import SNIPPET_WORKERS
from review_engine.models.report import Level, ReviewReport, ReviewScope, SourceKind, Suggestion
from review_engine.services.decision import resolve_decision
from review_engine.services.rating import aggregate_ratings
from review_engine.services.rules import DEFAULT_POLICY, PlaceholderPolicy
from review_engine.services.suggestions import extract_suggestions

log = logging.getLogger("analyze")


class CodeSnippetReview(BaseModel):
    """AI-reviewer output for one code block of an article."""
    text: str
    snippet_id: Optional[str] = None
    language: Optional[str] = None


def totals_by_severity(suggestions: Sequence[Suggestion]) -> Dict[str, int]:
    counts = {level.severity: 0 for level in Level}
    for s in suggestions:
        counts[s.severity] += 1
    return counts


def report_from_suggestions(
    article_id: str,
    suggestions: List[Suggestion],
    policy: PlaceholderPolicy = DEFAULT_POLICY,
) -> ReviewReport:
    ratings = aggregate_ratings(suggestions, policy=policy)
    decision = resolve_decision(ratings)
    return ReviewReport(
        article_id=article_id,
        suggestions=suggestions,
        ratings=ratings,
        decision=decision,
        totals=totals_by_severity(suggestions),
        placeholder=policy.matches(suggestions),
    )


def analyze_review(
    text: str,
    scope: ReviewScope,
    source_kind: SourceKind = "article",
    policy: PlaceholderPolicy = DEFAULT_POLICY,
) -> ReviewReport:
    """Review text -> suggestions -> ratings -> decision."""
    suggestions = extract_suggestions(text, scope, source_kind, policy=policy)
    report = report_from_suggestions(scope.article_id, suggestions, policy=policy)
    log.info(
        "Analyzed %s (%s): %d suggestion(s), decision=%s",
        scope.article_id, source_kind, len(suggestions), report.decision.value,
    )
    return report


def _snippet_scope(article_id: str, index: int, snippet: CodeSnippetReview) -> ReviewScope:
    # ids depend on the snippet's own id or position, never on completion order
    return ReviewScope(
        article_id=article_id,
        snippet_id=snippet.snippet_id or str(index),
        language=snippet.language,
    )


async def analyze_snippets(
    article_id: str,
    snippets: Sequence[CodeSnippetReview],
    policy: PlaceholderPolicy = DEFAULT_POLICY,
) -> ReviewReport:
    """
    Extract suggestions for every code snippet concurrently and merge them
    in input order into one report.
    """
    limit = asyncio.Semaphore(max(1, SNIPPET_WORKERS))

    async def _one(index: int, snippet: CodeSnippetReview) -> List[Suggestion]:
        async with limit:
            scope = _snippet_scope(article_id, index, snippet)
            return await run_in_threadpool(extract_suggestions, snippet.text, scope, "code", policy)

    per_snippet = await asyncio.gather(*(_one(i, s) for i, s in enumerate(snippets)))
    merged = [s for batch in per_snippet for s in batch]
    log.info("Analyzed %d snippet(s) for %s: %d suggestion(s)", len(snippets), article_id, len(merged))
    return report_from_suggestions(article_id, merged, policy=policy)
