from __future__ import annotations

import logging
import math
from typing import Dict, Sequence

from review_engine.core.config import (
    BASELINE_RATING,
    CRITERIA,
    CRITERIA_KEYWORDS,
    LEVEL_IMPACT,
    RATING_MAX,
    RATING_MIN,
)
from review_engine.models.report import RatingVector, Suggestion
from review_engine.services.rules import DEFAULT_POLICY, PlaceholderPolicy

log = logging.getLogger("rating")


def _clamp(value: float) -> float:
    return max(RATING_MIN, min(RATING_MAX, value))


def criteria_for(category: str) -> list:
    """Criteria whose keywords occur in the category; may be several or none."""
    cat = (category or "").lower()
    return [c for c in CRITERIA if any(k in cat for k in CRITERIA_KEYWORDS.get(c, ()))]


def impact_of(suggestion: Suggestion) -> float:
    # penalties only; a suggestion never raises a score
    return min(0.0, LEVEL_IMPACT.get(suggestion.level.value, 0.0))


def aggregate_ratings(
    suggestions: Sequence[Suggestion],
    policy: PlaceholderPolicy = DEFAULT_POLICY,
) -> RatingVector:
    """
    Five-criterion scorecard from a suggestion list.

    Every criterion starts at the neutral baseline; each suggestion's level
    penalty is applied to the criteria its category maps to, clamped after
    each step, and the results are rounded up. Placeholder submissions get
    the floor on every criterion.
    """
    if policy.matches(suggestions):
        log.info("Placeholder content: all ratings forced to %d", RATING_MIN)
        return RatingVector(**{c: RATING_MIN for c in CRITERIA})

    scores: Dict[str, float] = {c: float(BASELINE_RATING) for c in CRITERIA}
    for s in suggestions:
        impact = impact_of(s)
        if not impact:
            continue
        for criterion in criteria_for(s.category):
            scores[criterion] = _clamp(scores[criterion] + impact)

    # TODO: ceiling biases scores upward after half-point penalties; confirm with product before relying on it
    ratings = {c: int(_clamp(math.ceil(v))) for c, v in scores.items()}
    log.debug("Ratings from %d suggestion(s): %s", len(suggestions), ratings)
    return RatingVector(**ratings)
