from __future__ import annotations

import logging
import math
from typing import Any, Mapping, Optional, Union

from review_engine.core.config import CRITERIA
from review_engine.models.report import Decision, RatingVector

log = logging.getLogger("decision")

DEFAULT_DECISION = Decision.MINOR_REVISION


def _valid_values(ratings: Any) -> Optional[list]:
    if isinstance(ratings, RatingVector):
        ratings = ratings.model_dump()
    if not isinstance(ratings, Mapping) or set(ratings.keys()) != set(CRITERIA):
        return None
    values = []
    for key in CRITERIA:
        v = ratings[key]
        # bool is an int subclass but never a rating
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            return None
        try:
            v = float(v)
        except OverflowError:
            return None
        if not math.isfinite(v):
            return None
        values.append(v)
    return values


def resolve_decision(ratings: Union[RatingVector, Mapping[str, Any], None]) -> Decision:
    """
    Editorial decision from a rating vector; the first matching rule wins:

    1. lowest <= 1              -> reject
    2. lowest < 2               -> major_revision
    3. average < 2.5            -> major_revision
    4. average < 3.5            -> minor_revision
    5. lowest >= 3              -> accept
    6. otherwise                -> minor_revision

    Malformed vectors (missing/extra keys, non-numeric values) fall back to
    minor_revision instead of raising.
    """
    values = _valid_values(ratings)
    if values is None:
        log.warning("Degraded rating vector, defaulting to %s: %r", DEFAULT_DECISION.value, ratings)
        return DEFAULT_DECISION

    average = sum(values) / len(values)
    lowest = min(values)
    log.debug("Decision input average=%.2f lowest=%s", average, lowest)

    if lowest <= 1:
        return Decision.REJECT
    if lowest < 2:
        return Decision.MAJOR_REVISION
    if average < 2.5:
        return Decision.MAJOR_REVISION
    if average < 3.5:
        return Decision.MINOR_REVISION
    if lowest >= 3:
        return Decision.ACCEPT
    return Decision.MINOR_REVISION
