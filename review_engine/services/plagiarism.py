from __future__ import annotations

import logging
import math
from typing import Iterable, Optional

from review_engine.core.config import CLEAN_BELOW, SUSPICIOUS_BELOW
from review_engine.models.plagiarism import PlagiarismMatch, PlagiarismResult, PlagiarismStatus

log = logging.getLogger("plagiarism")


def classify_similarity(similarity: float) -> PlagiarismStatus:
    """Threshold map: <10 clean, <30 suspicious, otherwise plagiarized."""
    if not math.isfinite(similarity):
        log.warning("Non-finite similarity %r, flagging as suspicious", similarity)
        return PlagiarismStatus.SUSPICIOUS
    if similarity < CLEAN_BELOW:
        return PlagiarismStatus.CLEAN
    if similarity < SUSPICIOUS_BELOW:
        return PlagiarismStatus.SUSPICIOUS
    return PlagiarismStatus.PLAGIARIZED


def build_plagiarism_result(
    overall_similarity: float,
    matches: Optional[Iterable[PlagiarismMatch]] = None,
) -> PlagiarismResult:
    # score and match spans come from the comparison service and pass through unchanged
    return PlagiarismResult(
        overall_similarity=overall_similarity,
        matches=list(matches or []),
        status=classify_similarity(overall_similarity),
    )
