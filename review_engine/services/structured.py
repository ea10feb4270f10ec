from __future__ import annotations

import json
import logging
import re
from typing import Dict, List, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from review_engine.services.sections import FALLBACK_LABEL, normalize_label

log = logging.getLogger("structured")

_FENCED = re.compile(r"```(?:json)?\s*\n(.*?)\n```", re.DOTALL)
_DECODER = json.JSONDecoder()


class StructuredSection(BaseModel):
    category: str
    points: List[str] = Field(default_factory=list)


class StructuredReview(BaseModel):
    """
    Schema the AI reviewer is asked for in structured mode:
    {"sections": {"logic": ["...", ...], ...}} or
    {"sections": [{"category": "logic", "points": ["..."]}]}
    """
    model_config = ConfigDict(populate_by_name=True)

    sections: Union[Dict[str, List[str]], List[StructuredSection]] = Field(default_factory=dict)
    is_test_content: bool = Field(False, alias="isTestContent")

    def point_map(self, patterns: Sequence[Tuple[str, re.Pattern]]) -> Dict[str, List[str]]:
        pairs = (
            self.sections.items()
            if isinstance(self.sections, dict)
            else ((s.category, s.points) for s in self.sections)
        )
        known = {label for label, _ in patterns}
        out: Dict[str, List[str]] = {}
        for name, points in pairs:
            key = name.strip().lower()
            label = key if key in known else (normalize_label(name, patterns) or FALLBACK_LABEL)
            out.setdefault(label, []).extend(p.strip() for p in points if p and p.strip())
        return out


def _extract_json(text: str) -> dict:
    try:
        return json.loads(text)
    except ValueError:
        pass
    m = _FENCED.search(text)
    if m:
        return json.loads(m.group(1))
    return _last_object(text)


def _last_object(text: str) -> dict:
    """The last top-level {...} object in the text; prefacing prose may contain braces too."""
    found = None
    pos = text.find("{")
    while pos != -1:
        try:
            obj, end = _DECODER.raw_decode(text, pos)
        except ValueError:
            obj, end = None, pos + 1
        if isinstance(obj, dict):
            found = obj
        else:
            end = pos + 1
        pos = text.find("{", end)
    if found is None:
        raise ValueError("Review text is not JSON")
    return found


def parse_structured_review(text: str) -> Optional[StructuredReview]:
    """Schema-validated review, or None when the text is free-form."""
    if not text or "{" not in text:
        return None
    try:
        data = _extract_json(text)
    except (ValueError, RecursionError):
        return None
    if not isinstance(data, dict) or not ({"sections", "isTestContent", "is_test_content"} & data.keys()):
        return None
    try:
        review = StructuredReview.model_validate(data)
    except ValidationError as e:
        log.debug("Structured review rejected by schema: %s", e.error_count())
        return None
    log.debug("Structured review with %d section(s)", len(review.sections))
    return review
