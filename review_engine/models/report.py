from __future__ import annotations

from enum import Enum
from typing import Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator

SourceKind = Literal["article", "code"]


class Level(str, Enum):
    """Three-level urgency of a suggestion.

    Call sites speak two vocabularies for the same ordinal: severity
    (critical/warning/info) and priority (high/medium/low). Both parse to
    a Level and both are available as labels.
    """
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def severity(self) -> str:
        return SEVERITY_LABELS[self]

    @property
    def priority(self) -> str:
        return self.value

    @property
    def rank(self) -> int:
        return RANKS[self]

    @classmethod
    def parse(cls, label) -> "Level":
        if label is None:
            return cls.LOW
        if isinstance(label, cls):
            return label
        key = str(label).strip().lower()
        for member in cls:
            if key in (member.value, SEVERITY_LABELS[member]):
                return member
        raise ValueError(f"Unknown severity/priority label: {label!r}")


SEVERITY_LABELS = {Level.HIGH: "critical", Level.MEDIUM: "warning", Level.LOW: "info"}
RANKS = {Level.HIGH: 3, Level.MEDIUM: 2, Level.LOW: 1}


class ReviewScope(BaseModel):
    article_id: str = Field(..., min_length=1)
    snippet_id: Optional[str] = None
    language: Optional[str] = None


class Suggestion(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    category: str
    title: str
    content: str
    level: Level = Level.LOW
    line_numbers: Tuple[int, ...] = ()
    code_snippet_id: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _level_from_labels(cls, data):
        # clients may send either vocabulary instead of `level`
        if isinstance(data, dict) and data.get("level") is None:
            label = data.get("severity") or data.get("priority")
            if label is not None:
                data = {**data, "level": label}
        return data

    @field_validator("level", mode="before")
    @classmethod
    def _parse_level(cls, v):
        return Level.parse(v)

    @field_validator("line_numbers", mode="after")
    @classmethod
    def _sorted_lines(cls, v):
        return tuple(sorted(set(v)))

    @computed_field
    @property
    def severity(self) -> str:
        return self.level.severity

    @computed_field
    @property
    def priority(self) -> str:
        return self.level.priority


class RatingVector(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    originality: int = Field(..., ge=1, le=5)
    methodology: int = Field(..., ge=1, le=5)
    clarity: int = Field(..., ge=1, le=5)
    significance: int = Field(..., ge=1, le=5)
    references: int = Field(..., ge=1, le=5)


class Decision(str, Enum):
    ACCEPT = "accept"
    MINOR_REVISION = "minor_revision"
    MAJOR_REVISION = "major_revision"
    REJECT = "reject"


class ReviewReport(BaseModel):
    article_id: str
    suggestions: List[Suggestion]
    ratings: RatingVector
    decision: Decision
    totals: Dict[str, int]
    placeholder: bool = False
