from enum import Enum
from typing import List

from pydantic import BaseModel, Field


class PlagiarismStatus(str, Enum):
    CLEAN = "clean"
    SUSPICIOUS = "suspicious"
    PLAGIARIZED = "plagiarized"


class MatchedSection(BaseModel):
    start_index: int = Field(..., ge=0)
    end_index: int = Field(..., ge=0)
    text: str


class PlagiarismMatch(BaseModel):
    source_id: str
    source_title: str
    similarity: float
    matched_sections: List[MatchedSection] = Field(default_factory=list)


class PlagiarismResult(BaseModel):
    overall_similarity: float
    matches: List[PlagiarismMatch] = Field(default_factory=list)
    status: PlagiarismStatus
