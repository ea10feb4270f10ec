from typing import List

from fastapi import APIRouter
from pydantic import BaseModel, Field

from review_engine.models.plagiarism import PlagiarismMatch
from review_engine.services.plagiarism import build_plagiarism_result

router = APIRouter(tags=["plagiarism"])


class ClassifyRequest(BaseModel):
    overall_similarity: float = Field(..., ge=0, le=100)
    matches: List[PlagiarismMatch] = Field(default_factory=list)


@router.post("/plagiarism/classify")
def classify(req: ClassifyRequest):
    result = build_plagiarism_result(req.overall_similarity, req.matches)
    return result.model_dump()
