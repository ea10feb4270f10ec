from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from review_engine.models.report import ReviewScope, SourceKind, Suggestion
from review_engine.services import llm
from review_engine.services.analyze import CodeSnippetReview, analyze_review, analyze_snippets
from review_engine.services.decision import resolve_decision
from review_engine.services.rating import aggregate_ratings

router = APIRouter(tags=["review"])


class RatingRequest(BaseModel):
    suggestions: List[Suggestion] = Field(default_factory=list)


class DecisionRequest(BaseModel):
    # free-form on purpose: malformed vectors resolve to the default decision
    ratings: Optional[Dict[str, Any]] = None


class ReviewRequest(BaseModel):
    text: str
    scope: ReviewScope
    source_kind: SourceKind = "article"


class SnippetsRequest(BaseModel):
    article_id: str = Field(..., min_length=1)
    snippets: List[CodeSnippetReview] = Field(default_factory=list)


class GenerateRequest(BaseModel):
    content: str = Field(..., min_length=1)
    scope: ReviewScope
    source_kind: SourceKind = "article"
    title: str = ""
    abstract: str = ""
    field: str = "general academic"
    code_context: str = "General code review"


@router.post("/ratings")
def ratings(req: RatingRequest):
    return aggregate_ratings(req.suggestions).model_dump()


@router.post("/decision")
def decision(req: DecisionRequest):
    return {"decision": resolve_decision(req.ratings).value}


@router.post("/review")
def review(req: ReviewRequest):
    report = analyze_review(req.text, req.scope, req.source_kind)
    return report.model_dump()


@router.post("/review/snippets")
async def review_snippets(req: SnippetsRequest):
    report = await analyze_snippets(req.article_id, req.snippets)
    return report.model_dump()


@router.post("/review/generate")
def generate(req: GenerateRequest):
    if not llm.is_configured():
        raise HTTPException(status_code=503, detail="AI reviewer is not configured")
    result = llm.generate_review(
        req.content,
        req.source_kind,
        title=req.title,
        abstract=req.abstract,
        field=req.field,
        language=req.scope.language,
        context=req.code_context,
    )
    if not result.success:
        raise HTTPException(status_code=502, detail=result.error.message if result.error else "AI review failed")
    report = analyze_review(result.text or "", req.scope, req.source_kind)
    return report.model_dump()
