from fastapi import APIRouter
from pydantic import BaseModel

from review_engine.models.report import ReviewScope, SourceKind
from review_engine.services.suggestions import extract_suggestions

router = APIRouter(tags=["suggestions"])


class SuggestionRequest(BaseModel):
    text: str
    scope: ReviewScope
    source_kind: SourceKind = "article"


@router.post("/suggestions")
def suggestions(req: SuggestionRequest):
    found = extract_suggestions(req.text, req.scope, req.source_kind)
    return {"suggestions": [s.model_dump() for s in found]}
