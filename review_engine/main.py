import logging

from fastapi import FastAPI
from review_engine.api.routes_suggestions import router as suggestions_router
from review_engine.api.routes_review import router as review_router
from review_engine.api.routes_plagiarism import router as plagiarism_router
from review_engine.core.config import LOG_LEVEL
from review_engine.middleware.limits import BodySizeLimitMiddleware

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

app = FastAPI(title="ReviewEngine")

app.add_middleware(BodySizeLimitMiddleware)

@app.get("/health")
def health():
    return {"status": "ok"}

app.include_router(suggestions_router)
app.include_router(review_router)
app.include_router(plagiarism_router)
