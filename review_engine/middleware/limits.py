from starlette.requests import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse
from review_engine.core.config import MAX_BODY_BYTES

class BodySizeLimitMiddleware(BaseHTTPMiddleware):
    # exceptions raised here bypass FastAPI's handlers, so answer directly
    async def dispatch(self, request: Request, call_next):
        cl = request.headers.get("content-length")
        try:
            if cl is not None and int(cl) > MAX_BODY_BYTES:
                return JSONResponse(status_code=413, content={"detail": "Request body too large"})
        except ValueError:
            return JSONResponse(status_code=400, content={"detail": "Bad Content-Length"})
        return await call_next(request)
