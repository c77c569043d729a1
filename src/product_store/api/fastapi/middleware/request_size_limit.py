from __future__ import annotations

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse


class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    """Reject bulk payloads whose declared Content-Length exceeds ``max_bytes``.

    Only the declared length is checked. Chunked requests without a
    Content-Length header are passed through unmeasured.
    """

    def __init__(self, app, max_bytes: int = 10_000_000):
        super().__init__(app)
        self.max_bytes = max_bytes

    async def dispatch(self, request, call_next):
        length = request.headers.get("content-length")
        try:
            size = int(length) if length is not None else None
        except ValueError:
            size = None
        if size is not None and size > self.max_bytes:
            return JSONResponse(
                status_code=413,
                content=f"request body exceeds {self.max_bytes} bytes",
            )
        return await call_next(request)
