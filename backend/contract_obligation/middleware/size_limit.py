"""Request body size limit middleware."""

import logging

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from contract_obligation.config import settings

logger = logging.getLogger(__name__)


class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    """Reject oversized request bodies before they are read.

    Contract uploads are multipart, so the Content-Length limit sits a little
    above the per-file upload limit; the extract route checks the file itself.
    """

    def __init__(self, app, max_size: int | None = None):
        super().__init__(app)
        self.max_size = max_size or settings.max_request_size_bytes

    async def dispatch(self, request: Request, call_next):
        content_length = request.headers.get("content-length")

        if content_length:
            try:
                size = int(content_length)
            except ValueError:
                # Invalid content-length header - let downstream handle it
                size = None

            if size is not None and size > self.max_size:
                logger.warning(
                    f"Request body too large: {size} bytes (max: {self.max_size}) "
                    f"for {request.method} {request.url.path}"
                )
                return JSONResponse(
                    status_code=413,
                    content={
                        "detail": f"Request body exceeds maximum size of {self.max_size} bytes"
                    },
                )

        return await call_next(request)
