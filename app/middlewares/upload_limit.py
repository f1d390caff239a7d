# app/middlewares/upload_limit.py

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from app.core.logger import get_logger

logger = get_logger("upload_limit_middleware")


class LimitUploadSizeMiddleware(BaseHTTPMiddleware):
    """Rejects oversized bodies on upload paths before they are read."""

    def __init__(self, app, max_upload_size: int, paths=("/api/v1/files/upload",)):
        super().__init__(app)
        self.max_upload_size = max_upload_size
        self.paths = tuple(paths)

    async def dispatch(self, request: Request, call_next):
        if request.method == "POST" and request.url.path in self.paths:
            content_length = request.headers.get("content-length")
            if content_length and content_length.isdigit():
                size = int(content_length)
                logger.debug(f"[LimitUploadSize] Content-Length={size} bytes, Max={self.max_upload_size} bytes")
                # Multipart framing adds a little on top of the file itself
                if size > self.max_upload_size + 64 * 1024:
                    return JSONResponse(
                        status_code=413,
                        content={"success": False, "error": {"message": f"File too large. Maximum size is {self.max_upload_size // (1024 * 1024)}MB"}}
                    )
        return await call_next(request)
