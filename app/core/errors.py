"""
API error type and its exception handler.

Routes raise ``APIError`` for anything the caller should see as an error
envelope: ``{"error": <fixed message>, "details": <failure description>}``.
"""

from typing import Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse

from app.utils.logging_config import get_logger

logger = get_logger(__name__)


class APIError(Exception):
    """Error reported to the client as a single JSON envelope."""

    def __init__(
        self,
        error: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[str] = None,
    ):
        super().__init__(error)
        self.error = error
        self.status_code = status_code
        self.details = details

    def to_dict(self) -> dict:
        body = {"error": self.error}
        if self.details is not None:
            body["details"] = self.details
        return body


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Render an APIError as its JSON envelope."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.error} ({exc.details})")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected: {exc.error}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())
