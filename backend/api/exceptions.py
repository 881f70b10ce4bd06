"""Exception handlers mapping analysis errors to HTTP responses."""

from fastapi import Request
from fastapi.responses import JSONResponse

from analysis.exceptions import ValidationError


class RequestTooLargeError(Exception):
    """Raised when a request carries more bars than the configured cap."""

    def __init__(self, bars: int, limit: int):
        self.bars = bars
        self.limit = limit
        super().__init__(f"Request has {bars} bars; the limit is {limit}")


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    """Handle ValidationError exceptions."""
    content = {
        "success": False,
        "message": exc.message,
    }
    if exc.field:
        content["field"] = exc.field
    return JSONResponse(
        status_code=422,
        content=content,
    )


async def request_too_large_handler(request: Request, exc: RequestTooLargeError) -> JSONResponse:
    """Handle RequestTooLargeError exceptions."""
    return JSONResponse(
        status_code=413,
        content={
            "success": False,
            "message": str(exc),
            "limit": exc.limit,
        },
    )
