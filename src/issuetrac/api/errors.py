"""Map domain errors to HTTP responses"""

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from ..domain.errors import (
    Conflict,
    InvalidArgument,
    IssueTracError,
    NotFound,
    StorageUnavailable,
    ValidationFailed,
)
from ..logging import get_logger

logger = get_logger("issuetrac.api.errors")

STATUS_CODES = {
    ValidationFailed: 400,
    InvalidArgument: 400,
    NotFound: 404,
    Conflict: 409,
    StorageUnavailable: 503,
}


def status_code_for(exc: IssueTracError) -> int:
    for error_type, status_code in STATUS_CODES.items():
        if isinstance(exc, error_type):
            return status_code
    return 500


def _response_payload(detail: str, status_code: int) -> dict:
    return {
        "detail": detail,
        "status_code": status_code,
    }


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        logger.warning(
            "http_exception",
            path=request.url.path,
            detail=exc.detail,
            status_code=exc.status_code,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=_response_payload(str(exc.detail), exc.status_code),
        )

    @app.exception_handler(IssueTracError)
    async def issuetrac_exception_handler(request: Request, exc: IssueTracError):
        status_code = status_code_for(exc)
        payload = _response_payload(str(exc), status_code)

        if isinstance(exc, ValidationFailed):
            payload["detail"] = "Validation failed"
            payload["errors"] = [error.to_dict() for error in exc.errors]

        if isinstance(exc, StorageUnavailable):
            logger.error(
                "storage_error",
                path=request.url.path,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            # Do not expose driver details to clients
            payload["detail"] = "Storage temporarily unavailable"
        else:
            logger.warning(
                "request_failed",
                path=request.url.path,
                status_code=status_code,
                error_type=type(exc).__name__,
            )
        return JSONResponse(status_code=status_code, content=payload)
