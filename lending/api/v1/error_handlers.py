"""
Error Handlers
==============

Render lending exceptions, HTTP errors and unexpected failures as one
JSON error shape. Internal details of unexpected errors are logged, never
returned.
"""
import logging
import uuid
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from lending.application.dto.loan_dto import ErrorResponse
from lending.domain.exceptions import ErrorCode, LendingError

logger = logging.getLogger(__name__)

_HTTP_ERROR_CODES = {
    status.HTTP_400_BAD_REQUEST: ErrorCode.VALIDATION_ERROR,
    status.HTTP_401_UNAUTHORIZED: ErrorCode.AUTHENTICATION_ERROR,
    status.HTTP_403_FORBIDDEN: ErrorCode.PERMISSION_DENIED,
    status.HTTP_404_NOT_FOUND: ErrorCode.NOT_FOUND,
}


def _error_response(
    request: Request,
    status_code: int,
    error_code: str,
    message: str,
    error_id: Optional[str] = None,
    headers: Optional[dict] = None,
) -> JSONResponse:
    body = ErrorResponse(
        error_id=error_id or str(uuid.uuid4()),
        error_code=error_code,
        message=message,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True),
        headers=headers,
    )


def add_error_handlers(app: FastAPI) -> None:
    """Add the lending error handlers to a FastAPI app"""
    
    @app.exception_handler(LendingError)
    async def lending_error_handler(request: Request, exc: LendingError) -> JSONResponse:
        logger.info("%s %s -> %s: %s", request.method, request.url.path, exc.error_code, exc.message)
        return _error_response(request, exc.status_code, exc.error_code, exc.message)
    
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        error_code = _HTTP_ERROR_CODES.get(exc.status_code, f"HTTP_{exc.status_code}")
        return _error_response(
            request, exc.status_code, error_code, str(exc.detail), headers=getattr(exc, "headers", None)
        )
    
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        # Malformed or unknown body fields are the client's fault: 400, not FastAPI's 422
        problems = []
        for error in exc.errors():
            field = ".".join(str(loc) for loc in error["loc"] if loc != "body")
            problems.append(f"{field}: {error['msg']}" if field else error["msg"])
        return _error_response(
            request,
            status.HTTP_400_BAD_REQUEST,
            ErrorCode.VALIDATION_ERROR,
            "Invalid request: " + "; ".join(problems),
        )
    
    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        error_id = str(uuid.uuid4())
        logger.error(
            "Unexpected error %s on %s %s", error_id, request.method, request.url.path, exc_info=exc
        )
        return _error_response(
            request,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            ErrorCode.INTERNAL_ERROR,
            "An unexpected error occurred",
            error_id=error_id,
        )
