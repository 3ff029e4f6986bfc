# edutube/app/errors.py
"""
Maps domain exceptions to HTTP responses so every failure resolves the
request with a structured body: {"detail": ..., "error": ...}.
"""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from edutube.app.domain.errors import (
    CachedDataUnavailableError,
    EduTubeError,
    InvalidPathSegmentError,
    NotFoundError,
    StoreError,
    UpstreamError,
    UpstreamQuotaExceededError,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR: dict[type[EduTubeError], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    InvalidPathSegmentError: status.HTTP_400_BAD_REQUEST,
    StoreError: status.HTTP_502_BAD_GATEWAY,
    UpstreamError: status.HTTP_502_BAD_GATEWAY,
    UpstreamQuotaExceededError: status.HTTP_503_SERVICE_UNAVAILABLE,
    CachedDataUnavailableError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def status_for(error: EduTubeError) -> int:
    for error_type in type(error).__mro__:
        if error_type in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[error_type]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def domain_error_handler(request: Request, exc: EduTubeError) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    else:
        logger.info("%s %s rejected (%d): %s", request.method, request.url.path, status_code, exc)
    body: dict[str, object] = {"detail": str(exc), "error": type(exc).__name__}
    if isinstance(exc, UpstreamError) and exc.reason:
        body["reason"] = exc.reason
    return JSONResponse(status_code=status_code, content=body)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(EduTubeError, domain_error_handler)
