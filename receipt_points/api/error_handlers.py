"""
Custom exception handlers for FastAPI.
Maps validation, not-found and store errors to the client-visible responses.
"""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from receipt_points.core.observability import sentry_capture
from receipt_points.services.points_store import PointsNotFoundError, PointsStoreError

logger = logging.getLogger(__name__)

INVALID_RECEIPT = "The receipt is invalid."
RECEIPT_NOT_FOUND = "No receipt found for that ID."


def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=HTTP_400_BAD_REQUEST,
        content={
            "error": INVALID_RECEIPT,
            "details": [
                {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg", "")}
                for err in exc.errors()
            ],
        },
    )


def points_not_found_handler(request: Request, exc: PointsNotFoundError):
    logger.info("Points lookup missed for %s", exc.point_id)
    return JSONResponse(
        status_code=HTTP_404_NOT_FOUND,
        content={"error": RECEIPT_NOT_FOUND},
    )


def points_store_exception_handler(request: Request, exc: PointsStoreError):
    logger.error("Points store failure on %s %s: %s", request.method, request.url.path, exc)
    sentry_capture(exc)
    return JSONResponse(
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "details": str(exc),
        },
    )


def generic_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    sentry_capture(exc)
    return JSONResponse(
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "details": str(exc),
        },
    )
