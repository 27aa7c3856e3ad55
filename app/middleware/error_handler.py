"""
Global error handling middleware.

Maps domain exceptions that escape the routers to JSON error responses:

- UnknownCropError -> 404
- PlanningError / ValueError -> 400
- anything else -> 500
"""
import logging
from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from typing import Callable

from app.domain.exceptions import PlanningError, UnknownCropError


logger = logging.getLogger(__name__)


def _error_response(status_code: int, error: str, detail: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "detail": detail},
    )


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Turns uncaught planning errors into consistent JSON responses."""

    async def dispatch(self, request: Request, call_next: Callable):
        context = {"path": request.url.path, "method": request.method}

        try:
            return await call_next(request)

        except UnknownCropError as e:
            logger.info(f"Unknown crop requested: {e.value}", extra=context)
            return _error_response(status.HTTP_404_NOT_FOUND, "Crop not found", str(e))

        except (PlanningError, ValueError) as e:
            logger.warning(f"Rejected project computation: {e}", extra=context)
            return _error_response(status.HTTP_400_BAD_REQUEST, "Invalid request", str(e))

        except Exception as e:
            logger.exception(f"Unhandled exception: {e}", extra=context)
            return _error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                "Internal server error",
                "An unexpected error occurred",
            )
