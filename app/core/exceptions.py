"""
Application exceptions and the global handlers that render them.

Every error response has the same shape: {error_code, message, details}.
"""

import logging
from typing import Any, Dict

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger("splitledger.errors")


class AppException(Exception):
    """Base application exception."""

    def __init__(self, message: str, error_code: str, status_code: int = 500, details: Dict[str, Any] = None):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class LedgerValidationError(AppException):
    """Raised when an expense or payment is rejected before it reaches the ledger."""

    def __init__(self, message: str, field: str = None):
        super().__init__(
            message=message,
            error_code="ERR_LEDGER_VALIDATION",
            status_code=status.HTTP_400_BAD_REQUEST,
            details={"field": field} if field else None,
        )


class GroupNotFoundError(AppException):
    def __init__(self, group_id: Any = None):
        message = "Group not found"
        if group_id is not None:
            message = f"Group with ID {group_id} not found"
        super().__init__(
            message=message,
            error_code="ERR_NOT_FOUND_001",
            status_code=status.HTTP_404_NOT_FOUND,
            details={"resource": "group", "id": group_id},
        )


class NotGroupMemberError(AppException):
    def __init__(self, member: str = None):
        super().__init__(
            message="You are not a member of this group",
            error_code="ERR_PERM_001",
            status_code=status.HTTP_403_FORBIDDEN,
            details={"member": member} if member else None,
        )


class PermissionDeniedError(AppException):
    def __init__(self, message: str = "Insufficient permissions"):
        super().__init__(
            message=message,
            error_code="ERR_PERM_002",
            status_code=status.HTTP_403_FORBIDDEN,
        )


# Global Exception Handlers

async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error_code": exc.error_code,
            "message": exc.message,
            "details": exc.details,
        },
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    error_code_map = {
        400: "ERR_BAD_REQUEST",
        401: "ERR_UNAUTHORIZED",
        403: "ERR_FORBIDDEN",
        404: "ERR_NOT_FOUND",
        500: "ERR_INTERNAL_SERVER",
    }

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error_code": error_code_map.get(exc.status_code, "ERR_UNKNOWN"),
            "message": exc.detail,
            "details": {},
        },
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={
            "error_code": "ERR_VALIDATION",
            "message": "Validation error",
            "details": {"errors": jsonable_errors(exc)},
        },
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error_code": "ERR_INTERNAL_SERVER",
            "message": "An internal server error occurred",
            "details": {},
        },
    )


def jsonable_errors(exc: RequestValidationError):
    # pydantic error contexts may carry exception instances
    return [
        {key: (str(value) if key == "ctx" else value) for key, value in err.items()}
        for err in exc.errors()
    ]


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
