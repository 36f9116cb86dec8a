from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse

from .application.results import FailureKind, ServiceResult

STATUS_BY_KIND = {
    FailureKind.NOT_FOUND: 404,
    FailureKind.DOCTOR_NOT_FOUND: 404,
    FailureKind.UNAUTHORIZED: 403,
    FailureKind.INVALID_STATE: 409,
    FailureKind.SLOT_UNAVAILABLE: 409,
    FailureKind.CONFLICT: 409,
    FailureKind.VALIDATION_FAILED: 400,
    FailureKind.STORE_FAULT: 500,
}

class APIException(HTTPException):
    def __init__(self, status_code: int, detail: str):
        super().__init__(status_code=status_code, detail=detail)

def raise_for_failure(result: ServiceResult) -> None:
    """Turn a failed service result into an APIException with the matching status."""
    if result.success:
        return
    raise APIException(STATUS_BY_KIND.get(result.kind, 500), result.error or "Request failed")

def create_error_response(error_message: str, status_code: int = 400) -> dict:
    """Create a standardized error response"""
    return {
        "success": False,
        "data": None,
        "error": error_message
    }

async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Custom exception handler for HTTPException"""
    return JSONResponse(
        status_code=exc.status_code,
        content=create_error_response(str(exc.detail), exc.status_code),
        headers=getattr(exc, "headers", None),
    )
