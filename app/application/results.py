from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class FailureKind(str, Enum):
    NOT_FOUND = "not_found"
    DOCTOR_NOT_FOUND = "doctor_not_found"
    UNAUTHORIZED = "unauthorized"
    INVALID_STATE = "invalid_state"
    VALIDATION_FAILED = "validation_failed"
    SLOT_UNAVAILABLE = "slot_unavailable"
    CONFLICT = "conflict"
    STORE_FAULT = "store_fault"


@dataclass
class ServiceResult(Generic[T]):
    """Outcome of a write operation: either ``data`` or a tagged failure."""

    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    kind: Optional[FailureKind] = None

    @classmethod
    def ok(cls, data: Optional[T] = None) -> "ServiceResult[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, kind: FailureKind, error: str) -> "ServiceResult[T]":
        return cls(success=False, error=error, kind=kind)
