"""Slot engine error types."""

from enum import Enum
from typing import Optional


class SlotEngineErrorCode(str, Enum):
    """Why a slot computation was refused."""

    INVALID_SERVICE = "invalid_service"
    VALIDATION_ERROR = "validation_error"
    INVALID_TIMEZONE = "invalid_timezone"


class SlotEngineError(ValueError):
    """Raised when the caller hands the engine inputs it cannot interpret.

    An empty slot list is the ordinary negative result; this error is only
    for contract violations such as unknown service ids.
    """

    def __init__(
        self,
        code: SlotEngineErrorCode,
        message: str,
        field_errors: Optional[dict[str, str]] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.field_errors = field_errors or {}

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.args[0]}"
