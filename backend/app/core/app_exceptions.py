"""Application-specific exceptions for consistent error handling."""

from typing import Any

from fastapi import HTTPException, status


class AppError(HTTPException):
    """Application error with a stable error code."""

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        details: dict[str, Any] | list[Any] | None = None,
    ):
        super().__init__(
            status_code=status_code,
            detail={
                "code": code,
                "message": message,
                "details": details,
            },
        )
        self.code = code
        self.message = message
        self.details = details


def raise_not_found(entity: str) -> None:
    """Raise the standard 404 for a missing entity, e.g. ``"Section"``."""
    raise AppError(
        status_code=status.HTTP_404_NOT_FOUND,
        code=f"{entity.upper().replace(' ', '_')}_NOT_FOUND",
        message=f"{entity} not found",
    )


def raise_bad_request(code: str, message: str, details: Any = None) -> None:
    """Raise a 400 for a failed request precondition."""
    raise AppError(
        status_code=status.HTTP_400_BAD_REQUEST,
        code=code,
        message=message,
        details=details,
    )
