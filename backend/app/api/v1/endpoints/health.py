"""Health and readiness endpoints."""

from datetime import datetime, timezone
from typing import Literal

from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import get_request_id
from app.db.session import get_db

router = APIRouter(tags=["Health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: Literal["ok"] = "ok"
    timestamp: datetime


class ReadinessCheck(BaseModel):
    """Individual readiness check result."""

    status: Literal["ok", "down"]
    message: str | None = None


class ReadinessResponse(BaseModel):
    """Readiness check response."""

    status: Literal["ok", "down"]
    checks: dict[str, ReadinessCheck]
    request_id: str


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check",
    description="Simple health check endpoint. Returns 200 if the API is running.",
)
async def health_check() -> HealthResponse:
    """Health check endpoint - just checks if the process is alive."""
    return HealthResponse(status="ok", timestamp=datetime.now(timezone.utc))


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    status_code=status.HTTP_200_OK,
    summary="Readiness check",
    description="Verifies database connectivity.",
)
async def readiness_check(
    request: Request,
    db: Session = Depends(get_db),
) -> ReadinessResponse:
    """Readiness check endpoint - checks the database."""
    checks: dict[str, ReadinessCheck] = {}
    overall_status: Literal["ok", "down"] = "ok"

    try:
        db.execute(text("SELECT 1"))
        checks["db"] = ReadinessCheck(status="ok")
    except SQLAlchemyError as e:
        checks["db"] = ReadinessCheck(status="down", message=str(e))
        overall_status = "down"

    return ReadinessResponse(
        status=overall_status,
        checks=checks,
        request_id=get_request_id(request),
    )
