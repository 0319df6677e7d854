"""Health check endpoint."""

from fastapi import APIRouter
from pydantic import BaseModel

from common.config import settings

router = APIRouter()

VERSION = "0.1.0"


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    environment: str


@router.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """
    Health check endpoint.

    Does not touch the table, so it stays green while DynamoDB is degraded.
    Used by the post-deploy smoke tests.
    """
    return HealthResponse(status="healthy", version=VERSION, environment=settings.environment)
