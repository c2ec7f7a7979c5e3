"""Health check endpoint."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from faultline import __version__
from faultline.api.dependencies import get_translator
from faultline.services.translator import ResponseTranslator

router = APIRouter()


class HealthResponse(BaseModel):
    """Schema returned by the /health endpoint."""

    status: Literal["healthy", "unhealthy"]
    timestamp: datetime
    module: str
    debug: bool = Field(description="Whether internal error detail is exposed to clients")
    version: str = Field(default=__version__)


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check",
    tags=["health"],
)
async def health(translator: ResponseTranslator = Depends(get_translator)) -> HealthResponse:
    """Return the current application health snapshot."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(tz=timezone.utc),
        module=translator.module_name,
        debug=translator.debug,
        version=__version__,
    )
