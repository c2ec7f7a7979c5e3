"""Router aggregation for the gateway endpoints."""

from fastapi import APIRouter

from faultline.api.routes import health

root_router = APIRouter()
root_router.include_router(health.router, tags=["health"])

__all__ = ["root_router"]
