"""API route modules."""

from fastapi import FastAPI

from . import health, settings


def register_routes(app: FastAPI):
    """Register all API routers. Call before mounting static files."""
    app.include_router(settings.router, prefix="/api/settings", tags=["settings"])
    app.include_router(health.router, prefix="/api/health", tags=["health"])
