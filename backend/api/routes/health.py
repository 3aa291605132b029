"""Health API - GET /api/health."""

from fastapi import APIRouter

from db import get_store

from ..schemas import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
async def health():
    return {"status": "ok", "backend": get_store().name}
