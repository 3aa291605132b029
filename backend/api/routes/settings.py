"""Settings API routes. Backend maintains the single settings document; frontend fetches and saves the whole document."""

import orjson
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from loguru import logger

from db import StorageError, get_settings, save_settings

from ..schemas import ErrorResponse, SaveResponse

router = APIRouter()


@router.get("", responses={500: {"model": ErrorResponse}})
async def get_settings_route():
    """Return the settings document, creating defaults on first call."""
    try:
        return await get_settings()
    except StorageError:
        logger.exception("Error loading settings")
        return JSONResponse(status_code=500, content={"error": "Failed to read settings"})


@router.post("", response_model=SaveResponse, responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}})
async def save_settings_route(request: Request):
    """Merge request body into the stored document. Body must be a JSON object."""
    raw = await request.body()
    try:
        body = orjson.loads(raw) if raw else None
    except orjson.JSONDecodeError:
        return JSONResponse(status_code=400, content={"error": "Request body is not valid JSON"})
    if not isinstance(body, dict):
        return JSONResponse(status_code=400, content={"error": "Settings must be a JSON object"})
    try:
        return await save_settings(body)
    except StorageError:
        logger.exception("Error saving settings")
        return JSONResponse(status_code=500, content={"error": "Failed to save settings"})
