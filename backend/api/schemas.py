"""Pydantic response schemas for API."""

from pydantic import BaseModel


class SaveResponse(BaseModel):
    success: bool = True


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    status: str
    backend: str
