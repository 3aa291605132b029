"""Shared utilities: environment configuration."""

from .config import get_data_dir, get_db_backend

__all__ = ["get_data_dir", "get_db_backend"]
