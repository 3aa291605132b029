"""
Environment configuration. Backend and data dir are read once and cached.

    NEXUS_DB_BACKEND      file | sqlite (default file)
    NEXUS_DATA_DIR        directory for settings.json / settings.db (default backend/db)
    NEXUS_FRONTEND_DIR    built client, mounted at / when present (default frontend/)
    NEXUS_CORS_ORIGINS    comma-separated allowed origins (default *)
    NEXUS_LOG_LEVEL       loguru level (default INFO)
    NEXUS_API_URL         settings endpoint used by the autosave client
    NEXUS_AUTOSAVE_DELAY  client debounce in seconds (default 1.0)
"""

import os
from pathlib import Path
from typing import List, Optional

BACKEND_DIR = Path(__file__).resolve().parent.parent

DEFAULT_DB_BACKEND = "file"
DB_BACKENDS = ("file", "sqlite")
DEFAULT_API_URL = "http://localhost:3034/api/settings"
DEFAULT_AUTOSAVE_DELAY = 1.0

_DB_BACKEND: Optional[str] = None
_DATA_DIR: Optional[Path] = None


def _env(name: str, default: str = "") -> str:
    return (os.environ.get(name) or default).strip()


def get_db_backend() -> str:
    """Storage backend name: file | sqlite. Unknown values fall back to file."""
    global _DB_BACKEND
    if _DB_BACKEND is None:
        val = _env("NEXUS_DB_BACKEND", DEFAULT_DB_BACKEND).lower()
        _DB_BACKEND = val if val in DB_BACKENDS else DEFAULT_DB_BACKEND
    return _DB_BACKEND


def get_data_dir() -> Path:
    """Directory holding settings.json / settings.db."""
    global _DATA_DIR
    if _DATA_DIR is None:
        val = _env("NEXUS_DATA_DIR")
        _DATA_DIR = Path(val).expanduser() if val else BACKEND_DIR / "db"
    return _DATA_DIR


def get_frontend_dir() -> Path:
    val = _env("NEXUS_FRONTEND_DIR")
    return Path(val).expanduser() if val else BACKEND_DIR.parent / "frontend"


def get_cors_origins() -> List[str]:
    val = _env("NEXUS_CORS_ORIGINS", "*")
    origins = [o.strip() for o in val.split(",") if o.strip()]
    return origins or ["*"]


def get_log_level() -> str:
    return _env("NEXUS_LOG_LEVEL", "INFO").upper()


def get_api_url() -> str:
    return _env("NEXUS_API_URL", DEFAULT_API_URL)


def get_autosave_delay() -> float:
    """Client debounce in seconds. Invalid or negative values use the default."""
    try:
        delay = float(_env("NEXUS_AUTOSAVE_DELAY", str(DEFAULT_AUTOSAVE_DELAY)))
    except ValueError:
        return DEFAULT_AUTOSAVE_DELAY
    return delay if delay >= 0 else DEFAULT_AUTOSAVE_DELAY


def reset_cache() -> None:
    """Forget cached values so the next call re-reads the environment."""
    global _DB_BACKEND, _DATA_DIR
    _DB_BACKEND = None
    _DATA_DIR = None
