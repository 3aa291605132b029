"""
Nexus Backend - FastAPI entry point.
Settings persistence service for the dashboard client.
"""

import sys

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware

from api import register_routes
from shared.config import get_cors_origins, get_frontend_dir, get_log_level

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3034


def configure_logging(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level)


configure_logging(get_log_level())

app = FastAPI(title="Nexus Backend")

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Disable cache for static files (dev: always fetch latest)
NO_CACHE_HEADERS = {
    "Cache-Control": "no-store, no-cache, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}


class NoCacheMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        response = await call_next(request)
        path = request.url.path
        if path == "/" or path.endswith((".html", ".css", ".js")):
            for k, v in NO_CACHE_HEADERS.items():
                response.headers[k] = v
        return response


app.add_middleware(NoCacheMiddleware)

# ========== API ROUTES (must come before static file serving) ==========
register_routes(app)

# Static file serving - MUST come after all API routes
FRONTEND_DIR = get_frontend_dir()
if FRONTEND_DIR.exists():
    app.mount("/", StaticFiles(directory=str(FRONTEND_DIR), html=True), name="static")
    logger.info("Serving frontend from {}", FRONTEND_DIR)


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    uvicorn.run(app, host=DEFAULT_HOST, port=DEFAULT_PORT)


if __name__ == "__main__":
    run()
