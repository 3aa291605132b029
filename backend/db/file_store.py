"""
File backend: the document lives in a single JSON file.
Writes go to <name>.tmp and are renamed over the target, so readers never see a partial file.
Uses orjson for faster JSON parsing.
"""

import asyncio
import os
from pathlib import Path
from typing import Optional, Union

import aiofiles
import json_repair
import orjson
from loguru import logger

from .errors import StorageError


class JsonFileStore:
    name = "file"

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self.lock = asyncio.Lock()

    @property
    def tmp_path(self) -> Path:
        return self.path.with_suffix(self.path.suffix + ".tmp")

    async def read(self) -> Optional[dict]:
        """Return the stored document, or None when the file is missing or empty."""
        try:
            async with aiofiles.open(self.path, "rb") as f:
                raw = await f.read()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageError(f"Failed to read {self.path}: {e}") from e
        if not raw.strip():
            # zero-byte file left by an interrupted first write
            logger.warning("{} is empty; treating as first run", self.path)
            return None
        try:
            data = orjson.loads(raw)
        except orjson.JSONDecodeError as e:
            # json_repair recovers truncated or hand-edited files
            logger.warning("Invalid JSON in {}: {}; attempting repair", self.path, e)
            data = json_repair.loads(raw.decode("utf-8", errors="replace"))
        if not isinstance(data, dict):
            raise StorageError(f"{self.path} does not contain a JSON object")
        return data

    async def write(self, document: dict) -> None:
        """Atomic write: write to .tmp then rename to avoid partial/corrupt files on concurrent access."""
        tmp_path = self.tmp_path
        try:
            content = orjson.dumps(document, option=orjson.OPT_INDENT_2).decode("utf-8")
        except TypeError as e:
            raise StorageError(f"Settings are not JSON serializable: {e}") from e
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
                await f.write(content)
                await f.flush()
                await asyncio.to_thread(os.fsync, f.fileno())
            tmp_path.replace(self.path)
        except OSError as e:
            raise StorageError(f"Failed to write {self.path}: {e}") from e

    def __repr__(self) -> str:
        return f"JsonFileStore({str(self.path)!r})"
