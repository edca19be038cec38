"""
Upload Registry
===============
Maps opaque tokens to uploaded workbook paths. Each upload gets its own
token, so a later upload never redirects requests made with an earlier one.
"""
import threading
import uuid
from pathlib import Path
from typing import Dict, Optional, Union

from rota_reader.core.errors import UploadNotFoundError
from rota_reader.utils.logging_setup import get_logger

logger = get_logger("rota_reader.state.uploads")


class UploadRegistry:
    """Token → path store shared by the service."""

    def __init__(self):
        self._paths: Dict[str, Path] = {}
        self._lock = threading.Lock()

    def register(self, path: Union[str, Path]) -> str:
        """Record an uploaded file and return its token."""
        token = uuid.uuid4().hex
        with self._lock:
            self._paths[token] = Path(path)
        logger.info(f"Registered upload {Path(path).name} as {token[:8]}")
        return token

    def path_for(self, token: Optional[str]) -> Path:
        """Path registered under `token`."""
        with self._lock:
            path = self._paths.get(token) if token else None
        if path is None:
            raise UploadNotFoundError(token)
        return path

