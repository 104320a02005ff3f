import json
import os
import shutil
import tempfile
import threading
import logging
from typing import Any

from lsms.config.settings import settings

logger = logging.getLogger(__name__)


class JsonStore:
    """File-backed store of named JSON documents living in one data directory."""

    def __init__(self, base_dir: str = "data"):
        self.base_dir = base_dir
        # Held by callers around a read-modify-write cycle
        self.lock = threading.RLock()
        os.makedirs(self.base_dir, exist_ok=True)

    def path(self, name: str) -> str:
        return os.path.join(self.base_dir, name)

    def exists(self, name: str) -> bool:
        return os.path.exists(self.path(name))

    def read(self, name: str, default: Any = None) -> Any:
        """
        Read a JSON document.

        Returns `default` if the file is missing or cannot be parsed; a corrupt
        file is treated as empty rather than surfaced to the caller.
        """
        file_path = self.path(name)
        if not os.path.exists(file_path):
            return default
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Unreadable JSON in {file_path}, treating as empty: {e}")
            return default

    def write(self, name: str, data: Any) -> None:
        """Replace a document wholesale. Readers never see a half-written file."""
        file_path = self.path(name)
        os.makedirs(os.path.dirname(file_path) or ".", exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=os.path.dirname(file_path) or ".", suffix=".tmp")
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False, allow_nan=False)
            os.replace(tmp_path, file_path)
        except Exception:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    def copy(self, source: str, destination: str) -> None:
        shutil.copyfile(self.path(source), self.path(destination))


_store = None


def get_store() -> JsonStore:
    """FastAPI dependency returning the process-wide store."""
    global _store
    if _store is None:
        logger.info(f"Opening JSON store at {settings.DATA_DIR}")
        _store = JsonStore(settings.DATA_DIR)
    return _store
