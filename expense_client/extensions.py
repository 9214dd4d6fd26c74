"""Session persistence.

The session lives under two keys, ``token`` and ``user``. Stores only ever
write or clear both keys together so a reader never sees a token without the
user it belongs to.
"""
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

TOKEN_KEY = "token"
USER_KEY = "user"


class MemorySessionStore:
    """Process-local store; used by tests and throwaway clients."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def save(self, token: str, user: Dict[str, Any]) -> None:
        self._data = {TOKEN_KEY: token, USER_KEY: json.dumps(user)}

    def clear(self) -> None:
        self._data = {}


class FileSessionStore:
    """
    Store backed by a single JSON document on disk.

    Both keys are written in one document and swapped into place with an
    atomic rename, so a crash mid-write leaves the previous session intact.
    """

    def __init__(self, path):
        self.path = Path(path)

    def _read(self) -> Dict[str, str]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning("[Store] Ignoring unreadable session file %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def save(self, token: str, user: Dict[str, Any]) -> None:
        document = {TOKEN_KEY: token, USER_KEY: json.dumps(user)}
        self.path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=".session-")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document, f)
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise
        logger.debug("[Store] Session written to %s", self.path)

    def clear(self) -> None:
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass
        logger.debug("[Store] Session cleared at %s", self.path)


def init_store(config):
    """Build the durable session store configured for this process."""
    store = FileSessionStore(config.SESSION_FILE)
    logger.info("[Store] Using session file %s", store.path)
    return store
