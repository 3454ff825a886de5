"""File-backed persistence for the signed-in user."""

from pathlib import Path
from typing import Any

import orjson
from loguru import logger


class SessionStorage:
    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> dict[str, Any] | None:
        """Return the stored session, or None when absent or unreadable.

        An unreadable file is removed so the next start begins signed out.
        """
        if not self.path.exists():
            return None

        try:
            data = orjson.loads(self.path.read_bytes())
        except (orjson.JSONDecodeError, OSError) as e:
            logger.warning(f"Discarding unreadable auth session {self.path}: {e}")
            self.clear()
            return None

        if not isinstance(data, dict):
            logger.warning(f"Discarding malformed auth session {self.path}")
            self.clear()
            return None
        return data

    def save(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_bytes(orjson.dumps(data))

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
