"""Viewer count shown on the watch page."""

import math
from typing import Any

from loguru import logger


def normalize_viewer_count(raw: Any) -> int:
    """Coerce whatever the store returned into a non-negative int (0 on nonsense)."""
    if raw is None or isinstance(raw, bool):
        return 0
    try:
        value = float(raw)
    except (TypeError, ValueError):
        logger.warning(f"Ignoring non-numeric viewer count: {raw!r}")
        return 0
    if math.isnan(value) or math.isinf(value):
        return 0
    return max(0, int(value))


class PresenceTracker:
    """Point-in-time viewer count, refreshed only when the channel is resolved."""

    def __init__(self) -> None:
        self._count = 0

    def update(self, raw: Any) -> int:
        self._count = normalize_viewer_count(raw)
        return self._count

    def current_count(self) -> int:
        return self._count
