"""
Viewer watch sessions.

Includes:
- identifier: UUID shape check for watch identifiers.
- resolver: channel lookup and live viewer count.
- registration: one-time viewer registration gate.
- chat: ordered chat log, background persistence, simulated peers.
- telemetry: caption/mood feed (simulated).
- watch_session: the per-identifier state machine owner.
- watch_domain: navigator and process-wide registry.
"""

from .watch_domain import WatchNavigator, WatchService
from .watch_models import WatchPhase, WatchSettings, WatchSnapshot
from .watch_session import WatchSession

__all__ = [
    "WatchNavigator",
    "WatchPhase",
    "WatchService",
    "WatchSession",
    "WatchSettings",
    "WatchSnapshot",
]
