from pydantic import BaseModel

from app.shared.config import config


def _float(key: str, default: float) -> float:
    return float((config.get(key) or "").strip() or default)


class AppEnvironConfig(BaseModel):
    DEBUG: bool = config.get_bool("DEBUG")

    API_HOST: str = (config.get("API_HOST") or "0.0.0.0").strip()
    API_PORT: int = int((config.get("API_PORT") or "").strip() or 8000)
    API_WORKERS: int = int((config.get("API_WORKERS") or "").strip() or 1)
    API_CORS_ORIGINS: list[str] = [
        x.strip() for x in (config.get("API_CORS_ORIGINS") or "*").split(",") if x.strip()
    ]

    # Mongo
    MONGO_LABEL: str = (config.get("MONGO_LABEL") or "watch_primary").strip()
    MONGO_DATABASE: str = (config.get("MONGO_DATABASE") or "live_watch").strip()

    # Origin used to build shareable watch links
    FRONTEND_BASE_URL: str = (config.get("FRONTEND_BASE_URL") or "http://localhost:5173").strip()

    # Watch session timers (seconds)
    WATCH_CAPTION_INTERVAL_SECONDS: float = _float("WATCH_CAPTION_INTERVAL_SECONDS", 5.0)
    WATCH_MOOD_INTERVAL_SECONDS: float = _float("WATCH_MOOD_INTERVAL_SECONDS", 8.0)
    WATCH_PEER_CHAT_INTERVAL_SECONDS: float = _float("WATCH_PEER_CHAT_INTERVAL_SECONDS", 7.0)
    # Chance that a simulated peer chat tick actually emits a message
    WATCH_PEER_CHAT_ADMIT_PROBABILITY: float = _float("WATCH_PEER_CHAT_ADMIT_PROBABILITY", 0.7)
    WATCH_PEER_CHAT_ENABLED: bool = config.get_bool("WATCH_PEER_CHAT_ENABLED", default=True)
    # Watch pages without a snapshot/register/send call for this long are closed
    WATCH_SESSION_IDLE_SECONDS: float = _float("WATCH_SESSION_IDLE_SECONDS", 300.0)

    # Auth session persistence
    AUTH_SESSION_FILE: str = (config.get("AUTH_SESSION_FILE") or ".stream_user.json").strip()


_app_environ_config = AppEnvironConfig()


def get_app_environ_config() -> AppEnvironConfig:
    return _app_environ_config
