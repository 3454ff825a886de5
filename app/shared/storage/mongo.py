"""
Simple MongoDB client manager that creates and tracks clients.
"""

import atexit
import threading

from loguru import logger
from motor.motor_asyncio import AsyncIOMotorClient

from ..config import config


class MongoManager:
    """
    Simple MongoDB client manager.

    Features:
    - Creates and tracks one client per label
    - Loads connection strings from MONGO_URL_<LABEL> configuration keys
    - Applies pool size and timeout settings from configuration
    - Ensures all clients are closed on process exit
    """

    _instance = None
    _lock = threading.Lock()

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if hasattr(self, "_initialized"):
            return

        self._clients: dict[str, AsyncIOMotorClient] = {}
        self._connection_strings: dict[str, str] = {}
        self._max_pool_size = config.get_mongo_max_pool_size()
        self._server_selection_timeout = config.get_mongo_timeout_ms(
            "MONGO_SERVER_SELECTION_TIMEOUT", 30000
        )
        self._connect_timeout = config.get_mongo_timeout_ms("MONGO_CONNECT_TIMEOUT", 30000)
        self._socket_timeout = config.get_mongo_timeout_ms("MONGO_SOCKET_TIMEOUT", 300000)
        self._lock = threading.Lock()

        self._load_connection_strings()
        atexit.register(self.close_all)

        self._initialized = True

    def _load_connection_strings(self):
        for key, value in config.items():
            if not key.startswith("MONGO_URL_") or not value:
                continue
            label = key[len("MONGO_URL_") :].lower()
            self._connection_strings[label] = value
            logger.info(
                "Loaded MongoDB connection string for label '{}': {}",
                label,
                hide_password(value),
            )

        if "default" not in self._connection_strings:
            self._connection_strings["default"] = config.get_mongo_url("default")

    def get_client(self, label: str | None = None) -> AsyncIOMotorClient:
        """
        Get MongoDB client by label.

        Raises:
            ValueError: If label not found
        """
        label = label or "default"

        with self._lock:
            if label not in self._clients:
                if label not in self._connection_strings:
                    raise ValueError(f"No MongoDB connection string found for label '{label}'")

                logger.info("Open MongoDB client for label '{}'", label)
                self._clients[label] = AsyncIOMotorClient(
                    self._connection_strings[label],
                    serverSelectionTimeoutMS=self._server_selection_timeout,
                    connectTimeoutMS=self._connect_timeout,
                    socketTimeoutMS=self._socket_timeout,
                    maxPoolSize=self._max_pool_size,
                )

            return self._clients[label]

    def close_all(self):
        with self._lock:
            clients = list(self._clients.items())
            self._clients.clear()

        for label, client in clients:
            try:
                client.close()
                logger.info("Closed MongoDB client for label '{}'", label)
            except Exception as e:
                logger.error("Error closing MongoDB client for label '{}': {}", label, e)


def hide_password(connection_string: str) -> str:
    """Mask the password part of a MongoDB URL for logging."""
    if "://" not in connection_string:
        return connection_string

    scheme, rest = connection_string.split("://", 1)
    at = rest.rfind("@")
    if at == -1:
        return connection_string

    auth, host = rest[:at], rest[at + 1 :]
    if ":" not in auth:
        return connection_string

    username, password = auth.split(":", 1)
    if not username or not password:
        return connection_string
    return f"{scheme}://{username}:***@{host}"


_mongo_manager = None


def get_mongo_manager() -> MongoManager:
    """Get the global MongoDB manager instance."""
    global _mongo_manager
    if _mongo_manager is None:
        _mongo_manager = MongoManager()
    return _mongo_manager


def get_mongo_client(label: str | None = None) -> AsyncIOMotorClient:
    """Get MongoDB client by label."""
    return get_mongo_manager().get_client(label)
