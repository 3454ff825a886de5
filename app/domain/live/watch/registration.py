"""Registration gate shown before a viewer can chat."""

from loguru import logger

from .record_store import RecordStore
from .watch_models import RegistrationRejection, RegistrationResult, ViewerIdentity


def is_plausible_email(email: str) -> bool:
    """Permissive check: an '@' and a '.' somewhere. Not RFC validation."""
    return "@" in email and "." in email


class RegistrationGate:
    """Collects the viewer's name and email once per session.

    The gate is a UX step, not an authorization boundary: once input is valid it
    stays open even if storing the viewer record fails afterwards.
    """

    def __init__(self, store: RecordStore):
        self._store = store
        self._viewer: ViewerIdentity | None = None
        self._persisted = False

    @property
    def complete(self) -> bool:
        return self._viewer is not None

    @property
    def viewer(self) -> ViewerIdentity | None:
        return self._viewer

    def submit(self, first_name: str, last_name: str, email: str) -> RegistrationResult:
        if self._viewer is not None:
            return RegistrationResult.accept()

        first_name = (first_name or "").strip()
        last_name = (last_name or "").strip()
        email = (email or "").strip()

        if not first_name or not last_name or not email:
            return RegistrationResult.reject(RegistrationRejection.MISSING_FIELDS)

        if not is_plausible_email(email):
            return RegistrationResult.reject(RegistrationRejection.INVALID_EMAIL)

        self._viewer = ViewerIdentity(first_name=first_name, last_name=last_name, email=email)
        return RegistrationResult.accept()

    async def persist_viewer(self, channel_id: str) -> bool:
        """Store the viewer against the channel's active stream. Never raises.

        Returns True when a record was written.
        """
        viewer = self._viewer
        if viewer is None or self._persisted:
            return False

        try:
            stream = await self._store.get_latest_active_stream(channel_id)
            if stream is None:
                logger.info(f"No active stream for channel {channel_id}, viewer not stored")
                return False

            await self._store.insert_viewer(
                stream.stream_id, viewer.first_name, viewer.last_name, viewer.email
            )
        except Exception as e:
            logger.warning(f"Failed to store viewer for channel {channel_id}: {e}")
            return False

        self._persisted = True
        logger.debug(f"Stored viewer for stream {stream.stream_id}")
        return True
