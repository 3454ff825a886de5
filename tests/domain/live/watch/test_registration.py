"""Tests for the viewer registration gate."""

import pytest

from app.domain.live.watch.registration import RegistrationGate, is_plausible_email
from app.domain.live.watch.watch_models import RegistrationRejection


class TestIsPlausibleEmail:
    @pytest.mark.parametrize("email", ["a@b.co", "jane.doe@example.com", "x@y.z"])
    def test_plausible(self, email):
        assert is_plausible_email(email) is True

    @pytest.mark.parametrize("email", ["plainaddress", "a@b", "a.b", ""])
    def test_implausible(self, email):
        assert is_plausible_email(email) is False


class TestSubmit:
    def test_accepts_valid_input(self, memory_store):
        gate = RegistrationGate(memory_store)

        result = gate.submit("Jane", "Doe", "jane@example.com")

        assert result.accepted is True
        assert result.rejection is None
        assert gate.complete is True
        assert gate.viewer is not None
        assert gate.viewer.first_name == "Jane"

    @pytest.mark.parametrize(
        ("first", "last", "email"),
        [
            ("", "Doe", "jane@example.com"),
            ("Jane", "", "jane@example.com"),
            ("Jane", "Doe", ""),
            ("   ", "Doe", "jane@example.com"),
        ],
    )
    def test_rejects_missing_fields(self, memory_store, first, last, email):
        gate = RegistrationGate(memory_store)

        result = gate.submit(first, last, email)

        assert result.accepted is False
        assert result.rejection == RegistrationRejection.MISSING_FIELDS
        assert result.message == "Please fill in all fields"
        assert gate.complete is False

    def test_rejects_invalid_email(self, memory_store):
        gate = RegistrationGate(memory_store)

        result = gate.submit("Jane", "Doe", "not-an-email")

        assert result.accepted is False
        assert result.rejection == RegistrationRejection.INVALID_EMAIL
        assert result.message == "Please enter a valid email address"

    def test_strips_fields(self, memory_store):
        gate = RegistrationGate(memory_store)

        gate.submit("  Jane ", " Doe ", " jane@example.com ")

        assert gate.viewer is not None
        assert gate.viewer.first_name == "Jane"
        assert gate.viewer.email == "jane@example.com"

    def test_submit_after_acceptance_keeps_first_identity(self, memory_store):
        gate = RegistrationGate(memory_store)
        gate.submit("Jane", "Doe", "jane@example.com")

        result = gate.submit("", "", "")

        assert result.accepted is True
        assert gate.viewer is not None
        assert gate.viewer.first_name == "Jane"


class TestPersistViewer:
    async def test_stores_viewer_against_active_stream(self, memory_store, channel_id):
        memory_store.add_stream(channel_id, stream_id="st_live")
        gate = RegistrationGate(memory_store)
        gate.submit("Jane", "Doe", "jane@example.com")

        stored = await gate.persist_viewer(channel_id)

        assert stored is True
        assert memory_store.viewers == [
            {
                "stream_id": "st_live",
                "first_name": "Jane",
                "last_name": "Doe",
                "email": "jane@example.com",
            }
        ]

    async def test_persists_only_once(self, memory_store, channel_id):
        memory_store.add_stream(channel_id)
        gate = RegistrationGate(memory_store)
        gate.submit("Jane", "Doe", "jane@example.com")

        await gate.persist_viewer(channel_id)
        await gate.persist_viewer(channel_id)

        assert len(memory_store.viewers) == 1

    async def test_without_active_stream_nothing_is_stored(self, memory_store, channel_id):
        gate = RegistrationGate(memory_store)
        gate.submit("Jane", "Doe", "jane@example.com")

        stored = await gate.persist_viewer(channel_id)

        assert stored is False
        assert memory_store.viewers == []
        assert gate.complete is True

    async def test_store_failure_is_not_surfaced(self, memory_store, channel_id):
        """A failed insert is logged and the gate stays complete."""
        memory_store.add_stream(channel_id)
        memory_store.fail_on.add("insert_viewer")
        gate = RegistrationGate(memory_store)
        gate.submit("Jane", "Doe", "jane@example.com")

        stored = await gate.persist_viewer(channel_id)

        assert stored is False
        assert gate.complete is True

    async def test_nothing_to_persist_before_acceptance(self, memory_store, channel_id):
        gate = RegistrationGate(memory_store)

        assert await gate.persist_viewer(channel_id) is False
        assert memory_store.calls["get_latest_active_stream"] == 0
