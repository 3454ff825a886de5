"""Tests for watch identifier validation."""

import uuid

import pytest

from app.domain.live.watch.identifier import is_valid_identifier, validate_identifier


class TestValidateIdentifier:
    """validate_identifier accepts canonical UUIDs only and never raises."""

    @pytest.mark.parametrize(
        "value",
        [
            "123e4567-e89b-12d3-a456-426614174000",
            "123E4567-E89B-12D3-A456-426614174000",
            "00000000-0000-4000-8000-000000000000",
            "ffffffff-ffff-8fff-bfff-ffffffffffff",
        ],
    )
    def test_accepts_canonical_uuids(self, value):
        assert validate_identifier(value).valid is True

    def test_accepts_generated_uuid4(self):
        assert is_valid_identifier(str(uuid.uuid4())) is True

    @pytest.mark.parametrize(
        "value",
        [
            None,
            "",
            "abc",
            "not-a-uuid",
            "123e4567e89b12d3a456426614174000",
            "{123e4567-e89b-12d3-a456-426614174000}",
            " 123e4567-e89b-12d3-a456-426614174000",
            "123e4567-e89b-12d3-a456-426614174000\n",
            "123e4567-e89b-02d3-a456-426614174000",
            "123e4567-e89b-92d3-a456-426614174000",
            "123e4567-e89b-12d3-c456-426614174000",
            "123e4567-e89b-12d3-a456-42661417400g",
            "123e4567-e89b-12d3-a456-4266141740000",
        ],
    )
    def test_rejects_everything_else(self, value):
        assert validate_identifier(value).valid is False

    @pytest.mark.parametrize("value", [42, 3.14, b"bytes", ["list"], {"a": 1}, object()])
    def test_non_string_input_is_invalid_not_an_error(self, value):
        assert is_valid_identifier(value) is False
