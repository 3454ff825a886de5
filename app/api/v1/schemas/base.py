"""Envelope and shared field helpers for v1 response schemas."""

from datetime import datetime, timezone
from typing import Generic, TypeVar

from app.shared.api.utils import ApiSuccess

T = TypeVar("T")


class ApiOut(ApiSuccess, Generic[T]):
    """`{success, version, results}` envelope returned by every v1 route."""

    results: T  # type: ignore[valid-type]


def as_utc_iso(dt: datetime) -> str:
    """ISO 8601 with an explicit UTC offset; naive values are taken as UTC."""
    return (dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)).isoformat()


def as_optional_utc_iso(dt: datetime | None) -> str | None:
    return as_utc_iso(dt) if dt is not None else None
