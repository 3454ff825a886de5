"""Field coercion shared by the ODM documents."""

from datetime import datetime, timezone
from typing import Any


def parse_mongo_datetime(v: Any) -> Any:
    """Accept datetimes written by mongoimport or exported as Extended JSON.

    Handles the relaxed form `{"$date": "2024-11-01T08:00:00Z"}` and the
    canonical form `{"$date": {"$numberLong": "1730448000000"}}`. Anything else
    is returned untouched for pydantic to validate.
    """
    if isinstance(v, datetime) or not isinstance(v, dict) or "$date" not in v:
        return v

    raw = v["$date"]
    if isinstance(raw, dict) and "$numberLong" in raw:
        raw = int(raw["$numberLong"])
    if isinstance(raw, (int, float)):
        return datetime.fromtimestamp(raw / 1000, tz=timezone.utc)
    if isinstance(raw, str):
        return datetime.fromisoformat(raw.replace("Z", "+00:00"))
    return v
