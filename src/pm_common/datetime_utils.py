"""UTC datetime utilities."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(timezone.utc)


def unix_now() -> int:
    """Current Unix timestamp in whole seconds, as ledger deadlines are expressed."""
    return int(utc_now().timestamp())


def from_unix(ts: int) -> datetime:
    """Unix seconds -> timezone-aware UTC datetime."""
    return datetime.fromtimestamp(ts, tz=timezone.utc)
