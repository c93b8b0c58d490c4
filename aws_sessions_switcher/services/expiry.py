"""Expiration helpers for stored session timestamps.

Timestamps use the fixed ``YYYY-MM-DD HH:MM:SS`` format and are read as
local time.
"""

from datetime import datetime
from typing import Optional
from .env_config import EXPIRATION_TIMESTAMP_FORMAT


def parse_expiration(timestamp: Optional[str]) -> Optional[datetime]:
    """Parse a stored timestamp, returning None when it is missing or invalid."""
    if not timestamp:
        return None
    try:
        return datetime.strptime(timestamp.strip(), EXPIRATION_TIMESTAMP_FORMAT)
    except ValueError:
        return None


def is_expired(timestamp: Optional[str], now: Optional[datetime] = None) -> bool:
    """
    Check whether a session timestamp is in the past.

    An unparsable timestamp counts as expired, and so does one equal to
    ``now``: only a strictly future expiration is live.

    Args:
        timestamp: Stored expiration string
        now: Reference time (defaults to the current local time)

    Returns:
        bool: True if the session must be treated as expired
    """
    expiration = parse_expiration(timestamp)
    if expiration is None:
        return True
    now = now or datetime.now()
    return expiration <= now.replace(microsecond=0)


def remaining_time(timestamp: Optional[str], now: Optional[datetime] = None) -> str:
    """
    Format the time left before a session expires.

    Returns:
        str: ``"{h}h {m}m {s}s"`` or ``"Expired"``
    """
    now = now or datetime.now()
    if is_expired(timestamp, now):
        return 'Expired'

    seconds = int((parse_expiration(timestamp) - now).total_seconds())
    hours, seconds = divmod(seconds, 3600)
    minutes, seconds = divmod(seconds, 60)
    return f"{hours}h {minutes}m {seconds}s"


def format_expiration(expiration: datetime) -> str:
    """Convert an expiration (aware or naive) to a local-time stored timestamp."""
    if expiration.tzinfo is not None:
        expiration = expiration.astimezone().replace(tzinfo=None)
    return expiration.strftime(EXPIRATION_TIMESTAMP_FORMAT)
