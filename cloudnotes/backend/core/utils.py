"""
Core Utilities.

Helpers shared across the backend layers.
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """
    Return current UTC time as timezone-naive datetime.

    Timestamps are stored naive and interpreted as UTC everywhere:
    in the notes table, in JWT expiry claims and in response metadata.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)
