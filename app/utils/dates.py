"""
Datetime helpers.

Timestamps are stored as naive UTC datetimes in plain ``DateTime`` columns
(MariaDB DATETIME has no zone). API schemas add the Z suffix on the way out.
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Current UTC time without tzinfo, matching the stored column format."""
    return datetime.now(UTC).replace(tzinfo=None)
