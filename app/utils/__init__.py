"""
Utility functions
"""

from app.utils.dates import utc_now

__all__ = [
    "utc_now",
]
