"""
Application Queries (CQRS Read Side)

Query objects and their handlers for read operations.
"""

from share_it.application.queries.list_waitlist import (
    ListWaitlistHandler,
    ListWaitlistQuery,
    WaitlistInfo,
)

__all__ = [
    "ListWaitlistQuery",
    "ListWaitlistHandler",
    "WaitlistInfo",
]
