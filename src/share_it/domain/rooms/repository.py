"""
Rooms Domain Repository Interfaces

Implementations live in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC

from share_it.domain.rooms.entities import Chatroom
from share_it.domain.shared.repository import Repository


class ChatroomRepository(Repository[str, Chatroom], ABC):
    """Abstract repository for Chatroom aggregates, keyed by chatroom id.

    The aggregate (roster, moderator and the embedded waitlist state) is
    stored as one unit. ``update`` compares the aggregate's ``version`` with
    the stored one and raises
    :class:`~share_it.domain.shared.exceptions.ConcurrencyError` on a
    mismatch; on success both the stored and the passed aggregate's version
    are incremented.
    """
