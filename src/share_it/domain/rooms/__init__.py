"""
Rooms Bounded Context

Chatroom membership, moderation and the DJ waitlist turn scheduler.
"""

from share_it.domain.rooms.entities import Chatroom, Waitlist
from share_it.domain.rooms.repository import ChatroomRepository
from share_it.domain.rooms.value_objects import ChatUser, Dj

__all__ = [
    # Entities
    "Chatroom",
    "Waitlist",
    # Value Objects
    "Dj",
    "ChatUser",
    # Repository
    "ChatroomRepository",
]
