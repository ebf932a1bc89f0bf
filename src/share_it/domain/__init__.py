# ruff: noqa: N999
"""
Domain Layer

Contains pure business logic organized by bounded contexts:
- shared/: Repository contract, exceptions, types and events
- library/: Song, playlist and user domain logic
- rooms/: Chatroom roster and waitlist turn scheduling
"""

from share_it.domain.shared.exceptions import DomainError, PersistenceError
from share_it.domain.shared.repository import Repository

__all__ = [
    "DomainError",
    "PersistenceError",
    "Repository",
]
