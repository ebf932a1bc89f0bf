"""
Library Domain Repository Interfaces

Implementations live in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC

from share_it.domain.library.entities import User
from share_it.domain.shared.repository import Repository


class UserRepository(Repository[int, User], ABC):
    """Abstract repository for User aggregates, keyed by user id.

    The waitlist reads users through ``get`` and writes rotated playlists
    back through ``update``.
    """
