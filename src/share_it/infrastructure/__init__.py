"""Infrastructure layer - external systems integration.

This layer contains implementations for:
- Persistence (SQLite and in-memory repositories)
- SoundCloud catalog response models
"""

from share_it.infrastructure.persistence.database import Database

__all__ = [
    "Database",
]
