"""
Generic Repository Interface

Abstract base class defining the keyed-entity persistence contract shared by
every aggregate. Implementations live in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

K = TypeVar("K")
V = TypeVar("V")


class Repository(ABC, Generic[K, V]):
    """Abstract keyed repository with existence semantics.

    None of the write operations upsert: ``insert`` only stores absent keys
    and ``update`` only overwrites present ones. Every method raises
    :class:`~share_it.domain.shared.exceptions.PersistenceError` when the
    backend cannot be reached; implementations never swallow it.
    """

    @abstractmethod
    async def insert(self, entity: V) -> K | None:
        """Store an entity whose key is not yet in use.

        Args:
            entity: The entity to store.

        Returns:
            The entity key on success, None if the key already exists.
        """
        ...

    @abstractmethod
    async def get(self, key: K) -> V | None:
        """Retrieve an entity by key.

        Args:
            key: The entity key.

        Returns:
            An owned copy of the stored entity, or None if absent.
        """
        ...

    async def contains(self, key: K) -> bool:
        """Check whether an entity is stored under the key."""
        return await self.get(key) is not None

    @abstractmethod
    async def update(self, entity: V) -> K | None:
        """Overwrite an existing entity.

        Args:
            entity: The entity to write back.

        Returns:
            The entity key on success, None if the key was absent.
        """
        ...

    @abstractmethod
    async def remove(self, key: K) -> K | None:
        """Delete an entity by key.

        Args:
            key: The entity key.

        Returns:
            The key if an entity was deleted, None if it was absent.
        """
        ...
