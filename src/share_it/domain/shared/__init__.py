"""
Shared Domain Kernel

Contains the repository contract, exceptions and types shared across all
bounded contexts.
"""

from share_it.domain.shared.exceptions import (
    ConcurrencyError,
    DomainError,
    PersistenceError,
)
from share_it.domain.shared.repository import Repository

__all__ = [
    "Repository",
    "DomainError",
    "ConcurrencyError",
    "PersistenceError",
]
