"""Base exception classes for domain-level errors."""

from __future__ import annotations


class DomainError(Exception):
    """Base exception for all domain-level errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class ConcurrencyError(DomainError):
    """Raised when a concurrent modification conflict occurs."""

    def __init__(self, entity_type: str, message: str | None = None) -> None:
        msg = message or f"Concurrent modification detected for {entity_type}"
        super().__init__(msg, code="CONCURRENCY_ERROR")
        self.entity_type = entity_type


class PersistenceError(DomainError):
    """Raised when the storage backend cannot be reached or rejects a write.

    The original driver exception is chained as ``__cause__``.
    """

    def __init__(self, operation: str, message: str | None = None) -> None:
        msg = message or f"Storage failure during '{operation}'"
        super().__init__(msg, code="PERSISTENCE_ERROR")
        self.operation = operation
