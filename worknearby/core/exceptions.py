"""Domain-level exception hierarchy for the store, matcher and services."""

from __future__ import annotations


class DomainError(Exception):
    """Base class for domain-specific failures."""


class ValidationError(DomainError):
    """Raised when input is malformed or out of range (missing field, bad role, bad coordinate)."""


class ConflictError(DomainError):
    """Raised when a listing id is already taken."""


class NotFoundError(DomainError):
    """Raised when a requested entity does not exist.

    Proximity queries never raise this; an empty result is a valid answer.
    """


class StorageError(DomainError):
    """Raised when the underlying persistence layer fails. Callers may retry."""
