"""
Excepciones de la aplicacion.
"""
from commerce_sync.shared.exceptions.base import AppException
from commerce_sync.shared.exceptions.domain import (
    DomainException,
    EntityNotFoundException,
    ValidationException,
)
from commerce_sync.shared.exceptions.sync import (
    SyncException,
    RemoteFetchFailed,
    ConfigurationError,
    ResourceLockTimeoutError,
    UnknownMessageError,
    is_retryable,
)

__all__ = [
    "AppException",
    "DomainException",
    "EntityNotFoundException",
    "ValidationException",
    "SyncException",
    "RemoteFetchFailed",
    "ConfigurationError",
    "ResourceLockTimeoutError",
    "UnknownMessageError",
    "is_retryable",
]
