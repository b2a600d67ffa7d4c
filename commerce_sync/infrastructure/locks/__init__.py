"""
Locks por recurso externo.
"""
from .resource_lock import DEFAULT_LOCK_TIMEOUT, ResourceLockManager, resource_lock_key

__all__ = ["DEFAULT_LOCK_TIMEOUT", "ResourceLockManager", "resource_lock_key"]
