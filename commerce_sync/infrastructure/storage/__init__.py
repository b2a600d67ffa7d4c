"""
Content store para los binarios de media.
"""
from .local_storage import LocalStorage, StorageError, StorageInterface, StorageOptions

__all__ = ["LocalStorage", "StorageError", "StorageInterface", "StorageOptions"]
