"""
Repositorios SQLAlchemy.
"""
from commerce_sync.infrastructure.repositories.content_repository import ContentRepository
from commerce_sync.infrastructure.repositories.image_media_bridge_repository import ImageMediaBridgeRepository
from commerce_sync.infrastructure.repositories.media_repository import MediaRepository
from commerce_sync.infrastructure.repositories.system_collection_manager import SystemCollectionManager

__all__ = [
    "ContentRepository",
    "ImageMediaBridgeRepository",
    "MediaRepository",
    "SystemCollectionManager",
]
