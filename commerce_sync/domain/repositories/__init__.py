"""
Interfaces de repositorios del dominio.
"""
from commerce_sync.domain.repositories.image_media_bridge_repository import (
    IImageMediaBridgeRepository,
)
from commerce_sync.domain.repositories.content_repository import IContentRepository

__all__ = ["IImageMediaBridgeRepository", "IContentRepository"]
