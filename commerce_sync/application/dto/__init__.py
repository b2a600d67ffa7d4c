"""
Data Transfer Objects (DTOs) para la capa de aplicacion.
"""
from .image_payload import ImagePayload
from .taxon_payload import TaxonPayload, TaxonTranslationPayload
from .sync_dto import (
    SynchronizeImageRequestDTO,
    SynchronizeTaxonRequestDTO,
    SyncResultDTO,
)

__all__ = [
    "ImagePayload",
    "TaxonPayload",
    "TaxonTranslationPayload",
    "SynchronizeImageRequestDTO",
    "SynchronizeTaxonRequestDTO",
    "SyncResultDTO",
]
