"""
Adapters de sincronizacion por tipo de recurso.
"""
from .interfaces import ImageAdapterInterface, TaxonAdapterInterface
from .image_media_adapter import ImageMediaAdapter
from .taxon_content_adapter import TaxonContentAdapter

__all__ = [
    "ImageAdapterInterface",
    "TaxonAdapterInterface",
    "ImageMediaAdapter",
    "TaxonContentAdapter",
]
