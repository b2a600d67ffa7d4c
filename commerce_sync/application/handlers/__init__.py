"""
Handlers de mensajes de sincronizacion.
"""
from .image_handlers import RemoveImageMessageHandler, SynchronizeImageMessageHandler
from .taxon_handlers import RemoveTaxonMessageHandler, SynchronizeTaxonMessageHandler

__all__ = [
    "RemoveImageMessageHandler",
    "SynchronizeImageMessageHandler",
    "RemoveTaxonMessageHandler",
    "SynchronizeTaxonMessageHandler",
]
