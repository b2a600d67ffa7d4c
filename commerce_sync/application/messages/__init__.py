"""
Mensajes (envelopes) de sincronizacion que llegan por la cola/bus.
"""
from .image_messages import RemoveImageMessage, SynchronizeImageMessage
from .taxon_messages import RemoveTaxonMessage, SynchronizeTaxonMessage

__all__ = [
    "RemoveImageMessage",
    "SynchronizeImageMessage",
    "RemoveTaxonMessage",
    "SynchronizeTaxonMessage",
]
