"""
Entidades y value objects del dominio.
"""
from commerce_sync.domain.entities.dimension import Dimension

__all__ = ["Dimension"]
