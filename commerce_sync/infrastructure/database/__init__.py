"""
Configuración de base de datos.

Importa todos los modelos para que se registren con Base
antes de crear las tablas.
"""
from commerce_sync.infrastructure.database.models import (
    MediaTypeModel,
    CollectionModel,
    MediaModel,
    FileModel,
    FileVersionModel,
    FileVersionMetaModel,
    ImageMediaBridgeModel,
    ContentModel
)
