"""
Modelos de base de datos (ORM).

Las entidades se referencian por foreign keys explicitas. La unica relacion
ORM es bridge -> media, para que un bridge pueda envolver un media recien
construido antes de que este tenga ID.
"""
from sqlalchemy import (
    Column,
    String,
    Integer,
    BigInteger,
    DateTime,
    Text,
    JSON,
    Boolean,
    ForeignKey,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from commerce_sync.infrastructure.database.session import Base


class MediaTypeModel(Base):
    """
    Tipo de media (document, image, video, audio).
    Filas de referencia sembradas por scripts/init_db.py.
    """

    __tablename__ = "media_types"

    id = Column(Integer, primary_key=True)
    name = Column(String(50), nullable=False, unique=True)
    description = Column(String(255), nullable=True)

    def __repr__(self):
        return f"<MediaType(id={self.id}, name={self.name})>"


class CollectionModel(Base):
    """Coleccion de media. Las colecciones de sistema se resuelven por `key`."""

    __tablename__ = "collections"

    id = Column(Integer, primary_key=True, index=True)
    key = Column(String(100), nullable=True, unique=True, index=True)
    title = Column(String(255), nullable=False)

    def __repr__(self):
        return f"<Collection(id={self.id}, key={self.key})>"


class MediaModel(Base):
    """
    Recurso versionado. Sus versiones cuelgan de un unico FileModel.
    Tipo y coleccion se asignan al crear la primera version.
    """

    __tablename__ = "media"

    id = Column(Integer, primary_key=True, index=True)
    type_id = Column(Integer, ForeignKey("media_types.id"), nullable=True)
    collection_id = Column(Integer, ForeignKey("collections.id"), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        return f"<Media(id={self.id}, type_id={self.type_id}, collection_id={self.collection_id})>"


class FileModel(Base):
    """Archivo de un media. `version` apunta a la ultima FileVersion."""

    __tablename__ = "files"

    id = Column(Integer, primary_key=True, index=True)
    media_id = Column(Integer, ForeignKey("media.id"), nullable=False, index=True)
    version = Column(Integer, nullable=False, default=1)

    def __repr__(self):
        return f"<File(id={self.id}, media_id={self.media_id}, version={self.version})>"


class FileVersionModel(Base):
    """
    Version inmutable del contenido binario de un media.

    Los numeros de version son contiguos desde 1 por archivo.
    """

    __tablename__ = "file_versions"
    __table_args__ = (
        UniqueConstraint("file_id", "version", name="uq_file_versions_file_version"),
    )

    id = Column(Integer, primary_key=True, index=True)
    file_id = Column(Integer, ForeignKey("files.id"), nullable=False, index=True)
    version = Column(Integer, nullable=False)
    name = Column(String(255), nullable=False)
    size = Column(BigInteger, nullable=False)
    mime_type = Column(String(100), nullable=False)
    storage_options = Column(JSON, nullable=False)  # Referencia opaca del content store
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<FileVersion(id={self.id}, file_id={self.file_id}, version={self.version}, size={self.size})>"


class FileVersionMetaModel(Base):
    """Metadatos por locale de una FileVersion. Exactamente uno es el default."""

    __tablename__ = "file_version_metas"
    __table_args__ = (
        UniqueConstraint("file_version_id", "locale", name="uq_file_version_metas_locale"),
    )

    id = Column(Integer, primary_key=True, index=True)
    file_version_id = Column(Integer, ForeignKey("file_versions.id"), nullable=False, index=True)
    locale = Column(String(10), nullable=False)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    is_default = Column(Boolean, default=False, nullable=False)

    def __repr__(self):
        return f"<FileVersionMeta(id={self.id}, locale={self.locale}, default={self.is_default})>"


class ImageMediaBridgeModel(Base):
    """
    Bridge: id externo de la imagen -> media local.
    El PK es el id externo, a lo sumo un bridge por id.
    """

    __tablename__ = "image_media_bridges"

    id = Column(Integer, primary_key=True, autoincrement=False)
    media_id = Column(Integer, ForeignKey("media.id"), nullable=False, unique=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    media = relationship(MediaModel, lazy="joined")

    def __repr__(self):
        return f"<ImageMediaBridge(id={self.id}, media_id={self.media_id})>"


class ContentModel(Base):
    """
    Contenido estructurado de un recurso externo (p. ej. taxons) por dimension.
    """

    __tablename__ = "contents"
    __table_args__ = (
        UniqueConstraint(
            "resource_key", "resource_id", "locale", "stage",
            name="uq_contents_resource_dimension"
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    resource_key = Column(String(64), nullable=False, index=True)
    resource_id = Column(String(64), nullable=False, index=True)
    locale = Column(String(10), nullable=True)
    stage = Column(String(16), nullable=False, default="draft")
    data = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        return (
            f"<Content(resource={self.resource_key}:{self.resource_id}, "
            f"locale={self.locale}, stage={self.stage})>"
        )
