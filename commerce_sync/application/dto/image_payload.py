"""
Payload tipado de sincronizacion de imagenes.
"""

from pydantic import BaseModel, Field, ValidationError

from commerce_sync.application.dto.validation import to_validation_exception
from commerce_sync.application.messages.image_messages import SynchronizeImageMessage


class ImagePayload(BaseModel):
    """
    Imagen a sincronizar.
    Los campos adicionales que envie la plataforma se conservan.
    """

    id: int = Field(..., description="ID externo de la imagen")
    path: str = Field(..., min_length=1, description="Ruta relativa a <base>/media/image/")
    locale: str = Field(..., min_length=1, description="Locale de los metadatos")

    class Config:
        extra = "allow"

    @classmethod
    def from_message(cls, message: SynchronizeImageMessage) -> "ImagePayload":
        """
        Construye el payload desde el envelope. El id del envelope manda.

        Raises:
            ValidationException: Si faltan campos requeridos
        """
        try:
            return cls.model_validate({**message.payload, "id": message.id})
        except ValidationError as e:
            raise to_validation_exception("imagen", e) from e
