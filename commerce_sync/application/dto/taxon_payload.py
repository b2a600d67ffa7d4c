"""
Payload tipado de sincronizacion de taxons.
"""
from typing import List, Optional

from pydantic import BaseModel, Field, ValidationError

from commerce_sync.application.dto.validation import to_validation_exception
from commerce_sync.application.messages.taxon_messages import SynchronizeTaxonMessage


class TaxonTranslationPayload(BaseModel):
    """Traduccion de un taxon a un locale."""

    locale: str = Field(..., min_length=1)
    name: str = Field(...)
    slug: str = Field(...)
    description: Optional[str] = Field(None)


class TaxonPayload(BaseModel):
    """Taxon con sus traducciones y, recursivamente, sus hijos."""

    id: int = Field(..., description="ID externo del taxon")
    code: str = Field(..., description="Codigo del taxon en la plataforma")
    position: int = Field(default=0)
    translations: List[TaxonTranslationPayload] = Field(default_factory=list)
    children: List["TaxonPayload"] = Field(default_factory=list)

    @classmethod
    def from_message(cls, message: SynchronizeTaxonMessage) -> "TaxonPayload":
        """
        Construye el payload desde el envelope.

        Raises:
            ValidationException: Si el payload no cumple el esquema
        """
        try:
            return cls.model_validate({**message.payload, "id": message.id})
        except ValidationError as e:
            raise to_validation_exception("taxon", e) from e


TaxonPayload.model_rebuild()
