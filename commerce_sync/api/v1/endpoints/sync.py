"""
Endpoints para sincronizacion de datos de la plataforma e-commerce.

Cada request se convierte en un envelope y se despacha por el bus, igual
que un mensaje que llega por la cola.
"""
from fastapi import APIRouter, Depends, status
from loguru import logger

from commerce_sync.api.v1.dependencies.bus_deps import get_message_bus
from commerce_sync.application.dto.sync_dto import (
    SynchronizeImageRequestDTO,
    SynchronizeTaxonRequestDTO,
    SyncResultDTO,
)
from commerce_sync.application.message_bus import MessageBus
from commerce_sync.application.messages.image_messages import RemoveImageMessage, SynchronizeImageMessage
from commerce_sync.application.messages.taxon_messages import RemoveTaxonMessage, SynchronizeTaxonMessage
from commerce_sync.shared.exceptions.domain import EntityNotFoundException


router = APIRouter(prefix="/sync", tags=["Sync"])


@router.post(
    "/images",
    response_model=SyncResultDTO,
    status_code=status.HTTP_200_OK,
    summary="Sincronizar una imagen"
)
async def synchronize_image(
    request: SynchronizeImageRequestDTO,
    bus: MessageBus = Depends(get_message_bus)
) -> SyncResultDTO:
    """
    Descarga la imagen y crea una version nueva del media si cambio su tamaño.
    """
    await bus.dispatch(SynchronizeImageMessage(id=request.id, payload=request.payload))
    return SyncResultDTO(
        success=True,
        message="Imagen sincronizada",
        resource_kind=SynchronizeImageMessage.resource_kind,
        resource_id=request.id,
    )


@router.delete(
    "/images/{image_id}",
    response_model=SyncResultDTO,
    summary="Eliminar una imagen sincronizada"
)
async def remove_image(
    image_id: int,
    bus: MessageBus = Depends(get_message_bus)
) -> SyncResultDTO:
    removed = await bus.dispatch(RemoveImageMessage(id=image_id))
    if not removed:
        logger.info(f"DELETE imagen {image_id}: no existe")
        raise EntityNotFoundException("Imagen", image_id)

    return SyncResultDTO(
        success=True,
        message="Imagen eliminada",
        resource_kind=RemoveImageMessage.resource_kind,
        resource_id=image_id,
    )


@router.post(
    "/taxons",
    response_model=SyncResultDTO,
    status_code=status.HTTP_200_OK,
    summary="Sincronizar un taxon y sus hijos"
)
async def synchronize_taxon(
    request: SynchronizeTaxonRequestDTO,
    bus: MessageBus = Depends(get_message_bus)
) -> SyncResultDTO:
    await bus.dispatch(SynchronizeTaxonMessage(
        id=request.id,
        payload=request.payload,
        ignore_children=request.ignore_children,
    ))
    return SyncResultDTO(
        success=True,
        message="Taxon sincronizado",
        resource_kind=SynchronizeTaxonMessage.resource_kind,
        resource_id=request.id,
    )


@router.delete(
    "/taxons/{taxon_id}",
    response_model=SyncResultDTO,
    summary="Eliminar un taxon sincronizado"
)
async def remove_taxon(
    taxon_id: int,
    bus: MessageBus = Depends(get_message_bus)
) -> SyncResultDTO:
    removed = await bus.dispatch(RemoveTaxonMessage(id=taxon_id))
    if not removed:
        raise EntityNotFoundException("Taxon", taxon_id)

    return SyncResultDTO(
        success=True,
        message="Taxon eliminado",
        resource_kind=RemoveTaxonMessage.resource_kind,
        resource_id=taxon_id,
    )
