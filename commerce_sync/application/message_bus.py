"""
Bus de mensajes en proceso.

Cada `dispatch` es una unidad de trabajo:
- lock por recurso `"<kind>:<id>"` (serializa el lookup-or-create del bridge)
- una sesion y un unit of work por mensaje
- commit unico al final; rollback (con compensaciones) ante cualquier error

No hay reintentos internos: la excepcion se propaga y la cola decide
segun `is_retryable`.
"""
from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Dict, Type

from loguru import logger
from sqlalchemy.ext.asyncio import async_sessionmaker

from commerce_sync.infrastructure.database.unit_of_work import UnitOfWork
from commerce_sync.infrastructure.locks.resource_lock import (
    DEFAULT_LOCK_TIMEOUT,
    ResourceLockManager,
    resource_lock_key,
)
from commerce_sync.shared.exceptions.sync import UnknownMessageError, is_retryable


Handler = Callable[[Any], Awaitable[Any]]
HandlerFactory = Callable[[UnitOfWork], Handler]


class MessageBus:
    """Despacha envelopes a su handler dentro de un unit of work."""

    def __init__(
        self,
        session_factory: async_sessionmaker,
        *,
        lock_timeout: float = DEFAULT_LOCK_TIMEOUT
    ) -> None:
        self._session_factory = session_factory
        self._lock_timeout = lock_timeout
        self._handlers: Dict[Type, HandlerFactory] = {}

    def register(self, message_type: Type, factory: HandlerFactory) -> None:
        """Registra la factory del handler para un tipo de mensaje."""
        self._handlers[message_type] = factory

    async def dispatch(self, message: Any) -> Any:
        """
        Procesa un mensaje y retorna el resultado de su handler.

        Raises:
            UnknownMessageError: Si el tipo de mensaje no tiene handler
            Cualquier excepcion del handler, tras el rollback
        """
        message_name = type(message).__name__
        factory = self._handlers.get(type(message))
        if factory is None:
            raise UnknownMessageError(message_name)

        key = resource_lock_key(message.resource_kind, message.id)
        async with ResourceLockManager.lock(key, timeout=self._lock_timeout):
            async with self._session_factory() as session:
                uow = UnitOfWork(session)
                try:
                    result = await factory(uow)(message)
                    await uow.commit()
                except asyncio.CancelledError:
                    # La compensacion debe correr aunque la tarea se cancele
                    await asyncio.shield(uow.rollback())
                    logger.warning(f"{message_name} {message.id} cancelado; cambios revertidos")
                    raise
                except Exception as e:
                    await uow.rollback()
                    if is_retryable(e):
                        logger.warning(f"{message_name} {message.id} fallo (reintentable): {e}")
                    else:
                        logger.error(f"{message_name} {message.id} fallo (definitivo): {e}")
                    raise

        logger.success(f"{message_name} {message.id} procesado")
        return result
