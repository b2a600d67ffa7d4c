"""
Unit of work sobre una AsyncSession.

Agrupa las escrituras de un mensaje y las confirma de una sola vez.
Ademas de la transaccion de base de datos, coordina efectos fuera de ella
(el content store):

- `on_rollback`: compensaciones (p. ej. borrar un blob ya escrito)
- `after_commit`: efectos que solo deben ocurrir si el commit tuvo exito
"""
from __future__ import annotations

import inspect
from typing import Any, Callable, List

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession


Callback = Callable[[], Any]


async def _run(callback: Callback) -> None:
    """Ejecuta un callback; si retorna un awaitable, lo espera."""
    result = callback()
    if inspect.isawaitable(result):
        await result


class UnitOfWork:
    """Escrituras pendientes de un mensaje, confirmadas atomicamente."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self._rollback_callbacks: List[Callback] = []
        self._commit_callbacks: List[Callback] = []

    def persist(self, entity: Any) -> None:
        """Registra una entidad nueva o modificada."""
        self.session.add(entity)

    async def flush(self) -> None:
        """Escribe lo pendiente dentro de la transaccion (asigna IDs)."""
        await self.session.flush()

    def on_rollback(self, callback: Callback) -> None:
        self._rollback_callbacks.append(callback)

    def after_commit(self, callback: Callback) -> None:
        self._commit_callbacks.append(callback)

    async def commit(self) -> None:
        """
        Confirma la transaccion y ejecuta los callbacks post-commit.

        Un fallo en un callback post-commit no deshace el commit: se registra
        y se continua con los siguientes.
        """
        await self.session.commit()
        self._rollback_callbacks.clear()

        callbacks, self._commit_callbacks = self._commit_callbacks, []
        for callback in callbacks:
            try:
                await _run(callback)
            except Exception as e:
                logger.error(f"Error en callback post-commit: {e}")

    async def rollback(self) -> None:
        """Deshace la transaccion y ejecuta las compensaciones en orden inverso."""
        await self.session.rollback()
        self._commit_callbacks.clear()

        callbacks, self._rollback_callbacks = self._rollback_callbacks, []
        for callback in reversed(callbacks):
            try:
                await _run(callback)
            except Exception as e:
                logger.error(f"Error ejecutando compensacion de rollback: {e}")
