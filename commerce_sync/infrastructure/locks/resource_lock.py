"""
Lock por recurso externo.

Motivacion:
- Dos mensajes con el mismo id externo pueden llegar a la vez (reentregas
  de la cola, workers en paralelo).
- El paso "buscar bridge o crearlo" debe serializarse por id para no crear
  dos bridges para el mismo recurso.

Caracteristicas:
- Lock por clave `"<kind>:<id>"`
- Timeout configurable para evitar deadlocks (default: 60 segundos)
- Cada clave cuenta sus usuarios (titular + en espera); la entrada se
  elimina cuando el ultimo sale, asi el mapa no crece con cada id visto
- Si la tarea en espera se cancela, el lock que el thread obtenga despues
  se libera solo
"""

from __future__ import annotations

import asyncio
import threading
from contextlib import asynccontextmanager
from functools import partial
from typing import AsyncIterator, Dict, Optional

from loguru import logger

from commerce_sync.shared.exceptions.sync import ResourceLockTimeoutError


# Timeout por defecto para adquirir un lock (en segundos)
DEFAULT_LOCK_TIMEOUT = 60.0


def resource_lock_key(kind: str, resource_id: object) -> str:
    """Clave de lock de un recurso externo."""
    return f"{kind}:{resource_id}"


class ResourceLockManager:
    """
    Gestor de locks por clave de recurso.

    Implementacion:
    - Usa `threading.Lock` para servir tanto a tasks como a threads.
    - La adquisicion se ejecuta en un thread via `asyncio.to_thread` para
      no bloquear el event loop.
    - `_users` cuenta cuantos titulares o esperas tiene cada clave.
    """

    _locks: Dict[str, threading.Lock] = {}
    _users: Dict[str, int] = {}
    _meta_lock = threading.Lock()

    @classmethod
    def _get_or_create_lock(cls, key: str) -> threading.Lock:
        """Obtiene o crea el lock de la clave y registra un usuario mas."""
        with cls._meta_lock:
            lock = cls._locks.get(key)
            if lock is None:
                lock = threading.Lock()
                cls._locks[key] = lock
            cls._users[key] = cls._users.get(key, 0) + 1
            return lock

    @classmethod
    def _release_user(cls, key: str) -> None:
        """Da de baja un usuario; sin usuarios, la entrada desaparece."""
        with cls._meta_lock:
            remaining = cls._users.get(key, 0) - 1
            if remaining > 0:
                cls._users[key] = remaining
            else:
                cls._users.pop(key, None)
                cls._locks.pop(key, None)

    @classmethod
    def _abandon(cls, key: str, lock: threading.Lock, acquire: asyncio.Future) -> None:
        """Callback de una espera cancelada: devuelve el lock si el thread llego a tomarlo."""
        if not acquire.cancelled() and acquire.exception() is None and acquire.result():
            lock.release()
            logger.debug(f"Lock de {key} liberado tras cancelacion de la espera")
        cls._release_user(key)

    @staticmethod
    async def _acquire(lock: threading.Lock, timeout: Optional[float]) -> bool:
        if timeout and timeout > 0:
            return await asyncio.to_thread(lock.acquire, timeout=timeout)
        return await asyncio.to_thread(lock.acquire)

    @classmethod
    @asynccontextmanager
    async def lock(
        cls,
        key: str,
        timeout: float = DEFAULT_LOCK_TIMEOUT
    ) -> AsyncIterator[None]:
        """
        Context manager async para adquirir el lock de un recurso.

        Args:
            key: Clave del recurso (ver `resource_lock_key`)
            timeout: Tiempo maximo de espera (segundos). Si es None o <= 0,
                     espera indefinidamente.

        Raises:
            ResourceLockTimeoutError: Si no se adquiere dentro del timeout.

        Ejemplo:
            async with ResourceLockManager.lock("image:42"):
                await adapter.synchronize(payload)
        """
        lock = cls._get_or_create_lock(key)

        # El thread no se puede interrumpir: si nos cancelan, sigue esperando
        acquire = asyncio.ensure_future(cls._acquire(lock, timeout))
        try:
            acquired = await asyncio.shield(acquire)
        except asyncio.CancelledError:
            acquire.add_done_callback(partial(cls._abandon, key, lock))
            raise

        if not acquired:
            cls._release_user(key)
            logger.warning(f"Timeout adquiriendo lock para {key} (timeout: {timeout}s)")
            raise ResourceLockTimeoutError(key, timeout)

        try:
            yield
        finally:
            lock.release()
            cls._release_user(key)

    @classmethod
    def get_active_locks_count(cls) -> int:
        """Retorna el numero de claves con titular o esperas (para monitoreo)."""
        with cls._meta_lock:
            return len(cls._locks)

    @classmethod
    def reset(cls) -> None:
        """Olvida todas las claves. Solo para tests."""
        with cls._meta_lock:
            cls._locks.clear()
            cls._users.clear()
