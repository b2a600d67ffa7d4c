"""
Excepciones del pipeline de sincronización.

Toda la política de reintentos vive en la capa de cola/bus: cada excepción
declara con `retryable` si reintentar el mismo mensaje tiene sentido.
"""
from typing import Optional

from commerce_sync.shared.exceptions.base import AppException


class SyncException(AppException):
    """Excepción base para errores de sincronización."""

    retryable: bool = False


class RemoteFetchFailed(SyncException):
    """
    La plataforma remota respondió con un status distinto de 200,
    o la petición falló a nivel de transporte (status=None).
    """

    retryable = True

    def __init__(self, url: str, status: Optional[int] = None):
        self.url = url
        self.status = status
        reason = f"status {status}" if status is not None else "error de transporte"
        super().__init__(
            message=f"Descarga fallida desde {url} ({reason})",
            status_code=502,
            error_code="REMOTE_FETCH_FAILED",
            details={"url": url, "status": status}
        )


class ConfigurationError(SyncException):
    """
    Falta un dato de referencia sembrado (tipo de media, coleccion de sistema).
    Es un error de despliegue: no se reintenta.
    """

    retryable = False

    def __init__(self, message: str):
        super().__init__(
            message=message,
            status_code=500,
            error_code="CONFIGURATION_ERROR"
        )


class ResourceLockTimeoutError(SyncException):
    """Excepcion lanzada cuando no se puede adquirir el lock dentro del timeout."""

    retryable = True

    def __init__(self, key: str, timeout: float):
        self.key = key
        self.timeout = timeout
        super().__init__(
            message=f"Timeout ({timeout}s) adquiriendo lock para recurso: {key}",
            status_code=503,
            error_code="RESOURCE_LOCK_TIMEOUT",
            details={"key": key, "timeout": timeout}
        )


class UnknownMessageError(SyncException):
    """No hay handler registrado para el tipo de mensaje."""

    retryable = False

    def __init__(self, message_type: str):
        self.message_type = message_type
        super().__init__(
            message=f"No hay handler registrado para el mensaje {message_type}",
            status_code=400,
            error_code="UNKNOWN_MESSAGE",
            details={"message_type": message_type}
        )


def is_retryable(exc: BaseException) -> bool:
    """Indica si la capa de cola debería reintentar tras `exc`."""
    return bool(getattr(exc, "retryable", False))
