"""
Dependencias para inyección del bus de mensajes.
"""
from fastapi import Request

from commerce_sync.application.message_bus import MessageBus


async def get_message_bus(request: Request) -> MessageBus:
    """
    Dependencia para obtener el bus construido en el startup.

    Args:
        request: Petición HTTP (el bus vive en app.state)

    Returns:
        MessageBus: Bus de mensajes de la aplicación
    """
    return request.app.state.message_bus
