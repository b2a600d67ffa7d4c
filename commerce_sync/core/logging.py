"""
Configuracion de sinks de loguru.
"""
import sys

from loguru import logger

from commerce_sync.core.config import Settings


def configure_logging(config: Settings) -> None:
    """
    Reinstala los sinks de loguru segun la configuracion.

    - stderr al nivel LOG_LEVEL
    - archivo rotativo en LOG_FILE
    """
    logger.remove()
    logger.add(sys.stderr, level=config.LOG_LEVEL)
    if config.LOG_FILE:
        logger.add(
            config.LOG_FILE,
            rotation="500 MB",
            retention="10 days",
            level=config.LOG_LEVEL
        )
