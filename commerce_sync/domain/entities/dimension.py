"""
Value object: Dimension.
"""
from dataclasses import dataclass
from typing import Optional


DRAFT_STAGE = "draft"
LIVE_STAGE = "live"


@dataclass(frozen=True)
class Dimension:
    """
    Eje de variacion de un contenido: locale + stage.

    locale=None representa los datos no localizados del recurso.
    """

    locale: Optional[str] = None
    stage: str = DRAFT_STAGE

    def __post_init__(self):
        """Validaciones después de la inicialización."""
        if self.stage not in (DRAFT_STAGE, LIVE_STAGE):
            raise ValueError(f"Stage desconocido: {self.stage}")
