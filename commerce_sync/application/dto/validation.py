"""
Conversion de errores de pydantic a ValidationException.
"""
from pydantic import ValidationError

from commerce_sync.shared.exceptions.domain import ValidationException


def to_validation_exception(kind: str, error: ValidationError) -> ValidationException:
    """Primer error de pydantic como ValidationException del dominio."""
    first = error.errors()[0]
    field = ".".join(str(part) for part in first.get("loc", ())) or None
    return ValidationException(
        message=f"Payload de {kind} invalido: {first.get('msg')}",
        field=field
    )
