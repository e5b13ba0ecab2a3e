# sistema_ventas/shared/parsing.py
"""
Conversión de valores numéricos que llegan desde formularios del frontend.

Los formularios envían números como texto, cadenas vacías o null; estas
funciones centralizan cómo se interpretan antes de llegar a la base de datos.
"""
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from sistema_ventas.core.errors import ValidationError


# Rangos de las columnas Integer y BigInteger
ENTERO_MAX = 2 ** 31 - 1
ENTERO_GRANDE_MAX = 2 ** 63 - 1


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


def parse_int(value: Any, message: str, maximo: int = ENTERO_MAX) -> int:
    """Entero a partir de int/float/str dentro de [-maximo - 1, maximo]; cualquier otra cosa es ValidationError"""
    if isinstance(value, bool):
        raise ValidationError(message)
    if isinstance(value, int):
        number = Decimal(value)
    else:
        try:
            number = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            raise ValidationError(message)
        if not number.is_finite() or number != number.to_integral_value():
            raise ValidationError(message)
    if number > maximo or number < -maximo - 1:
        raise ValidationError(message)
    return int(number)


def parse_optional_price(value: Any, field: str) -> Optional[float]:
    """Precio opcional: vacío/0/None se guarda como NULL"""
    if not value:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"El campo {field} debe ser un número válido.")


def parse_decimal(value: Any, message: str) -> Decimal:
    if isinstance(value, bool) or is_blank(value):
        raise ValidationError(message)
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError(message)
    if not number.is_finite():
        raise ValidationError(message)
    return number
