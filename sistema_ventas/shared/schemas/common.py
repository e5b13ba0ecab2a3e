# sistema_ventas/shared/schemas/common.py
from pydantic import BaseModel
from typing import Any, Dict, Optional
from decimal import Decimal


class BaseResponse(BaseModel):
    """Sobre uniforme de todas las respuestas"""
    success: bool
    message: Optional[str] = None
    data: Optional[Any] = None
    count: Optional[int] = None


class ErrorResponse(BaseResponse):
    success: bool = False


def envelope(
    data: Any = None,
    message: Optional[str] = None,
    count: Optional[int] = None,
    success: bool = True,
    **extra: Any
) -> Dict[str, Any]:
    """Armar el sobre {success, data?, message?, count?} omitiendo claves vacías"""
    body: Dict[str, Any] = {"success": success}
    if message is not None:
        body["message"] = message
    if data is not None:
        body["data"] = data
    if count is not None:
        body["count"] = count
    body.update(extra)
    return body


def list_envelope(items: list, message: Optional[str] = None) -> Dict[str, Any]:
    return envelope(data=items, message=message, count=len(items))


class MontoModel(BaseModel):
    """Base para respuestas con montos: los Decimal salen como número JSON"""

    class Config:
        from_attributes = True
        json_encoders = {
            Decimal: lambda v: float(v)
        }
