from pydantic import BaseModel, Field
from typing import Optional, Union
from datetime import datetime


class MovimientoCreate(BaseModel):
    """Schema para registrar un movimiento de almacén"""
    producto_id: Union[int, str, None] = None
    tipo_movimiento: Optional[str] = Field(None, description="ingreso | egreso")
    cantidad: Union[int, float, str, None] = None

    class Config:
        json_schema_extra = {
            "example": {
                "producto_id": 1,
                "tipo_movimiento": "ingreso",
                "cantidad": 20
            }
        }


class ProductoResumen(BaseModel):
    codigo: str
    descripcion: str

    class Config:
        from_attributes = True


class MovimientoResponse(BaseModel):
    id: int
    producto_id: int
    tipo_movimiento: str
    cantidad: int
    fecha: datetime
    productos: Optional[ProductoResumen] = None

    @classmethod
    def from_movimiento(cls, movimiento) -> "MovimientoResponse":
        return cls(
            id=movimiento.id,
            producto_id=movimiento.producto_id,
            tipo_movimiento=movimiento.tipo_movimiento,
            cantidad=movimiento.cantidad,
            fecha=movimiento.fecha,
            productos=ProductoResumen.model_validate(movimiento.producto) if movimiento.producto else None
        )
