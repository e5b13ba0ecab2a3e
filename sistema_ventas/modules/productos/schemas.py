from pydantic import BaseModel, Field
from typing import Optional, Union
from decimal import Decimal

from sistema_ventas.shared.schemas.common import MontoModel

# Los formularios envían números como texto; el repositorio hace la conversión
NumeroFormulario = Union[int, float, str, None]


class ProductoCreate(BaseModel):
    """Schema para crear un producto"""
    codigo: Optional[str] = Field(None, max_length=100, description="Código único del producto")
    descripcion: Optional[str] = Field(None, max_length=255)
    stock: NumeroFormulario = Field(None, description="Stock inicial (entero >= 0)")
    pre_compra: NumeroFormulario = None
    pre_especial: NumeroFormulario = None
    pre_por_mayor: NumeroFormulario = None
    pre_general: NumeroFormulario = None

    class Config:
        json_schema_extra = {
            "example": {
                "codigo": "P-001",
                "descripcion": "Polo algodón talla M",
                "stock": 10,
                "pre_compra": "12.50",
                "pre_general": "25.00"
            }
        }


class ProductoUpdate(BaseModel):
    """Schema para actualizar un producto (el stock solo cambia vía almacén)"""
    codigo: Optional[str] = Field(None, max_length=100)
    descripcion: Optional[str] = Field(None, max_length=255)
    pre_compra: NumeroFormulario = None
    pre_especial: NumeroFormulario = None
    pre_por_mayor: NumeroFormulario = None
    pre_general: NumeroFormulario = None
    estado: Optional[bool] = None


class ProductoResponse(MontoModel):
    id: int
    codigo: str
    descripcion: str
    stock: int
    pre_compra: Optional[Decimal] = None
    pre_especial: Optional[Decimal] = None
    pre_por_mayor: Optional[Decimal] = None
    pre_general: Optional[Decimal] = None
    estado: bool
