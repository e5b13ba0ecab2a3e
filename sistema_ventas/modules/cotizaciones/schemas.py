from pydantic import BaseModel, Field
from typing import List, Optional, Union
from datetime import datetime
from decimal import Decimal

from sistema_ventas.shared.schemas.common import MontoModel

Monto = Union[int, float, str, None]


class CotizacionItem(BaseModel):
    producto_id: Union[int, str, None] = None
    producto_nombre: Optional[str] = None
    cantidad: Union[int, float, str, None] = None
    precio_unitario: Monto = None
    subtotal: Monto = None


class CotizacionBase(BaseModel):
    cliente_id: Union[int, str, None] = None
    cliente_nombre: Optional[str] = None
    cliente_documento: Union[str, int, None] = None

    metodo_pago: Optional[str] = None
    codigo_operacion: Optional[str] = None
    ultimos_digitos: Optional[str] = None
    comision_tarjeta: Monto = None

    es_adelanto: Optional[bool] = None
    monto_adelanto: Monto = None
    saldo_pendiente: Monto = None
    tipo_precio: Optional[str] = None

    es_envio_encomienda: Optional[bool] = None
    empresa_encomienda: Optional[str] = None
    destino_encomienda: Optional[str] = None
    es_envio_motorizado: Optional[bool] = None
    nombre_motorizado: Optional[str] = None
    placa_moto: Optional[str] = None

    total_items: Union[int, str, None] = None
    total: Monto = None
    total_con_comision: Monto = None
    observaciones: Optional[str] = None


class CotizacionCreate(CotizacionBase):
    """Schema para crear cotización con sus items"""
    items: Optional[List[CotizacionItem]] = None

    class Config:
        json_schema_extra = {
            "example": {
                "cliente_nombre": "Cliente Mostrador",
                "metodo_pago": "efectivo",
                "total": 50,
                "total_items": 1,
                "items": [
                    {"producto_id": 1, "producto_nombre": "Polo algodón", "cantidad": 2,
                     "precio_unitario": 25, "subtotal": 50}
                ]
            }
        }


class CotizacionUpdate(CotizacionBase):
    """Campos editables de la cabecera (id, fecha_creacion y creado_por no se tocan)"""
    estado: Optional[str] = Field(None, description="pendiente | aprobada | convertida_venta")


class DetalleReemplazo(BaseModel):
    items: Optional[List[CotizacionItem]] = None
    total: Monto = None
    total_items: Union[int, str, None] = None
    total_con_comision: Monto = None


class ConversionRequest(BaseModel):
    forzar_conversion: bool = False


class CotizacionItemResponse(MontoModel):
    id: int
    cotizacion_id: int
    producto_id: Optional[int] = None
    producto_nombre: Optional[str] = None
    cantidad: int
    precio_unitario: Decimal
    subtotal: Decimal
    fecha_creacion: datetime


class CotizacionResponse(MontoModel):
    id: int
    cliente_id: Optional[int] = None
    cliente_nombre: Optional[str] = None
    cliente_documento: Optional[str] = None

    metodo_pago: str
    codigo_operacion: Optional[str] = None
    ultimos_digitos: Optional[str] = None
    comision_tarjeta: Decimal

    es_adelanto: bool
    monto_adelanto: Optional[Decimal] = None
    saldo_pendiente: Optional[Decimal] = None
    tipo_precio: str

    es_envio_encomienda: bool
    empresa_encomienda: Optional[str] = None
    destino_encomienda: Optional[str] = None
    es_envio_motorizado: bool
    nombre_motorizado: Optional[str] = None
    placa_moto: Optional[str] = None

    total_items: int
    total: Decimal
    total_con_comision: Optional[Decimal] = None
    estado: str
    observaciones: Optional[str] = None

    creado_por: Optional[int] = None
    fecha_creacion: datetime
    fecha_actualizacion: Optional[datetime] = None


class CotizacionConItems(CotizacionResponse):
    items: List[CotizacionItemResponse] = []


class ProductoInfo(MontoModel):
    id: int
    codigo: str
    descripcion: str
    stock: int
    pre_general: Optional[Decimal] = None
    pre_especial: Optional[Decimal] = None
    pre_por_mayor: Optional[Decimal] = None


class ItemDetallado(CotizacionItemResponse):
    producto_codigo: str = "N/A"
    producto_info: Optional[ProductoInfo] = None
