from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional, Union
from datetime import datetime
from decimal import Decimal

from sistema_ventas.shared.schemas.common import MontoModel

Monto = Union[int, float, str, None]


# ==================== REQUEST ====================

class DetalleVentaCreate(BaseModel):
    """Línea de venta; genera un egreso de almacén"""
    venta_id: Union[int, str, None] = None
    producto_id: Union[int, str, None] = None
    cantidad: Union[int, float, str, None] = None
    precio_unitario: Monto = None
    subtotal: Monto = None


class VentaItem(BaseModel):
    producto_id: Union[int, str, None] = None
    cantidad: Union[int, float, str, None] = None
    precio_unitario: Monto = None
    subtotal: Monto = None


class VentaCreate(BaseModel):
    """Schema para registrar una venta con sus items"""
    cliente_id: Union[int, str, None] = None
    usuarios_id: Union[int, str, None] = None
    total: Monto = None
    adelanto: Monto = None
    es_adelanto: bool = False

    metodo_pago: Optional[str] = None
    tipo_precio: Optional[str] = None
    codigo_operacion: Optional[str] = None
    ultimos_digitos: Optional[str] = None
    comision_tarjeta: Monto = None
    total_con_comision: Monto = None

    agencia_encomienda: Optional[str] = None
    destino: Optional[str] = None
    contrasena: Optional[str] = Field(None, description="Clave de recojo de la encomienda")
    nombre_motorizado: Optional[str] = None
    placa_moto: Optional[str] = None

    items: List[VentaItem] = []

    class Config:
        json_schema_extra = {
            "example": {
                "cliente_id": 1,
                "usuarios_id": 1,
                "total": 100,
                "adelanto": 40,
                "es_adelanto": True,
                "metodo_pago": "efectivo",
                "items": [
                    {"producto_id": 1, "cantidad": 2, "precio_unitario": 50}
                ]
            }
        }


class VentaUpdate(BaseModel):
    cliente_id: Union[int, str, None] = None
    usuarios_id: Union[int, str, None] = None
    total: Monto = None
    adelanto: Monto = None
    estado: Optional[str] = None
    es_adelanto: Optional[bool] = None

    metodo_pago: Optional[str] = None
    tipo_precio: Optional[str] = None
    codigo_operacion: Optional[str] = None
    ultimos_digitos: Optional[str] = None
    comision_tarjeta: Monto = None
    total_con_comision: Monto = None

    agencia_encomienda: Optional[str] = None
    destino: Optional[str] = None
    contrasena: Optional[str] = None
    nombre_motorizado: Optional[str] = None
    placa_moto: Optional[str] = None


class PagoRequest(BaseModel):
    monto: Monto = None


class AnulacionRequest(BaseModel):
    """Credenciales del administrador que autoriza la anulación"""
    usuario: Optional[str] = None
    contrasena: Optional[str] = None


# ==================== RESPONSE ====================

class ClienteResumen(BaseModel):
    nombre: str
    documento: int

    class Config:
        from_attributes = True


class UsuarioResumen(BaseModel):
    nombre: str
    usuario: str

    class Config:
        from_attributes = True


class ProductoResumen(BaseModel):
    codigo: str
    descripcion: str

    class Config:
        from_attributes = True


class DetalleVentaResponse(MontoModel):
    id: int
    venta_id: int
    producto_id: int
    cantidad: int
    precio_unitario: Decimal
    subtotal: Decimal
    productos: Optional[ProductoResumen] = None

    @classmethod
    def from_detalle(cls, detalle) -> "DetalleVentaResponse":
        return cls(
            id=detalle.id,
            venta_id=detalle.venta_id,
            producto_id=detalle.producto_id,
            cantidad=detalle.cantidad,
            precio_unitario=detalle.precio_unitario,
            subtotal=detalle.subtotal,
            productos=ProductoResumen.model_validate(detalle.producto) if detalle.producto else None
        )


class VentaResponse(MontoModel):
    id: int
    fecha: datetime
    cliente_id: int
    usuarios_id: int
    total: Decimal
    adelanto: Decimal
    diferencia: Decimal
    estado: str
    es_adelanto: bool

    metodo_pago: Optional[str] = None
    tipo_precio: Optional[str] = None
    codigo_operacion: Optional[str] = None
    ultimos_digitos: Optional[str] = None
    comision_tarjeta: Optional[Decimal] = None
    total_con_comision: Optional[Decimal] = None

    agencia_encomienda: Optional[str] = None
    destino: Optional[str] = None
    contrasena: Optional[str] = None
    nombre_motorizado: Optional[str] = None
    placa_moto: Optional[str] = None

    clientes: Optional[ClienteResumen] = None
    usuarios: Optional[UsuarioResumen] = None
    detalles: Optional[List[DetalleVentaResponse]] = None

    @classmethod
    def from_venta(cls, venta, detalles: Optional[List[Any]] = None) -> "VentaResponse":
        datos: Dict[str, Any] = {
            columna: getattr(venta, columna)
            for columna in cls.model_fields
            if columna not in ("clientes", "usuarios", "detalles")
        }
        datos["clientes"] = ClienteResumen.model_validate(venta.cliente) if venta.cliente else None
        datos["usuarios"] = UsuarioResumen.model_validate(venta.usuario) if venta.usuario else None
        if detalles is not None:
            datos["detalles"] = [DetalleVentaResponse.from_detalle(d) for d in detalles]
        return cls(**datos)
