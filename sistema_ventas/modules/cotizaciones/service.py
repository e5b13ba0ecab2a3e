from typing import Any, Dict, List
from decimal import Decimal
import logging

from sqlalchemy.orm import Session

from sistema_ventas.core.errors import ConflictError, ValidationError
from sistema_ventas.shared.database.models import Cotizacion, Usuario
from sistema_ventas.shared.schemas.common import envelope, list_envelope
from .repository import CotizacionesRepository
from .schemas import (
    ConversionRequest, CotizacionConItems, CotizacionCreate, CotizacionItemResponse,
    CotizacionResponse, CotizacionUpdate, DetalleReemplazo, ItemDetallado, ProductoInfo
)

logger = logging.getLogger(__name__)


class CotizacionesService:
    """Cotizaciones: borradores de venta que no comprometen stock"""

    def __init__(self, db: Session):
        self.db = db
        self.repository = CotizacionesRepository(db)

    async def list_cotizaciones(self) -> Dict[str, Any]:
        cotizaciones = self.repository.get_all()
        return list_envelope([CotizacionResponse.model_validate(c) for c in cotizaciones])

    async def get_cotizacion(self, cotizacion_id: int) -> Dict[str, Any]:
        cotizacion = self.repository.get_or_404(cotizacion_id)
        return envelope(data=CotizacionConItems.model_validate(cotizacion))

    async def create_cotizacion(self, cotizacion_data: CotizacionCreate, current_user: Usuario) -> Dict[str, Any]:
        datos = cotizacion_data.dict()
        datos["items"] = [item.dict() for item in cotizacion_data.items or []]
        cotizacion = self.repository.create(datos, creado_por=current_user.id)
        logger.info(f"✅ Cotización creada exitosamente: {cotizacion.id} por {current_user.usuario}")
        return envelope(
            data=CotizacionConItems.model_validate(cotizacion),
            message="Cotización creada exitosamente"
        )

    async def update_cotizacion(self, cotizacion_id: int, update_data: CotizacionUpdate) -> Dict[str, Any]:
        cotizacion = self.repository.update(cotizacion_id, update_data.dict(exclude_unset=True))
        return envelope(
            data=CotizacionResponse.model_validate(cotizacion),
            message="Cotización actualizada exitosamente"
        )

    async def replace_detalle(self, cotizacion_id: int, reemplazo: DetalleReemplazo) -> Dict[str, Any]:
        datos = reemplazo.dict()
        datos["items"] = [item.dict() for item in reemplazo.items or []]
        cotizacion = self.repository.replace_items(cotizacion_id, datos)
        return envelope(
            data=CotizacionConItems.model_validate(cotizacion),
            message="Detalle de cotización actualizado correctamente"
        )

    async def delete_cotizacion(self, cotizacion_id: int) -> Dict[str, Any]:
        self.repository.delete(cotizacion_id)
        logger.info(f"🗑️ Cotización eliminada: {cotizacion_id}")
        return envelope(message="Cotización eliminada exitosamente")

    async def get_detalle_completo(self, cotizacion_id: int) -> Dict[str, Any]:
        """Cotización, items con datos del producto y resumen de cantidades"""
        cotizacion = self.repository.get_or_404(cotizacion_id)
        productos = self.repository.get_productos(
            [item.producto_id for item in cotizacion.items if item.producto_id is not None]
        )

        detalle = []
        for item in cotizacion.items:
            producto = productos.get(item.producto_id)
            detalle.append(ItemDetallado(
                **CotizacionItemResponse.model_validate(item).model_dump(),
                producto_codigo=producto.codigo if producto else "N/A",
                producto_info=ProductoInfo.model_validate(producto) if producto else None
            ))

        resumen = {
            "total_items": len(cotizacion.items),
            "cantidad_total": sum(item.cantidad for item in cotizacion.items),
            "total_productos": float(sum((Decimal(item.subtotal) for item in cotizacion.items), Decimal("0"))),
            "total": float(cotizacion.total),
            "total_con_comision": float(cotizacion.total_con_comision) if cotizacion.total_con_comision is not None else None
        }

        return envelope(data={
            "cotizacion": CotizacionResponse.model_validate(cotizacion),
            "productos": detalle,
            "resumen": resumen
        })

    def _preparar(self, cotizacion: Cotizacion) -> Dict[str, Any]:
        if cotizacion.estado == "convertida_venta":
            raise ConflictError("Esta cotización ya fue convertida a venta")

        productos = self.repository.get_productos(
            [item.producto_id for item in cotizacion.items if item.producto_id is not None]
        )

        alertas: List[Dict[str, Any]] = []
        for item in cotizacion.items:
            producto = productos.get(item.producto_id)
            if producto and producto.stock < item.cantidad:
                alertas.append({
                    "producto_id": item.producto_id,
                    "producto_nombre": item.producto_nombre,
                    "cantidad_requerida": item.cantidad,
                    "stock_actual": producto.stock,
                    "faltante": item.cantidad - producto.stock
                })

        datos_venta = {
            "cliente_id": cotizacion.cliente_id,
            "cliente_nombre": cotizacion.cliente_nombre,
            "cliente_documento": cotizacion.cliente_documento,
            "metodo_pago": cotizacion.metodo_pago,
            "codigo_operacion": cotizacion.codigo_operacion,
            "ultimos_digitos": cotizacion.ultimos_digitos,
            "comision_tarjeta": cotizacion.comision_tarjeta,
            "es_adelanto": cotizacion.es_adelanto,
            "monto_adelanto": cotizacion.monto_adelanto,
            "saldo_pendiente": cotizacion.saldo_pendiente,
            "tipo_precio": cotizacion.tipo_precio,
            "es_envio_encomienda": cotizacion.es_envio_encomienda,
            "empresa_encomienda": cotizacion.empresa_encomienda,
            "destino_encomienda": cotizacion.destino_encomienda,
            "es_envio_motorizado": cotizacion.es_envio_motorizado,
            "nombre_motorizado": cotizacion.nombre_motorizado,
            "placa_moto": cotizacion.placa_moto,
            "total": cotizacion.total,
            "total_con_comision": cotizacion.total_con_comision,
            "items": [
                {
                    "producto_id": item.producto_id,
                    "producto_nombre": item.producto_nombre,
                    "cantidad": item.cantidad,
                    "precio_unitario": item.precio_unitario,
                    "subtotal": item.subtotal
                }
                for item in cotizacion.items
            ],
            "cotizacion_origen_id": cotizacion.id,
            "fecha_cotizacion": cotizacion.fecha_creacion,
            "observaciones_cotizacion": cotizacion.observaciones
        }

        return {
            "cotizacion_id": cotizacion.id,
            "puede_convertir": len(alertas) == 0,
            "alertas_stock": alertas,
            "datos_venta": datos_venta
        }

    async def preparar_venta(self, cotizacion_id: int) -> Dict[str, Any]:
        """Verificar stock y armar los datos de la venta sin registrarla"""
        preparacion = self._preparar(self.repository.get_or_404(cotizacion_id))
        alertas = preparacion["alertas_stock"]
        mensaje = (
            f"Hay {len(alertas)} productos con stock insuficiente"
            if alertas else "Cotización lista para convertir a venta"
        )
        return envelope(data=preparacion, message=mensaje)

    async def convertir_venta(self, cotizacion_id: int, conversion: ConversionRequest, current_user: Usuario) -> Dict[str, Any]:
        """
        Marcar la cotización como convertida.

        Devuelve los datos de venta calculados; la venta no se registra aquí.
        """
        cotizacion = self.repository.get_or_404(cotizacion_id)
        preparacion = self._preparar(cotizacion)

        if not preparacion["puede_convertir"] and not conversion.forzar_conversion:
            raise ValidationError(
                "Hay productos con stock insuficiente. Use forzar_conversion=true para proceder de todos modos.",
                extra={"alertas_stock": preparacion["alertas_stock"]}
            )

        self.repository.set_estado(cotizacion, "convertida_venta")
        logger.info(f"✅ Cotización {cotizacion_id} convertida a venta por usuario {current_user.id}")

        return envelope(
            data={
                "cotizacion_id": cotizacion_id,
                "datos_venta": preparacion["datos_venta"],
                "alertas_procesadas": preparacion["alertas_stock"]
            },
            message="Cotización convertida a venta exitosamente"
        )

    async def get_estadisticas(self) -> Dict[str, Any]:
        return envelope(data=self.repository.get_stats())
