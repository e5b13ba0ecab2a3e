from typing import Any, Dict, List, Optional
from decimal import Decimal
import logging

from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from sistema_ventas.core.auth.service import AuthService
from sistema_ventas.core.errors import (
    AuthError, AuthorizationError, ConflictError, DomainError, NotFoundError, ValidationError
)
from sistema_ventas.modules.usuarios.repository import UsuariosRepository
from sistema_ventas.shared.parsing import is_blank, parse_decimal
from sistema_ventas.shared.schemas.common import envelope, list_envelope
from .repository import VentasRepository, DetalleVentaRepository, calcular_diferencia
from .schemas import (
    AnulacionRequest, DetalleVentaCreate, DetalleVentaResponse, PagoRequest,
    VentaCreate, VentaResponse, VentaUpdate
)

logger = logging.getLogger(__name__)

ESTADOS_PAGABLES = ("pendiente", "parcial")


class VentasService:
    """
    Ciclo de vida de una venta.

    Estados:
      - pendiente / parcial / pagada al registrarse (según es_adelanto y adelanto)
      - pendiente o parcial -> pagada cuando un pago cubre el total
      - pendiente o parcial -> pendiente cuando el pago no cubre el total
      - cualquiera -> anulada con credenciales de administrador
    """

    def __init__(self, db: Session, auth_service: Optional[AuthService] = None):
        self.db = db
        self.auth_service = auth_service
        self.repository = VentasRepository(db)
        self.detalles = DetalleVentaRepository(db)

    def _get_or_404(self, venta_id: int):
        venta = self.repository.get_by_id(venta_id)
        if not venta:
            raise NotFoundError(f"No se encontró una venta con el ID {venta_id}.")
        return venta

    async def list_ventas(self) -> Dict[str, Any]:
        ventas = self.repository.get_all()
        return list_envelope([VentaResponse.from_venta(v) for v in ventas])

    async def get_venta(self, venta_id: int) -> Dict[str, Any]:
        venta = self._get_or_404(venta_id)

        try:
            detalles = self.detalles.get_by_venta(venta_id)
        except SQLAlchemyError as e:
            # La venta se devuelve igual aunque no se puedan leer sus líneas
            logger.error(f"❌ Error obteniendo detalles de la venta {venta_id}: {str(e)}")
            self.db.rollback()
            detalles = []

        return envelope(data=VentaResponse.from_venta(venta, detalles))

    async def create_venta(self, venta_data: VentaCreate) -> Dict[str, Any]:
        """
        Registrar venta y luego cada item como línea con egreso de stock.

        Un item que falla se registra en el log y se omite; la venta queda
        registrada con las líneas que sí se pudieron crear.
        """
        datos = venta_data.dict(exclude={"items"})
        venta = self.repository.create(datos)
        logger.info(f"✅ Venta registrada: ID {venta.id}, total {venta.total}, estado {venta.estado}")

        fallidos = 0
        for item in venta_data.items:
            linea = item.dict()
            linea["venta_id"] = venta.id
            try:
                self.detalles.create(linea)
            except (DomainError, SQLAlchemyError) as e:
                self.db.rollback()
                fallidos += 1
                logger.warning(
                    f"⚠️ No se pudo registrar el item {linea.get('producto_id')} "
                    f"de la venta {venta.id}: {str(e)}"
                )

        self.db.refresh(venta)
        detalles = self.detalles.get_by_venta(venta.id)

        return envelope(
            data=VentaResponse.from_venta(venta, detalles),
            message="Venta registrada correctamente.",
            detalles_fallidos=fallidos or None
        )

    async def update_venta(self, venta_id: int, update_data: VentaUpdate) -> Dict[str, Any]:
        venta = self.repository.update(venta_id, update_data.dict(exclude_unset=True))
        return envelope(
            data=VentaResponse.from_venta(venta),
            message=f"Venta con ID {venta_id} actualizada."
        )

    async def marcar_pagada(self, venta_id: int, pago: PagoRequest) -> Dict[str, Any]:
        """Aplicar un pago al saldo de la venta"""
        venta = self._get_or_404(venta_id)

        if venta.estado not in ESTADOS_PAGABLES:
            raise ConflictError(
                f"La venta con ID {venta_id} está en estado '{venta.estado}' y no admite pagos."
            )

        mensaje = "El monto debe ser un número positivo."
        if is_blank(pago.monto):
            raise ValidationError(mensaje)
        monto = parse_decimal(pago.monto, mensaje)
        if monto <= 0:
            raise ValidationError(mensaje)

        total = Decimal(venta.total)
        adelanto = min(total, Decimal(venta.adelanto) + monto)
        # Un pago que no cubre el total deja la venta en 'pendiente', no en 'parcial'
        estado = "pagada" if adelanto >= total else "pendiente"

        venta = self.repository.set_pago(venta, adelanto, calcular_diferencia(total, adelanto), estado)
        logger.info(f"💰 Pago de {monto} aplicado a la venta {venta_id}: estado {estado}")

        mensaje_ok = "Venta marcada como pagada." if estado == "pagada" else "Pago registrado correctamente."
        return envelope(data=VentaResponse.from_venta(venta), message=mensaje_ok)

    async def anular_venta(self, venta_id: int, credenciales: AnulacionRequest) -> Dict[str, Any]:
        """Anular una venta tras verificar credenciales de administrador"""
        if not credenciales.usuario or not credenciales.contrasena:
            raise ValidationError("Usuario y contraseña de administrador son requeridos.")

        venta = self._get_or_404(venta_id)

        usuarios = UsuariosRepository(self.db, self.auth_service)
        usuario = usuarios.get_by_login(credenciales.usuario)

        if (
            usuario is None
            or not usuario.estado
            or not self.auth_service.verify_password(credenciales.contrasena, usuario.contrasena)
        ):
            raise AuthError("Credenciales de administrador inválidas.")

        if usuario.tipo != "admin":
            raise AuthorizationError("Solo un administrador puede anular ventas.")

        venta = self.repository.set_estado(venta, "anulada")
        logger.warning(f"🚫 Venta {venta_id} anulada por {usuario.usuario}")

        return envelope(
            data=VentaResponse.from_venta(venta),
            message=f"Venta con ID {venta_id} anulada correctamente."
        )

    # ==================== DETALLES ====================

    async def list_detalles(self, venta_id: int) -> Dict[str, Any]:
        detalles = self.detalles.get_by_venta(venta_id)
        return list_envelope([DetalleVentaResponse.from_detalle(d) for d in detalles])

    async def create_detalle(self, detalle_data: DetalleVentaCreate) -> Dict[str, Any]:
        detalle = self.detalles.create(detalle_data.dict())
        logger.info(
            f"🧾 Detalle registrado en venta {detalle.venta_id}: "
            f"producto {detalle.producto_id} x{detalle.cantidad}"
        )
        return envelope(
            data=DetalleVentaResponse.from_detalle(detalle),
            message="Detalle de venta registrado y stock actualizado."
        )
