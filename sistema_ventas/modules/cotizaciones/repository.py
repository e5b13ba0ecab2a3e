from sqlalchemy.orm import Session, selectinload
from sqlalchemy import func
from typing import Any, Dict, List, Optional
from datetime import datetime
from decimal import Decimal

from sistema_ventas.core.errors import ConflictError, NotFoundError, ValidationError
from sistema_ventas.shared.database.models import Cotizacion, CotizacionDetalle, Producto
from sistema_ventas.shared.parsing import is_blank, parse_decimal, parse_int

ESTADOS_COTIZACION = ["pendiente", "aprobada", "convertida_venta"]

# Campos de cabecera que nunca se actualizan
CAMPOS_PROTEGIDOS = ("id", "fecha_creacion", "creado_por")

CAMPOS_MONTO = ("comision_tarjeta", "monto_adelanto", "saldo_pendiente", "total", "total_con_comision")
CAMPOS_BOOLEANOS = ("es_adelanto", "es_envio_encomienda", "es_envio_motorizado")


def _monto_opcional(value: Any, field: str) -> Optional[Decimal]:
    if is_blank(value):
        return None
    return parse_decimal(value, f"El campo {field} debe ser un número válido.")


def _id_opcional(value: Any) -> Optional[int]:
    """Id opcional: vacío o no numérico se guarda como NULL"""
    if is_blank(value):
        return None
    try:
        return parse_int(value, "")
    except ValidationError:
        return None


class CotizacionesRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_all(self) -> List[Cotizacion]:
        return self.db.query(Cotizacion).order_by(
            Cotizacion.fecha_creacion.desc(), Cotizacion.id.desc()
        ).all()

    def get_by_id(self, cotizacion_id: int) -> Optional[Cotizacion]:
        return self.db.query(Cotizacion).options(
            selectinload(Cotizacion.items)
        ).filter(Cotizacion.id == cotizacion_id).first()

    def get_or_404(self, cotizacion_id: int) -> Cotizacion:
        cotizacion = self.get_by_id(cotizacion_id)
        if not cotizacion:
            raise NotFoundError("Cotización no encontrada")
        return cotizacion

    def get_productos(self, producto_ids: List[int]) -> Dict[int, Producto]:
        if not producto_ids:
            return {}
        productos = self.db.query(Producto).filter(Producto.id.in_(producto_ids)).all()
        return {p.id: p for p in productos}

    def _build_items(self, items: Optional[List[Dict[str, Any]]]) -> List[CotizacionDetalle]:
        if not items:
            raise ValidationError("Los items de la cotización son requeridos")

        ahora = datetime.now()
        detalle = []
        for item in items:
            if is_blank(item.get("cantidad")) or is_blank(item.get("precio_unitario")):
                raise ValidationError("Cada item requiere cantidad y precio_unitario.")
            cantidad = parse_int(item["cantidad"], "La cantidad de cada item debe ser un número entero.")
            precio = parse_decimal(item["precio_unitario"], "El precio unitario debe ser un número válido.")
            subtotal = _monto_opcional(item.get("subtotal"), "subtotal")
            detalle.append(CotizacionDetalle(
                producto_id=_id_opcional(item.get("producto_id")),
                producto_nombre=item.get("producto_nombre"),
                cantidad=cantidad,
                precio_unitario=precio,
                subtotal=subtotal if subtotal is not None else cantidad * precio,
                fecha_creacion=ahora
            ))
        return detalle

    def create(self, data: Dict[str, Any], creado_por: int) -> Cotizacion:
        """Cabecera y detalle se guardan en un solo commit"""
        items = self._build_items(data.get("items"))

        if is_blank(data.get("total")):
            raise ValidationError("El total debe ser mayor a 0")
        total = parse_decimal(data["total"], "El total debe ser mayor a 0")
        if total <= 0:
            raise ValidationError("El total debe ser mayor a 0")

        total_con_comision = _monto_opcional(data.get("total_con_comision"), "total_con_comision")
        cliente_documento = data.get("cliente_documento")

        cotizacion = Cotizacion(
            cliente_id=_id_opcional(data.get("cliente_id")),
            cliente_nombre=data.get("cliente_nombre") or None,
            cliente_documento=str(cliente_documento) if cliente_documento else None,
            metodo_pago=data.get("metodo_pago") or "efectivo",
            codigo_operacion=data.get("codigo_operacion") or None,
            ultimos_digitos=data.get("ultimos_digitos") or None,
            comision_tarjeta=_monto_opcional(data.get("comision_tarjeta"), "comision_tarjeta") or 0,
            es_adelanto=bool(data.get("es_adelanto")),
            monto_adelanto=_monto_opcional(data.get("monto_adelanto"), "monto_adelanto"),
            saldo_pendiente=_monto_opcional(data.get("saldo_pendiente"), "saldo_pendiente"),
            tipo_precio=data.get("tipo_precio") or "general",
            es_envio_encomienda=bool(data.get("es_envio_encomienda")),
            empresa_encomienda=data.get("empresa_encomienda") or None,
            destino_encomienda=data.get("destino_encomienda") or None,
            es_envio_motorizado=bool(data.get("es_envio_motorizado")),
            nombre_motorizado=data.get("nombre_motorizado") or None,
            placa_moto=data.get("placa_moto") or None,
            total_items=parse_int(data.get("total_items") or 0, "El total de items debe ser un número entero."),
            total=total,
            total_con_comision=total_con_comision if total_con_comision is not None else total,
            estado="pendiente",
            observaciones=data.get("observaciones") or None,
            creado_por=creado_por,
            fecha_creacion=datetime.now(),
            items=items
        )
        self.db.add(cotizacion)
        self.db.commit()
        self.db.refresh(cotizacion)
        return cotizacion

    def update(self, cotizacion_id: int, data: Dict[str, Any]) -> Cotizacion:
        cotizacion = self.get_or_404(cotizacion_id)

        for campo in CAMPOS_PROTEGIDOS:
            data.pop(campo, None)

        if "estado" in data and data["estado"] not in ESTADOS_COTIZACION:
            raise ValidationError(
                f"El estado de la cotización debe ser uno de los siguientes: {', '.join(ESTADOS_COTIZACION)}."
            )

        for campo, valor in data.items():
            if campo in CAMPOS_MONTO:
                valor = _monto_opcional(valor, campo)
                if campo == "total" and valor is None:
                    raise ValidationError("El total debe ser mayor a 0")
                if campo == "comision_tarjeta" and valor is None:
                    valor = 0
            elif campo in CAMPOS_BOOLEANOS:
                valor = bool(valor)
            elif campo == "cliente_id":
                valor = _id_opcional(valor)
            elif campo == "cliente_documento":
                valor = str(valor) if valor else None
            elif campo in ("metodo_pago", "tipo_precio") and not valor:
                continue
            elif campo == "total_items":
                valor = parse_int(valor or 0, "El total de items debe ser un número entero.")
            setattr(cotizacion, campo, valor)

        cotizacion.fecha_actualizacion = datetime.now()
        self.db.commit()
        self.db.refresh(cotizacion)
        return cotizacion

    def replace_items(self, cotizacion_id: int, data: Dict[str, Any]) -> Cotizacion:
        """Reemplazar el detalle completo y, si vienen, los totales"""
        items = self._build_items(data.get("items"))
        cotizacion = self.get_or_404(cotizacion_id)

        # delete-orphan elimina las líneas anteriores
        cotizacion.items = items

        if not is_blank(data.get("total")):
            cotizacion.total = parse_decimal(data["total"], "El campo total debe ser un número válido.")
        if not is_blank(data.get("total_items")):
            cotizacion.total_items = parse_int(data["total_items"], "El total de items debe ser un número entero.")
        if not is_blank(data.get("total_con_comision")):
            cotizacion.total_con_comision = parse_decimal(
                data["total_con_comision"], "El campo total_con_comision debe ser un número válido."
            )
        cotizacion.fecha_actualizacion = datetime.now()

        self.db.commit()
        self.db.refresh(cotizacion)
        return cotizacion

    def delete(self, cotizacion_id: int) -> None:
        cotizacion = self.get_or_404(cotizacion_id)
        if cotizacion.estado == "convertida_venta":
            raise ConflictError("No se puede eliminar una cotización que ya fue convertida a venta")

        self.db.delete(cotizacion)
        self.db.commit()

    def set_estado(self, cotizacion: Cotizacion, estado: str) -> Cotizacion:
        cotizacion.estado = estado
        cotizacion.fecha_actualizacion = datetime.now()
        self.db.commit()
        self.db.refresh(cotizacion)
        return cotizacion

    def get_stats(self) -> Dict[str, Any]:
        """Conteo por estado y valor total de todas las cotizaciones"""
        filas = self.db.query(
            Cotizacion.estado,
            func.count(Cotizacion.id).label("cantidad"),
            func.coalesce(func.sum(Cotizacion.total), 0).label("valor")
        ).group_by(Cotizacion.estado).all()

        por_estado = {fila.estado: fila.cantidad for fila in filas}
        return {
            "total_cotizaciones": sum(por_estado.values()),
            "pendientes": por_estado.get("pendiente", 0),
            "aprobadas": por_estado.get("aprobada", 0),
            "convertidas": por_estado.get("convertida_venta", 0),
            "valor_total": float(sum(Decimal(str(fila.valor)) for fila in filas))
        }
