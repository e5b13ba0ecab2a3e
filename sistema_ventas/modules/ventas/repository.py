from sqlalchemy.orm import Session, joinedload
from typing import Any, Dict, List, Optional
from datetime import datetime
from decimal import Decimal

from sistema_ventas.core.errors import NotFoundError, ValidationError
from sistema_ventas.shared.database.models import Cliente, DetalleVenta, Usuario, Venta
from sistema_ventas.shared.parsing import is_blank, parse_decimal, parse_int
from sistema_ventas.modules.almacen.repository import AlmacenRepository

ESTADOS_VENTA = ["pendiente", "parcial", "pagada", "anulada"]

CAMPOS_TEXTO = (
    "metodo_pago", "tipo_precio", "codigo_operacion", "ultimos_digitos",
    "agencia_encomienda", "destino", "contrasena", "nombre_motorizado", "placa_moto"
)
CAMPOS_MONTO_OPCIONAL = ("comision_tarjeta", "total_con_comision")


def calcular_diferencia(total: Decimal, adelanto: Decimal) -> Decimal:
    return max(Decimal("0"), total - adelanto)


def estado_inicial(es_adelanto: bool, adelanto: Decimal) -> str:
    """Estado de una venta recién registrada"""
    if not es_adelanto:
        return "pagada"
    if adelanto == 0:
        return "pendiente"
    return "parcial"


class VentasRepository:
    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        return self.db.query(Venta).options(
            joinedload(Venta.cliente),
            joinedload(Venta.usuario)
        )

    def get_all(self) -> List[Venta]:
        """Ventas con resumen de cliente y vendedor, las más recientes primero"""
        return self._query().order_by(Venta.fecha.desc(), Venta.id.desc()).all()

    def get_by_id(self, venta_id: int) -> Optional[Venta]:
        return self._query().filter(Venta.id == venta_id).first()

    def _validate_refs(self, cliente_id: int, usuarios_id: int) -> None:
        if not self.db.query(Cliente.id).filter(Cliente.id == cliente_id).first():
            raise NotFoundError(f"No se encontró un cliente con el ID {cliente_id}.")
        if not self.db.query(Usuario.id).filter(Usuario.id == usuarios_id).first():
            raise NotFoundError(f"No se encontró un usuario con el ID {usuarios_id}.")

    def create(self, data: Dict[str, Any]) -> Venta:
        """Registrar la cabecera de la venta con diferencia y estado derivados"""
        requeridos = ("cliente_id", "usuarios_id", "total", "adelanto")
        if any(is_blank(data.get(campo)) for campo in requeridos):
            raise ValidationError("Los campos cliente_id, usuarios_id, total y adelanto son requeridos.")

        cliente_id = parse_int(data["cliente_id"], "El cliente_id debe ser un número entero.")
        usuarios_id = parse_int(data["usuarios_id"], "El usuarios_id debe ser un número entero.")
        total = parse_decimal(data["total"], "El total debe ser un número válido.")
        adelanto = parse_decimal(data["adelanto"], "El adelanto debe ser un número válido.")
        if total < 0 or adelanto < 0:
            raise ValidationError("El total y el adelanto no pueden ser negativos.")

        self._validate_refs(cliente_id, usuarios_id)

        es_adelanto = bool(data.get("es_adelanto"))
        venta = Venta(
            fecha=datetime.now(),
            cliente_id=cliente_id,
            usuarios_id=usuarios_id,
            total=total,
            adelanto=adelanto,
            diferencia=calcular_diferencia(total, adelanto),
            estado=estado_inicial(es_adelanto, adelanto),
            es_adelanto=es_adelanto
        )
        for campo in CAMPOS_TEXTO:
            setattr(venta, campo, data.get(campo))
        for campo in CAMPOS_MONTO_OPCIONAL:
            if not is_blank(data.get(campo)):
                setattr(venta, campo, parse_decimal(data[campo], f"El campo {campo} debe ser un número válido."))

        self.db.add(venta)
        self.db.commit()
        self.db.refresh(venta)
        return venta

    def update(self, venta_id: int, data: Dict[str, Any]) -> Venta:
        venta = self.get_by_id(venta_id)
        if not venta:
            raise NotFoundError(f"No se encontró una venta con el ID {venta_id}.")

        if not is_blank(data.get("cliente_id")) or not is_blank(data.get("usuarios_id")):
            cliente_id = venta.cliente_id
            usuarios_id = venta.usuarios_id
            if not is_blank(data.get("cliente_id")):
                cliente_id = parse_int(data["cliente_id"], "El cliente_id debe ser un número entero.")
            if not is_blank(data.get("usuarios_id")):
                usuarios_id = parse_int(data["usuarios_id"], "El usuarios_id debe ser un número entero.")
            self._validate_refs(cliente_id, usuarios_id)
            venta.cliente_id = cliente_id
            venta.usuarios_id = usuarios_id

        if data.get("estado") is not None:
            if data["estado"] not in ESTADOS_VENTA:
                raise ValidationError(
                    f"El estado de la venta debe ser uno de los siguientes: {', '.join(ESTADOS_VENTA)}."
                )
            venta.estado = data["estado"]

        if data.get("es_adelanto") is not None:
            venta.es_adelanto = bool(data["es_adelanto"])

        # La diferencia solo se recalcula cuando cambia el total o el adelanto
        if not is_blank(data.get("total")) or not is_blank(data.get("adelanto")):
            total = Decimal(venta.total)
            adelanto = Decimal(venta.adelanto)
            if not is_blank(data.get("total")):
                total = parse_decimal(data["total"], "El total debe ser un número válido.")
            if not is_blank(data.get("adelanto")):
                adelanto = parse_decimal(data["adelanto"], "El adelanto debe ser un número válido.")
            if total < 0 or adelanto < 0:
                raise ValidationError("El total y el adelanto no pueden ser negativos.")
            venta.total = total
            venta.adelanto = adelanto
            venta.diferencia = calcular_diferencia(total, adelanto)

        for campo in CAMPOS_TEXTO:
            if campo in data:
                setattr(venta, campo, data[campo])
        for campo in CAMPOS_MONTO_OPCIONAL:
            if campo in data:
                valor = data[campo]
                setattr(
                    venta, campo,
                    None if is_blank(valor) else parse_decimal(valor, f"El campo {campo} debe ser un número válido.")
                )

        self.db.commit()
        self.db.refresh(venta)
        return venta

    def set_pago(self, venta: Venta, adelanto: Decimal, diferencia: Decimal, estado: str) -> Venta:
        venta.adelanto = adelanto
        venta.diferencia = diferencia
        venta.estado = estado
        self.db.commit()
        self.db.refresh(venta)
        return venta

    def set_estado(self, venta: Venta, estado: str) -> Venta:
        venta.estado = estado
        self.db.commit()
        self.db.refresh(venta)
        return venta


class DetalleVentaRepository:
    """Líneas de venta; solo el gestor de ventas las crea"""

    def __init__(self, db: Session):
        self.db = db
        self.almacen = AlmacenRepository(db)

    def get_by_venta(self, venta_id: int) -> List[DetalleVenta]:
        return self.db.query(DetalleVenta).options(
            joinedload(DetalleVenta.producto)
        ).filter(DetalleVenta.venta_id == venta_id).order_by(DetalleVenta.id.asc()).all()

    def create(self, data: Dict[str, Any]) -> DetalleVenta:
        """
        Registrar una línea de venta.

        Primero se registra el egreso en almacén (que descuenta stock) y
        luego la línea. No es atómico: si la línea falla, el egreso ya quedó
        registrado.
        """
        requeridos = ("venta_id", "producto_id", "cantidad", "precio_unitario")
        if any(is_blank(data.get(campo)) for campo in requeridos):
            raise ValidationError(
                "Los campos venta_id, producto_id, cantidad y precio_unitario son requeridos."
            )

        venta_id = parse_int(data["venta_id"], "El venta_id debe ser un número entero.")
        cantidad = parse_int(data["cantidad"], "La cantidad debe ser un número positivo.")
        precio_unitario = parse_decimal(data["precio_unitario"], "El precio unitario debe ser un número válido.")

        if not self.db.query(Venta.id).filter(Venta.id == venta_id).first():
            raise NotFoundError(f"No se encontró una venta con el ID {venta_id}.")

        if is_blank(data.get("subtotal")):
            subtotal = cantidad * precio_unitario
        else:
            subtotal = parse_decimal(data["subtotal"], "El subtotal debe ser un número válido.")

        movimiento = self.almacen.create({
            "producto_id": data["producto_id"],
            "tipo_movimiento": "egreso",
            "cantidad": cantidad
        })

        detalle = DetalleVenta(
            venta_id=venta_id,
            producto_id=movimiento.producto_id,
            cantidad=cantidad,
            precio_unitario=precio_unitario,
            subtotal=subtotal
        )
        self.db.add(detalle)
        self.db.commit()
        self.db.refresh(detalle)
        return detalle
