from sqlalchemy.orm import Session, joinedload
from typing import Any, Dict, List, Optional
from datetime import datetime

from sistema_ventas.core.errors import NotFoundError, ValidationError
from sistema_ventas.shared.database.models import MovimientoAlmacen, Producto
from sistema_ventas.shared.parsing import is_blank, parse_int

TIPOS_MOVIMIENTO = ["ingreso", "egreso"]


class AlmacenRepository:
    """Libro de movimientos: solo lectura e inserción"""

    def __init__(self, db: Session):
        self.db = db

    def get_all(self) -> List[MovimientoAlmacen]:
        return self.db.query(MovimientoAlmacen).options(
            joinedload(MovimientoAlmacen.producto)
        ).order_by(MovimientoAlmacen.fecha.desc(), MovimientoAlmacen.id.desc()).all()

    def get_by_id(self, movimiento_id: int) -> Optional[MovimientoAlmacen]:
        return self.db.query(MovimientoAlmacen).options(
            joinedload(MovimientoAlmacen.producto)
        ).filter(MovimientoAlmacen.id == movimiento_id).first()

    def create(self, data: Dict[str, Any]) -> MovimientoAlmacen:
        """
        Registrar un movimiento y aplicarlo al stock del producto.

        El movimiento y el nuevo stock se guardan en el mismo commit.
        """
        producto_id = data.get("producto_id")
        tipo_movimiento = data.get("tipo_movimiento")
        cantidad = data.get("cantidad")

        if is_blank(producto_id) or not tipo_movimiento or is_blank(cantidad):
            raise ValidationError("Los campos producto_id, tipo_movimiento y cantidad son requeridos.")

        if tipo_movimiento not in TIPOS_MOVIMIENTO:
            raise ValidationError(
                f"El tipo de movimiento debe ser uno de los siguientes: {', '.join(TIPOS_MOVIMIENTO)}."
            )

        cantidad = parse_int(cantidad, "La cantidad debe ser un número positivo.")
        if cantidad <= 0:
            raise ValidationError("La cantidad debe ser un número positivo.")

        producto_id = parse_int(producto_id, "El producto_id debe ser un número entero.")
        producto = self.db.query(Producto).filter(Producto.id == producto_id).first()
        if not producto:
            raise NotFoundError(f"No se encontró un producto con el ID {producto_id}.")

        if tipo_movimiento == "egreso":
            if producto.stock < cantidad:
                raise ValidationError(
                    f"Stock insuficiente para el producto {producto.codigo}. "
                    f"Disponible: {producto.stock}, solicitado: {cantidad}."
                )
            producto.stock -= cantidad
        else:
            producto.stock += cantidad

        movimiento = MovimientoAlmacen(
            producto_id=producto.id,
            tipo_movimiento=tipo_movimiento,
            cantidad=cantidad,
            fecha=datetime.now()
        )
        self.db.add(movimiento)
        self.db.commit()
        self.db.refresh(movimiento)
        return movimiento
