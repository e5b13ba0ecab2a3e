from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from sqlalchemy import or_
from typing import Any, Dict, List, Optional

from sistema_ventas.core.errors import ConflictError, NotFoundError, ValidationError
from sistema_ventas.shared.database.models import Producto
from sistema_ventas.shared.parsing import is_blank, parse_int, parse_optional_price

CAMPOS_PRECIO = ("pre_compra", "pre_especial", "pre_por_mayor", "pre_general")
LIMITE_BUSQUEDA = 50


class ProductosRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_all(self) -> List[Producto]:
        """Todos los productos ordenados por descripción"""
        return self.db.query(Producto).order_by(Producto.descripcion.asc(), Producto.id.asc()).all()

    def search(self, term: Optional[str]) -> List[Producto]:
        """Buscar por descripción o código (sin distinguir mayúsculas)"""
        if term is None or term.strip() == "":
            return self.get_all()

        pattern = f"%{term.strip()}%"
        return self.db.query(Producto).filter(
            or_(
                Producto.descripcion.ilike(pattern),
                Producto.codigo.ilike(pattern)
            )
        ).order_by(Producto.descripcion.asc(), Producto.id.asc()).limit(LIMITE_BUSQUEDA).all()

    def get_by_id(self, producto_id: int) -> Optional[Producto]:
        return self.db.query(Producto).filter(Producto.id == producto_id).first()

    def get_by_code(self, codigo: str) -> Optional[Producto]:
        return self.db.query(Producto).filter(Producto.codigo == codigo).first()

    def create(self, data: Dict[str, Any]) -> Producto:
        """Crear producto validando código único y stock no negativo"""
        codigo = (data.get("codigo") or "").strip()
        descripcion = (data.get("descripcion") or "").strip()

        if not codigo or not descripcion:
            raise ValidationError("El código y la descripción son requeridos.")

        stock = 0
        if not is_blank(data.get("stock")):
            stock = parse_int(data["stock"], "El stock debe ser un número entero.")
        if stock < 0:
            raise ValidationError("El stock debe ser mayor o igual a 0.")

        precios = {campo: parse_optional_price(data.get(campo), campo) for campo in CAMPOS_PRECIO}

        if self.get_by_code(codigo):
            raise ConflictError(f"Ya existe un producto con el código {codigo}.")

        producto = Producto(
            codigo=codigo,
            descripcion=descripcion,
            stock=stock,
            estado=True,
            **precios
        )
        self.db.add(producto)
        try:
            self.db.commit()
        except IntegrityError:
            # Otra petición insertó el mismo código entre la verificación y el insert
            self.db.rollback()
            raise ConflictError(f"Ya existe un producto con el código {codigo}.")
        self.db.refresh(producto)
        return producto

    def update(self, producto_id: int, data: Dict[str, Any]) -> Producto:
        """Actualizar solo los campos enviados"""
        producto = self.get_by_id(producto_id)
        if not producto:
            raise NotFoundError(f"No se encontró un producto con el ID {producto_id}.")

        if "codigo" in data:
            codigo = (data["codigo"] or "").strip()
            if not codigo:
                raise ValidationError("El código no puede estar vacío.")
            otro = self.get_by_code(codigo)
            if otro and otro.id != producto.id:
                raise ConflictError(f"El código {codigo} ya está en uso por otro producto.")
            producto.codigo = codigo

        if "descripcion" in data:
            descripcion = (data["descripcion"] or "").strip()
            if not descripcion:
                raise ValidationError("La descripción no puede estar vacía.")
            producto.descripcion = descripcion

        for campo in CAMPOS_PRECIO:
            if campo in data:
                setattr(producto, campo, parse_optional_price(data[campo], campo))

        if data.get("estado") is not None:
            producto.estado = bool(data["estado"])

        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError(f"El código {data.get('codigo')} ya está en uso por otro producto.")
        self.db.refresh(producto)
        return producto

    def deactivate(self, producto_id: int) -> Producto:
        """Eliminar un producto (soft delete)"""
        producto = self.get_by_id(producto_id)
        if not producto:
            raise NotFoundError(f"No se encontró producto con el id {producto_id}")

        producto.estado = False
        self.db.commit()
        self.db.refresh(producto)
        return producto
