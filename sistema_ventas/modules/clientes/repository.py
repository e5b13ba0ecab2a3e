from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from typing import Any, Dict, List, Optional

from sistema_ventas.core.errors import ConflictError, NotFoundError, ValidationError
from sistema_ventas.shared.database.models import Cliente
from sistema_ventas.shared.parsing import ENTERO_GRANDE_MAX, is_blank, parse_int

MENSAJE_DOCUMENTO_INVALIDO = "El documento debe ser un número válido."


class ClientesRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_all(self) -> List[Cliente]:
        """Todos los clientes ordenados por nombre"""
        return self.db.query(Cliente).order_by(Cliente.nombre.asc(), Cliente.id.asc()).all()

    def get_by_id(self, cliente_id: int) -> Optional[Cliente]:
        return self.db.query(Cliente).filter(Cliente.id == cliente_id).first()

    def get_by_document(self, documento: Any) -> Optional[Cliente]:
        """Buscar por documento; un documento no numérico simplemente no existe"""
        try:
            documento_numerico = parse_int(documento, MENSAJE_DOCUMENTO_INVALIDO, maximo=ENTERO_GRANDE_MAX)
        except ValidationError:
            return None
        return self.db.query(Cliente).filter(Cliente.documento == documento_numerico).first()

    def create(self, data: Dict[str, Any]) -> Cliente:
        nombre = (data.get("nombre") or "").strip()
        documento = data.get("documento")

        if not nombre or is_blank(documento):
            raise ValidationError("El nombre y el documento son requeridos.")

        documento_numerico = parse_int(documento, MENSAJE_DOCUMENTO_INVALIDO, maximo=ENTERO_GRANDE_MAX)

        if self.get_by_document(documento_numerico):
            raise ConflictError(f"Ya existe un cliente con el documento {documento_numerico}.")

        cliente = Cliente(
            nombre=nombre,
            documento=documento_numerico,
            telefono=data.get("telefono"),
            estado=True
        )
        self.db.add(cliente)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError(f"Ya existe un cliente con el documento {documento_numerico}.")
        self.db.refresh(cliente)
        return cliente

    def update(self, cliente_id: int, data: Dict[str, Any]) -> Cliente:
        cliente = self.get_by_id(cliente_id)
        if not cliente:
            raise NotFoundError(f"No se encontró un cliente con el ID {cliente_id}.")

        documento_numerico = None
        if not is_blank(data.get("documento")):
            documento_numerico = parse_int(data["documento"], MENSAJE_DOCUMENTO_INVALIDO, maximo=ENTERO_GRANDE_MAX)
            otro = self.get_by_document(documento_numerico)
            if otro and otro.id != cliente.id:
                raise ConflictError(f"El documento {documento_numerico} ya está en uso por otro cliente.")
            cliente.documento = documento_numerico

        if "nombre" in data:
            nombre = (data["nombre"] or "").strip()
            if not nombre:
                raise ValidationError("El nombre no puede estar vacío.")
            cliente.nombre = nombre

        if "telefono" in data:
            cliente.telefono = data["telefono"]

        if data.get("estado") is not None:
            cliente.estado = bool(data["estado"])

        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError(f"El documento {documento_numerico} ya está en uso por otro cliente.")
        self.db.refresh(cliente)
        return cliente

    def deactivate(self, cliente_id: int) -> Cliente:
        """Eliminar un cliente (soft delete)"""
        cliente = self.get_by_id(cliente_id)
        if not cliente:
            raise NotFoundError(f"No se encontró cliente con el id {cliente_id}")

        cliente.estado = False
        self.db.commit()
        self.db.refresh(cliente)
        return cliente
