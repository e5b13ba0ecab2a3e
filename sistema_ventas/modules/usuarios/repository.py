from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from typing import Any, Dict, List, Optional

from sistema_ventas.core.auth.service import AuthService
from sistema_ventas.core.errors import ConflictError, NotFoundError, ValidationError
from sistema_ventas.shared.database.models import Usuario, Venta

TIPOS_VALIDOS = ["admin", "vendedor"]


def validate_tipo(tipo: Any) -> None:
    if tipo not in TIPOS_VALIDOS:
        raise ValidationError(
            f"El tipo de usuario debe ser uno de los siguientes: {', '.join(TIPOS_VALIDOS)}."
        )


class UsuariosRepository:
    def __init__(self, db: Session, auth_service: AuthService):
        self.db = db
        self.auth_service = auth_service

    def get_all(self) -> List[Usuario]:
        return self.db.query(Usuario).order_by(Usuario.id.asc()).all()

    def get_by_id(self, usuario_id: int) -> Optional[Usuario]:
        return self.db.query(Usuario).filter(Usuario.id == usuario_id).first()

    def get_by_login(self, usuario: str) -> Optional[Usuario]:
        """Fila completa (incluye hash) para comparar credenciales"""
        return self.db.query(Usuario).filter(Usuario.usuario == usuario).first()

    def create(self, data: Dict[str, Any]) -> Usuario:
        nombre = data.get("nombre")
        usuario = data.get("usuario")
        contrasena = data.get("contrasena")
        tipo = data.get("tipo")

        if not nombre or not usuario or not contrasena or not tipo:
            raise ValidationError("Todos los campos son requeridos: nombre, usuario, contraseña y tipo.")

        validate_tipo(tipo)

        if self.get_by_login(usuario):
            raise ConflictError(f"El nombre de usuario '{usuario}' ya está en uso.")

        nuevo = Usuario(
            nombre=nombre,
            usuario=usuario,
            contrasena=self.auth_service.get_password_hash(contrasena),
            tipo=tipo,
            estado=True
        )
        self.db.add(nuevo)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError(f"El nombre de usuario '{usuario}' ya está en uso.")
        self.db.refresh(nuevo)
        return nuevo

    def update(self, usuario_id: int, data: Dict[str, Any]) -> Usuario:
        if data.get("tipo"):
            validate_tipo(data["tipo"])

        existente = self.get_by_id(usuario_id)
        if not existente:
            raise NotFoundError(f"No se encontró un usuario con el ID {usuario_id}.")

        nuevo_login = data.get("usuario")
        if nuevo_login and nuevo_login != existente.usuario:
            otro = self.get_by_login(nuevo_login)
            if otro and otro.id != existente.id:
                raise ConflictError(f"El nombre de usuario '{nuevo_login}' ya está en uso.")
            existente.usuario = nuevo_login

        if data.get("nombre"):
            existente.nombre = data["nombre"]
        if data.get("tipo"):
            existente.tipo = data["tipo"]
        if data.get("estado") is not None:
            existente.estado = bool(data["estado"])

        # La contraseña solo se vuelve a cifrar si llega una nueva
        if data.get("contrasena"):
            existente.contrasena = self.auth_service.get_password_hash(data["contrasena"])

        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError(f"El nombre de usuario '{nuevo_login}' ya está en uso.")
        self.db.refresh(existente)
        return existente

    def delete(self, usuario_id: int) -> Usuario:
        """Eliminación definitiva (único caso de hard delete)"""
        existente = self.get_by_id(usuario_id)
        if not existente:
            raise NotFoundError(f"No se encontró un usuario con el ID {usuario_id}.")

        mensaje = "No se puede eliminar el usuario porque tiene ventas registradas."
        if self.db.query(Venta.id).filter(Venta.usuarios_id == usuario_id).first():
            raise ConflictError(mensaje)

        self.db.delete(existente)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError(mensaje)
        return existente
