from typing import Any, Dict
import logging

from sqlalchemy.orm import Session

from sistema_ventas.core.auth.service import AuthService
from sistema_ventas.core.errors import NotFoundError
from sistema_ventas.shared.schemas.common import envelope, list_envelope
from .repository import UsuariosRepository
from .schemas import UsuarioCreate, UsuarioUpdate, UsuarioResponse

logger = logging.getLogger(__name__)


class UsuariosService:
    def __init__(self, db: Session, auth_service: AuthService):
        self.db = db
        self.repository = UsuariosRepository(db, auth_service)

    async def list_usuarios(self) -> Dict[str, Any]:
        usuarios = self.repository.get_all()
        return list_envelope([UsuarioResponse.model_validate(u) for u in usuarios])

    async def get_usuario(self, usuario_id: int) -> Dict[str, Any]:
        usuario = self.repository.get_by_id(usuario_id)
        if not usuario:
            raise NotFoundError(f"No se encontró un usuario con el ID {usuario_id}.")
        return envelope(data=UsuarioResponse.model_validate(usuario))

    async def create_usuario(self, usuario_data: UsuarioCreate) -> Dict[str, Any]:
        usuario = self.repository.create(usuario_data.dict())
        logger.info(f"👤 Usuario creado: {usuario.usuario} ({usuario.tipo})")
        return envelope(
            data=UsuarioResponse.model_validate(usuario),
            message="Usuario creado correctamente."
        )

    async def update_usuario(self, usuario_id: int, update_data: UsuarioUpdate) -> Dict[str, Any]:
        usuario = self.repository.update(usuario_id, update_data.dict(exclude_unset=True))
        return envelope(
            data=UsuarioResponse.model_validate(usuario),
            message=f"Usuario con ID {usuario_id} actualizado."
        )

    async def delete_usuario(self, usuario_id: int) -> Dict[str, Any]:
        usuario = self.repository.delete(usuario_id)
        logger.info(f"🗑️ Usuario eliminado: {usuario.usuario}")
        return envelope(
            data=UsuarioResponse.model_validate(usuario),
            message=f"Usuario con ID {usuario_id} eliminado."
        )
