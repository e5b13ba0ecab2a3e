from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from sistema_ventas.config.database import get_db
from sistema_ventas.core.auth.dependencies import get_admin_user, get_auth_service
from sistema_ventas.core.auth.service import AuthService
from .service import UsuariosService
from .schemas import UsuarioCreate, UsuarioUpdate

router = APIRouter()


@router.get("")
async def listar_usuarios(
    current_user = Depends(get_admin_user),
    auth_service: AuthService = Depends(get_auth_service),
    db: Session = Depends(get_db)
):
    """Listar usuarios (sin contraseñas)"""
    service = UsuariosService(db, auth_service)
    return await service.list_usuarios()


@router.get("/{usuario_id}")
async def get_usuario(
    usuario_id: int,
    current_user = Depends(get_admin_user),
    auth_service: AuthService = Depends(get_auth_service),
    db: Session = Depends(get_db)
):
    service = UsuariosService(db, auth_service)
    return await service.get_usuario(usuario_id)


@router.post("", status_code=201)
async def crear_usuario(
    usuario_data: UsuarioCreate,
    current_user = Depends(get_admin_user),
    auth_service: AuthService = Depends(get_auth_service),
    db: Session = Depends(get_db)
):
    """
    Crear usuario

    **Permisos requeridos:** Solo administradores

    - `tipo` debe ser `admin` o `vendedor`
    - `usuario` no puede repetirse
    - La contraseña se guarda cifrada con bcrypt
    """
    service = UsuariosService(db, auth_service)
    return await service.create_usuario(usuario_data)


@router.put("/{usuario_id}")
async def actualizar_usuario(
    usuario_id: int,
    update_data: UsuarioUpdate,
    current_user = Depends(get_admin_user),
    auth_service: AuthService = Depends(get_auth_service),
    db: Session = Depends(get_db)
):
    service = UsuariosService(db, auth_service)
    return await service.update_usuario(usuario_id, update_data)


@router.delete("/{usuario_id}")
async def eliminar_usuario(
    usuario_id: int,
    current_user = Depends(get_admin_user),
    auth_service: AuthService = Depends(get_auth_service),
    db: Session = Depends(get_db)
):
    """Eliminar usuario definitivamente"""
    service = UsuariosService(db, auth_service)
    return await service.delete_usuario(usuario_id)
