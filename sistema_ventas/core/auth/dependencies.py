from typing import List, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from sistema_ventas.config.database import get_db
from sistema_ventas.core.auth.service import AuthService
from sistema_ventas.core.errors import AuthError, AuthorizationError
from sistema_ventas.shared.database.models import Usuario

security = HTTPBearer(auto_error=False)


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    auth_service: AuthService = Depends(get_auth_service),
    db: Session = Depends(get_db)
) -> Usuario:
    """Obtener usuario actual desde el token"""

    if credentials is None:
        raise AuthError("No autorizado, no se encontró token.")

    payload = auth_service.verify_token(credentials.credentials)
    if payload is None or payload.get("id") is None:
        raise AuthError("No autorizado, token inválido.")

    user = db.query(Usuario).filter(Usuario.id == payload["id"]).first()

    if user is None:
        raise AuthError("Usuario no encontrado.")

    if not user.estado:
        raise AuthError("Usuario inactivo.")

    return user


def require_roles(allowed_roles: List[str]):
    """Factory para crear dependency que requiere roles específicos"""
    def role_checker(current_user: Usuario = Depends(get_current_user)) -> Usuario:
        if current_user.tipo not in allowed_roles:
            raise AuthorizationError(
                f"El rol '{current_user.tipo}' no tiene permiso para acceder a este recurso."
            )
        return current_user
    return role_checker


# Dependencies específicas por rol
def get_seller_user(current_user: Usuario = Depends(require_roles(["vendedor", "admin"]))):
    """Dependency para vendedores y administradores"""
    return current_user


def get_admin_user(current_user: Usuario = Depends(require_roles(["admin"]))):
    """Dependency para administradores"""
    return current_user
