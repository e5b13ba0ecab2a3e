from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from sistema_ventas.config.database import get_db
from sistema_ventas.core.auth.dependencies import get_auth_service, get_current_user
from sistema_ventas.core.auth.schemas import LoginRequest, LoginResponse, TokenPayload
from sistema_ventas.core.auth.service import AuthService
from sistema_ventas.core.errors import AuthError, AuthorizationError, ValidationError
from sistema_ventas.modules.usuarios.repository import UsuariosRepository
from sistema_ventas.modules.usuarios.schemas import UsuarioResponse
from sistema_ventas.shared.database.models import Usuario
from sistema_ventas.shared.schemas.common import envelope

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
async def login(
    credenciales: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
    db: Session = Depends(get_db)
):
    """
    Iniciar sesión

    **Body:**
    ```json
        {
            "usuario": "admin",
            "contrasena": "admin123"
        }
    ```

    **Returns:**
    - Token `Bearer <jwt>` válido por un día
    - Id, nombre y tipo del usuario
    """
    if not credenciales.usuario or not credenciales.contrasena:
        raise ValidationError("Por favor, ingrese usuario y contraseña.")

    user = UsuariosRepository(db, auth_service).get_by_login(credenciales.usuario)

    if not user or not auth_service.verify_password(credenciales.contrasena, user.contrasena):
        raise AuthError("Credenciales inválidas.")

    # Verificar que el usuario esté activo
    if not user.estado:
        raise AuthorizationError("Tu cuenta ha sido desactivada. Contacta al administrador para reactivarla.")

    payload = TokenPayload(id=user.id, nombre=user.nombre, tipo=user.tipo)
    access_token = auth_service.create_access_token(data=payload.dict())

    return LoginResponse(token=f"Bearer {access_token}", usuario=payload)


@router.get("/me")
async def get_current_user_info(current_user: Usuario = Depends(get_current_user)):
    """Obtener información del usuario actual"""
    return envelope(data=UsuarioResponse.model_validate(current_user))
