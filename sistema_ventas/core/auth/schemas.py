from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Schema para login de usuario"""
    usuario: str = Field("", description="Nombre de usuario")
    contrasena: str = Field("", description="Contraseña del usuario")

    class Config:
        json_schema_extra = {
            "example": {
                "usuario": "admin",
                "contrasena": "admin123"
            }
        }


class TokenPayload(BaseModel):
    """Datos embebidos en el token y devueltos al iniciar sesión"""
    id: int
    nombre: str
    tipo: str


class LoginResponse(BaseModel):
    """Schema para respuesta de login"""
    success: bool = True
    message: str = "Inicio de sesión exitoso."
    token: str
    usuario: TokenPayload

    class Config:
        json_schema_extra = {
            "example": {
                "success": True,
                "message": "Inicio de sesión exitoso.",
                "token": "Bearer eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                "usuario": {"id": 1, "nombre": "Administrador Principal", "tipo": "admin"}
            }
        }
