from pydantic import BaseModel, Field
from typing import Optional


class UsuarioCreate(BaseModel):
    """Schema para crear usuario (solo admin)"""
    nombre: Optional[str] = Field(None, max_length=255)
    usuario: Optional[str] = Field(None, max_length=100)
    contrasena: Optional[str] = None
    tipo: Optional[str] = Field(None, description="admin | vendedor")

    class Config:
        json_schema_extra = {
            "example": {
                "nombre": "Vendedor Principal",
                "usuario": "vendedor",
                "contrasena": "vendedor123",
                "tipo": "vendedor"
            }
        }


class UsuarioUpdate(BaseModel):
    nombre: Optional[str] = Field(None, max_length=255)
    usuario: Optional[str] = Field(None, max_length=100)
    contrasena: Optional[str] = None
    tipo: Optional[str] = None
    estado: Optional[bool] = None


class UsuarioResponse(BaseModel):
    """Datos públicos del usuario: nunca incluye la contraseña"""
    id: int
    nombre: str
    usuario: str
    tipo: str
    estado: bool

    class Config:
        from_attributes = True
