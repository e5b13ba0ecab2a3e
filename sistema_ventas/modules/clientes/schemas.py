from pydantic import BaseModel, Field
from typing import Optional, Union


class ClienteCreate(BaseModel):
    """Schema para registrar un cliente"""
    nombre: Optional[str] = Field(None, max_length=255)
    documento: Union[int, str, None] = Field(None, description="Número de documento (solo dígitos)")
    telefono: Optional[str] = Field(None, max_length=50)

    class Config:
        json_schema_extra = {
            "example": {
                "nombre": "Rosa Quispe",
                "documento": "45871236",
                "telefono": "987654321"
            }
        }


class ClienteUpdate(BaseModel):
    nombre: Optional[str] = Field(None, max_length=255)
    documento: Union[int, str, None] = None
    telefono: Optional[str] = Field(None, max_length=50)
    estado: Optional[bool] = None


class ClienteResponse(BaseModel):
    id: int
    nombre: str
    documento: int
    telefono: Optional[str] = None
    estado: bool

    class Config:
        from_attributes = True
