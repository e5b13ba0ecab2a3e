"""
Módulo de Clientes - Registro de clientes con documento único
"""

from .router import router
from .service import ClientesService
from .repository import ClientesRepository

__all__ = [
    "router",
    "ClientesService",
    "ClientesRepository"
]
