"""
Módulo de Usuarios - Cuentas de administradores y vendedores
"""

from .router import router
from .service import UsuariosService
from .repository import UsuariosRepository, TIPOS_VALIDOS

__all__ = [
    "router",
    "UsuariosService",
    "UsuariosRepository",
    "TIPOS_VALIDOS"
]
