"""
Módulo de Almacén - Movimientos de ingreso y egreso de stock
"""

from .router import router
from .service import AlmacenService
from .repository import AlmacenRepository, TIPOS_MOVIMIENTO

__all__ = [
    "router",
    "AlmacenService",
    "AlmacenRepository",
    "TIPOS_MOVIMIENTO"
]
