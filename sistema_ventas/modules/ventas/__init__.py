"""
Módulo de Ventas - Registro, pagos y anulación de ventas
"""

from .router import router, detalles_router
from .service import VentasService
from .repository import VentasRepository, DetalleVentaRepository, ESTADOS_VENTA

__all__ = [
    "router",
    "detalles_router",
    "VentasService",
    "VentasRepository",
    "DetalleVentaRepository",
    "ESTADOS_VENTA"
]
