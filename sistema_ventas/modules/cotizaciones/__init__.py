"""
Módulo de Cotizaciones - Presupuestos previos a la venta
"""

from .router import router
from .service import CotizacionesService
from .repository import CotizacionesRepository, ESTADOS_COTIZACION

__all__ = [
    "router",
    "CotizacionesService",
    "CotizacionesRepository",
    "ESTADOS_COTIZACION"
]
