"""
Módulo de Reportes - Vistas agregadas de ventas (solo administradores)
"""

from .router import router
from .service import ReportesService

__all__ = ["router", "ReportesService"]
