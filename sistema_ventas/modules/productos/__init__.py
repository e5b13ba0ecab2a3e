# sistema_ventas/modules/productos/__init__.py
"""
Módulo de Productos - Catálogo

- Listado y búsqueda por descripción o código
- Alta con código único y stock inicial
- Actualización parcial de datos y precios
- Desactivación (soft delete)

Arquitectura:
- router.py: Endpoints de productos
- service.py: Armado de respuestas
- repository.py: Acceso a datos y validaciones
- schemas.py: Modelos de request/response
"""

from .router import router
from .service import ProductosService
from .repository import ProductosRepository

__all__ = [
    "router",
    "ProductosService",
    "ProductosRepository"
]
