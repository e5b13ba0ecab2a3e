# sistema_ventas/api/router.py
from fastapi import APIRouter

from sistema_ventas.api.auth import router as auth_router
from sistema_ventas.modules.productos.router import router as productos_router
from sistema_ventas.modules.clientes.router import router as clientes_router
from sistema_ventas.modules.usuarios.router import router as usuarios_router
from sistema_ventas.modules.almacen.router import router as almacen_router
from sistema_ventas.modules.ventas.router import router as ventas_router, detalles_router
from sistema_ventas.modules.reportes.router import router as reportes_router
from sistema_ventas.modules.cotizaciones.router import router as cotizaciones_router

# Router principal, montado bajo /api
api_router = APIRouter()

api_router.include_router(auth_router, prefix="/auth", tags=["Autenticación"])

# Catálogo y registros: rutas en español y sus alias en inglés
api_router.include_router(productos_router, prefix="/productos", tags=["Productos"])
api_router.include_router(productos_router, prefix="/products", tags=["Productos"], include_in_schema=False)

api_router.include_router(clientes_router, prefix="/clientes", tags=["Clientes"])
api_router.include_router(clientes_router, prefix="/clients", tags=["Clientes"], include_in_schema=False)

api_router.include_router(usuarios_router, prefix="/usuarios", tags=["Usuarios"])
api_router.include_router(usuarios_router, prefix="/users", tags=["Usuarios"], include_in_schema=False)

api_router.include_router(almacen_router, prefix="/almacen", tags=["Almacén"])

# ==================== VENTAS ====================

api_router.include_router(ventas_router, prefix="/ventas", tags=["Ventas"])

api_router.include_router(detalles_router, prefix="/detalles-venta", tags=["Detalles de venta"])
api_router.include_router(detalles_router, prefix="/detalle-venta", tags=["Detalles de venta"], include_in_schema=False)

api_router.include_router(cotizaciones_router, prefix="/cotizaciones", tags=["Cotizaciones"])

api_router.include_router(reportes_router, prefix="/reportes", tags=["Reportes"])
