# sistema_ventas/modules/productos/router.py
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from sistema_ventas.config.database import get_db
from sistema_ventas.core.auth.dependencies import get_seller_user
from .service import ProductosService
from .schemas import ProductoCreate, ProductoUpdate

router = APIRouter()


@router.get("")
async def listar_productos(
    q: Optional[str] = Query(None, description="Texto a buscar en descripción o código"),
    current_user = Depends(get_seller_user),
    db: Session = Depends(get_db)
):
    """
    Listar productos ordenados por descripción

    Si se envía `q`, se comporta igual que `/buscar`.
    """
    service = ProductosService(db)
    if q is not None:
        return await service.search_productos(q)
    return await service.list_productos()


@router.get("/buscar")
async def buscar_productos(
    q: Optional[str] = Query(None, description="Texto a buscar en descripción o código"),
    current_user = Depends(get_seller_user),
    db: Session = Depends(get_db)
):
    """
    Buscar productos por descripción o código

    - Búsqueda parcial sin distinguir mayúsculas
    - Máximo 50 resultados
    - Término vacío: devuelve el listado completo
    """
    service = ProductosService(db)
    return await service.search_productos(q)


@router.get("/codigo/{codigo}")
async def get_producto_por_codigo(
    codigo: str,
    current_user = Depends(get_seller_user),
    db: Session = Depends(get_db)
):
    """Obtener un producto por su código"""
    service = ProductosService(db)
    return await service.get_producto_by_code(codigo)


@router.get("/{producto_id}")
async def get_producto(
    producto_id: int,
    current_user = Depends(get_seller_user),
    db: Session = Depends(get_db)
):
    """Obtener un producto por ID"""
    service = ProductosService(db)
    return await service.get_producto(producto_id)


@router.post("", status_code=201)
async def crear_producto(
    producto_data: ProductoCreate,
    current_user = Depends(get_seller_user),
    db: Session = Depends(get_db)
):
    """
    Crear un producto

    **Validaciones:**
    - `codigo` y `descripcion` son obligatorios
    - `codigo` no puede repetirse
    - `stock` debe ser un entero >= 0
    - Precios vacíos se guardan como null
    """
    service = ProductosService(db)
    return await service.create_producto(producto_data)


@router.put("/{producto_id}")
async def actualizar_producto(
    producto_id: int,
    update_data: ProductoUpdate,
    current_user = Depends(get_seller_user),
    db: Session = Depends(get_db)
):
    """Actualizar un producto (solo los campos enviados)"""
    service = ProductosService(db)
    return await service.update_producto(producto_id, update_data)


@router.delete("/{producto_id}")
async def eliminar_producto(
    producto_id: int,
    current_user = Depends(get_seller_user),
    db: Session = Depends(get_db)
):
    """Desactivar un producto (soft delete: nunca se borra la fila)"""
    service = ProductosService(db)
    return await service.deactivate_producto(producto_id)
