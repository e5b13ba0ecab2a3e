from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from sistema_ventas.config.database import get_db
from sistema_ventas.core.auth.dependencies import get_seller_user
from .service import ClientesService
from .schemas import ClienteCreate, ClienteUpdate

router = APIRouter()


@router.get("")
async def listar_clientes(
    current_user = Depends(get_seller_user),
    db: Session = Depends(get_db)
):
    """Listar clientes ordenados por nombre"""
    service = ClientesService(db)
    return await service.list_clientes()


@router.get("/{cliente_id}")
async def get_cliente(
    cliente_id: int,
    current_user = Depends(get_seller_user),
    db: Session = Depends(get_db)
):
    service = ClientesService(db)
    return await service.get_cliente(cliente_id)


@router.post("", status_code=201)
async def crear_cliente(
    cliente_data: ClienteCreate,
    current_user = Depends(get_seller_user),
    db: Session = Depends(get_db)
):
    """
    Registrar un cliente

    **Validaciones:**
    - `nombre` y `documento` son obligatorios
    - `documento` debe ser numérico y único
    """
    service = ClientesService(db)
    return await service.create_cliente(cliente_data)


@router.put("/{cliente_id}")
async def actualizar_cliente(
    cliente_id: int,
    update_data: ClienteUpdate,
    current_user = Depends(get_seller_user),
    db: Session = Depends(get_db)
):
    service = ClientesService(db)
    return await service.update_cliente(cliente_id, update_data)


@router.delete("/{cliente_id}")
async def eliminar_cliente(
    cliente_id: int,
    current_user = Depends(get_seller_user),
    db: Session = Depends(get_db)
):
    """Desactivar un cliente (soft delete)"""
    service = ClientesService(db)
    return await service.deactivate_cliente(cliente_id)
