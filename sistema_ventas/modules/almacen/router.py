from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from sistema_ventas.config.database import get_db
from sistema_ventas.core.auth.dependencies import get_seller_user
from .service import AlmacenService
from .schemas import MovimientoCreate

router = APIRouter()


@router.get("")
async def listar_movimientos(
    current_user = Depends(get_seller_user),
    db: Session = Depends(get_db)
):
    """Movimientos de almacén, los más recientes primero"""
    service = AlmacenService(db)
    return await service.list_movimientos()


@router.get("/{movimiento_id}")
async def get_movimiento(
    movimiento_id: int,
    current_user = Depends(get_seller_user),
    db: Session = Depends(get_db)
):
    service = AlmacenService(db)
    return await service.get_movimiento(movimiento_id)


@router.post("", status_code=201)
async def registrar_movimiento(
    movimiento_data: MovimientoCreate,
    current_user = Depends(get_seller_user),
    db: Session = Depends(get_db)
):
    """
    Registrar ingreso o egreso de stock

    - **ingreso**: suma la cantidad al stock del producto
    - **egreso**: resta la cantidad; falla si no hay stock suficiente
    """
    service = AlmacenService(db)
    return await service.create_movimiento(movimiento_data)
