from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from sistema_ventas.config.database import get_db
from sistema_ventas.core.auth.dependencies import get_admin_user
from .service import ReportesService

router = APIRouter()


@router.get("/productos-mas-vendidos")
async def productos_mas_vendidos(
    current_user = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    """Unidades vendidas e ingresos por producto"""
    service = ReportesService(db)
    return await service.productos_mas_vendidos()


@router.get("/ventas-por-vendedor")
async def ventas_por_vendedor(
    current_user = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    service = ReportesService(db)
    return await service.ventas_por_vendedor()


@router.get("/clientes-mas-compras")
async def clientes_mas_compras(
    current_user = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    service = ReportesService(db)
    return await service.clientes_mas_compras()


@router.get("/ganancias-diarias")
async def ganancias_diarias(
    current_user = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    """Ganancia = subtotal de las líneas - cantidad x precio de compra"""
    service = ReportesService(db)
    return await service.ganancias_diarias()


@router.get("/ganancias-mensuales")
async def ganancias_mensuales(
    current_user = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    service = ReportesService(db)
    return await service.ganancias_mensuales()
