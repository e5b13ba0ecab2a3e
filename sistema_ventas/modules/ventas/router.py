from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from sistema_ventas.config.database import get_db
from sistema_ventas.core.auth.dependencies import get_seller_user, get_auth_service
from sistema_ventas.core.auth.service import AuthService
from .service import VentasService
from .schemas import AnulacionRequest, DetalleVentaCreate, PagoRequest, VentaCreate, VentaUpdate

router = APIRouter()
detalles_router = APIRouter()


# ==================== VENTAS ====================

@router.get("")
async def listar_ventas(
    current_user = Depends(get_seller_user),
    db: Session = Depends(get_db)
):
    """Ventas con resumen de cliente y vendedor"""
    service = VentasService(db)
    return await service.list_ventas()


@router.get("/{venta_id}")
async def get_venta(
    venta_id: int,
    current_user = Depends(get_seller_user),
    db: Session = Depends(get_db)
):
    """Venta con sus líneas de detalle"""
    service = VentasService(db)
    return await service.get_venta(venta_id)


@router.post("", status_code=201)
async def registrar_venta(
    venta_data: VentaCreate,
    current_user = Depends(get_seller_user),
    db: Session = Depends(get_db)
):
    """
    Registrar venta

    - Sin adelanto (`es_adelanto=false`): la venta queda **pagada**
    - Con adelanto 0: queda **pendiente**
    - Con adelanto mayor a 0: queda **parcial**
    - Cada item genera una línea y un egreso de almacén
    """
    service = VentasService(db)
    return await service.create_venta(venta_data)


@router.put("/{venta_id}")
async def actualizar_venta(
    venta_id: int,
    update_data: VentaUpdate,
    current_user = Depends(get_seller_user),
    db: Session = Depends(get_db)
):
    service = VentasService(db)
    return await service.update_venta(venta_id, update_data)


@router.post("/{venta_id}/marcar-pagada")
@router.post("/{venta_id}/pagar")
async def marcar_pagada(
    venta_id: int,
    pago: PagoRequest,
    current_user = Depends(get_seller_user),
    db: Session = Depends(get_db)
):
    """Aplicar un pago (`monto`) al saldo pendiente"""
    service = VentasService(db)
    return await service.marcar_pagada(venta_id, pago)


@router.post("/{venta_id}/anular")
async def anular_venta(
    venta_id: int,
    credenciales: AnulacionRequest,
    current_user = Depends(get_seller_user),
    auth_service: AuthService = Depends(get_auth_service),
    db: Session = Depends(get_db)
):
    """
    Anular venta

    Requiere usuario y contraseña de un administrador activo, aunque quien
    hace la petición sea vendedor.
    """
    service = VentasService(db, auth_service)
    return await service.anular_venta(venta_id, credenciales)


# ==================== DETALLES DE VENTA ====================

@detalles_router.get("/{venta_id}")
async def listar_detalles(
    venta_id: int,
    current_user = Depends(get_seller_user),
    db: Session = Depends(get_db)
):
    service = VentasService(db)
    return await service.list_detalles(venta_id)


@detalles_router.post("", status_code=201)
async def registrar_detalle(
    detalle_data: DetalleVentaCreate,
    current_user = Depends(get_seller_user),
    db: Session = Depends(get_db)
):
    """Registrar línea de venta y descontar stock"""
    service = VentasService(db)
    return await service.create_detalle(detalle_data)
