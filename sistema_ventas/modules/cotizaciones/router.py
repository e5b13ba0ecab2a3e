from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import Optional

from sistema_ventas.config.database import get_db
from sistema_ventas.core.auth.dependencies import get_seller_user
from .service import CotizacionesService
from .schemas import ConversionRequest, CotizacionCreate, CotizacionUpdate, DetalleReemplazo

router = APIRouter()


@router.get("")
async def listar_cotizaciones(
    current_user = Depends(get_seller_user),
    db: Session = Depends(get_db)
):
    service = CotizacionesService(db)
    return await service.list_cotizaciones()


# Declarada antes de /{cotizacion_id}
@router.get("/estadisticas/resumen")
async def estadisticas_cotizaciones(
    current_user = Depends(get_seller_user),
    db: Session = Depends(get_db)
):
    """Conteo por estado y valor total"""
    service = CotizacionesService(db)
    return await service.get_estadisticas()


@router.get("/{cotizacion_id}")
async def get_cotizacion(
    cotizacion_id: int,
    current_user = Depends(get_seller_user),
    db: Session = Depends(get_db)
):
    service = CotizacionesService(db)
    return await service.get_cotizacion(cotizacion_id)


@router.get("/{cotizacion_id}/detalle")
async def detalle_cotizacion(
    cotizacion_id: int,
    current_user = Depends(get_seller_user),
    db: Session = Depends(get_db)
):
    """Items con información del producto y resumen"""
    service = CotizacionesService(db)
    return await service.get_detalle_completo(cotizacion_id)


@router.get("/{cotizacion_id}/preparar-venta")
async def preparar_venta(
    cotizacion_id: int,
    current_user = Depends(get_seller_user),
    db: Session = Depends(get_db)
):
    """Verificar stock y devolver los datos de la futura venta"""
    service = CotizacionesService(db)
    return await service.preparar_venta(cotizacion_id)


@router.post("", status_code=201)
async def crear_cotizacion(
    cotizacion_data: CotizacionCreate,
    current_user = Depends(get_seller_user),
    db: Session = Depends(get_db)
):
    """
    Crear cotización

    - Requiere al menos un item
    - `total` debe ser mayor a 0
    - No descuenta stock
    """
    service = CotizacionesService(db)
    return await service.create_cotizacion(cotizacion_data, current_user)


@router.put("/{cotizacion_id}")
async def actualizar_cotizacion(
    cotizacion_id: int,
    update_data: CotizacionUpdate,
    current_user = Depends(get_seller_user),
    db: Session = Depends(get_db)
):
    service = CotizacionesService(db)
    return await service.update_cotizacion(cotizacion_id, update_data)


@router.put("/{cotizacion_id}/detalle")
async def reemplazar_detalle(
    cotizacion_id: int,
    reemplazo: DetalleReemplazo,
    current_user = Depends(get_seller_user),
    db: Session = Depends(get_db)
):
    """Reemplazar todos los items y actualizar totales"""
    service = CotizacionesService(db)
    return await service.replace_detalle(cotizacion_id, reemplazo)


@router.delete("/{cotizacion_id}")
async def eliminar_cotizacion(
    cotizacion_id: int,
    current_user = Depends(get_seller_user),
    db: Session = Depends(get_db)
):
    service = CotizacionesService(db)
    return await service.delete_cotizacion(cotizacion_id)


@router.post("/{cotizacion_id}/convertir-venta")
async def convertir_venta(
    cotizacion_id: int,
    conversion: Optional[ConversionRequest] = None,
    current_user = Depends(get_seller_user),
    db: Session = Depends(get_db)
):
    """
    Convertir cotización a venta

    Con alertas de stock solo procede si `forzar_conversion=true`.
    La venta se registra aparte con los `datos_venta` devueltos.
    """
    service = CotizacionesService(db)
    return await service.convertir_venta(cotizacion_id, conversion or ConversionRequest(), current_user)
