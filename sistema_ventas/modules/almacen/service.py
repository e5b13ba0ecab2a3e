from typing import Any, Dict
import logging

from sqlalchemy.orm import Session

from sistema_ventas.core.errors import NotFoundError
from sistema_ventas.shared.schemas.common import envelope, list_envelope
from .repository import AlmacenRepository
from .schemas import MovimientoCreate, MovimientoResponse

logger = logging.getLogger(__name__)


class AlmacenService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = AlmacenRepository(db)

    async def list_movimientos(self) -> Dict[str, Any]:
        movimientos = self.repository.get_all()
        return list_envelope([MovimientoResponse.from_movimiento(m) for m in movimientos])

    async def get_movimiento(self, movimiento_id: int) -> Dict[str, Any]:
        movimiento = self.repository.get_by_id(movimiento_id)
        if not movimiento:
            raise NotFoundError(f"No se encontró un movimiento con el ID {movimiento_id}.")
        return envelope(data=MovimientoResponse.from_movimiento(movimiento))

    async def create_movimiento(self, movimiento_data: MovimientoCreate) -> Dict[str, Any]:
        movimiento = self.repository.create(movimiento_data.dict())
        logger.info(
            f"📦 Movimiento de {movimiento.tipo_movimiento}: producto {movimiento.producto_id}, "
            f"cantidad {movimiento.cantidad}"
        )
        return envelope(
            data=MovimientoResponse.from_movimiento(movimiento),
            message="Movimiento de almacén registrado correctamente."
        )
