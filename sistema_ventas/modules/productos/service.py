from typing import Any, Dict, Optional
import logging

from sqlalchemy.orm import Session

from sistema_ventas.core.errors import NotFoundError
from sistema_ventas.shared.schemas.common import envelope, list_envelope
from .repository import ProductosRepository
from .schemas import ProductoCreate, ProductoUpdate, ProductoResponse

logger = logging.getLogger(__name__)


class ProductosService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = ProductosRepository(db)

    async def list_productos(self) -> Dict[str, Any]:
        productos = self.repository.get_all()
        return list_envelope([ProductoResponse.model_validate(p) for p in productos])

    async def search_productos(self, term: Optional[str]) -> Dict[str, Any]:
        productos = self.repository.search(term)
        return list_envelope([ProductoResponse.model_validate(p) for p in productos])

    async def get_producto(self, producto_id: int) -> Dict[str, Any]:
        producto = self.repository.get_by_id(producto_id)
        if not producto:
            raise NotFoundError(f"No se encontró producto con el id {producto_id}")
        return envelope(data=ProductoResponse.model_validate(producto))

    async def get_producto_by_code(self, codigo: str) -> Dict[str, Any]:
        producto = self.repository.get_by_code(codigo)
        if not producto:
            raise NotFoundError(f"No se encontró producto con el código {codigo}")
        return envelope(data=ProductoResponse.model_validate(producto))

    async def create_producto(self, producto_data: ProductoCreate) -> Dict[str, Any]:
        producto = self.repository.create(producto_data.dict())
        logger.info(f"✅ Producto creado: {producto.codigo} (ID: {producto.id})")
        return envelope(
            data=ProductoResponse.model_validate(producto),
            message="Producto creado correctamente."
        )

    async def update_producto(self, producto_id: int, update_data: ProductoUpdate) -> Dict[str, Any]:
        producto = self.repository.update(producto_id, update_data.dict(exclude_unset=True))
        return envelope(
            data=ProductoResponse.model_validate(producto),
            message=f"Producto con ID {producto_id} actualizado."
        )

    async def deactivate_producto(self, producto_id: int) -> Dict[str, Any]:
        producto = self.repository.deactivate(producto_id)
        logger.info(f"🗑️ Producto desactivado: {producto.codigo}")
        return envelope(
            data=ProductoResponse.model_validate(producto),
            message=f"Producto con ID {producto_id} desactivado correctamente."
        )
