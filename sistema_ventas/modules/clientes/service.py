from typing import Any, Dict

from sqlalchemy.orm import Session

from sistema_ventas.core.errors import NotFoundError
from sistema_ventas.shared.schemas.common import envelope, list_envelope
from .repository import ClientesRepository
from .schemas import ClienteCreate, ClienteUpdate, ClienteResponse


class ClientesService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = ClientesRepository(db)

    async def list_clientes(self) -> Dict[str, Any]:
        clientes = self.repository.get_all()
        return list_envelope([ClienteResponse.model_validate(c) for c in clientes])

    async def get_cliente(self, cliente_id: int) -> Dict[str, Any]:
        cliente = self.repository.get_by_id(cliente_id)
        if not cliente:
            raise NotFoundError(f"No se encontró cliente con el id {cliente_id}")
        return envelope(data=ClienteResponse.model_validate(cliente))

    async def create_cliente(self, cliente_data: ClienteCreate) -> Dict[str, Any]:
        cliente = self.repository.create(cliente_data.dict())
        return envelope(
            data=ClienteResponse.model_validate(cliente),
            message="Cliente registrado correctamente."
        )

    async def update_cliente(self, cliente_id: int, update_data: ClienteUpdate) -> Dict[str, Any]:
        cliente = self.repository.update(cliente_id, update_data.dict(exclude_unset=True))
        return envelope(
            data=ClienteResponse.model_validate(cliente),
            message=f"Cliente con ID {cliente_id} actualizado."
        )

    async def deactivate_cliente(self, cliente_id: int) -> Dict[str, Any]:
        cliente = self.repository.deactivate(cliente_id)
        return envelope(
            data=ClienteResponse.model_validate(cliente),
            message=f"Cliente con ID {cliente_id} desactivado correctamente."
        )
