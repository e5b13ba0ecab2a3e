from typing import Any, Dict, List
from collections import OrderedDict

from sqlalchemy.orm import Session

from sistema_ventas.shared.schemas.common import list_envelope
from .repository import ReportesRepository


class ReportesService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = ReportesRepository(db)

    async def productos_mas_vendidos(self) -> Dict[str, Any]:
        return list_envelope(self.repository.productos_mas_vendidos())

    async def ventas_por_vendedor(self) -> Dict[str, Any]:
        return list_envelope(self.repository.ventas_por_vendedor())

    async def clientes_mas_compras(self) -> Dict[str, Any]:
        return list_envelope(self.repository.clientes_mas_compras())

    async def ganancias_diarias(self) -> Dict[str, Any]:
        return list_envelope(self.repository.ganancias_diarias())

    async def ganancias_mensuales(self) -> Dict[str, Any]:
        """Agrupar el reporte diario por mes (YYYY-MM)"""
        meses: "OrderedDict[str, Dict[str, Any]]" = OrderedDict()

        # El reporte diario ya viene del más reciente al más antiguo
        for dia in self.repository.ganancias_diarias():
            mes = dia["dia"][:7]
            if mes not in meses:
                meses[mes] = {
                    "mes": mes,
                    "cantidad_ventas": 0,
                    "total_ventas": 0.0,
                    "costo": 0.0,
                    "ganancia": 0.0
                }
            acumulado = meses[mes]
            acumulado["cantidad_ventas"] += dia["cantidad_ventas"]
            acumulado["total_ventas"] += dia["total_ventas"]
            acumulado["costo"] += dia["costo"]
            acumulado["ganancia"] += dia["ganancia"]

        reporte: List[Dict[str, Any]] = []
        for acumulado in meses.values():
            for campo in ("total_ventas", "costo", "ganancia"):
                acumulado[campo] = round(acumulado[campo], 2)
            reporte.append(acumulado)

        return list_envelope(reporte)
