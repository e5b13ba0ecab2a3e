from sqlalchemy.orm import Session
from sqlalchemy import func, desc
from typing import Any, Dict, List

from sistema_ventas.shared.database.models import Cliente, DetalleVenta, Producto, Usuario, Venta

# Las ventas anuladas no cuentan en ningún reporte
VENTA_VALIDA = Venta.estado != "anulada"


class ReportesRepository:
    """Consultas agregadas de solo lectura"""

    def __init__(self, db: Session):
        self.db = db

    def productos_mas_vendidos(self) -> List[Dict[str, Any]]:
        total_vendido = func.sum(DetalleVenta.cantidad).label("total_vendido")
        filas = self.db.query(
            Producto.id,
            Producto.codigo,
            Producto.descripcion,
            total_vendido,
            func.sum(DetalleVenta.subtotal).label("total_ingresos")
        ).join(
            DetalleVenta, DetalleVenta.producto_id == Producto.id
        ).join(
            Venta, Venta.id == DetalleVenta.venta_id
        ).filter(VENTA_VALIDA).group_by(
            Producto.id, Producto.codigo, Producto.descripcion
        ).order_by(desc(total_vendido), Producto.id).all()

        return [
            {
                "producto_id": fila.id,
                "codigo": fila.codigo,
                "descripcion": fila.descripcion,
                "total_vendido": int(fila.total_vendido or 0),
                "total_ingresos": float(fila.total_ingresos or 0)
            }
            for fila in filas
        ]

    def ventas_por_vendedor(self) -> List[Dict[str, Any]]:
        total_vendido = func.sum(Venta.total).label("total_vendido")
        filas = self.db.query(
            Usuario.id,
            Usuario.nombre,
            Usuario.usuario,
            func.count(Venta.id).label("cantidad_ventas"),
            total_vendido
        ).join(
            Venta, Venta.usuarios_id == Usuario.id
        ).filter(VENTA_VALIDA).group_by(
            Usuario.id, Usuario.nombre, Usuario.usuario
        ).order_by(desc(total_vendido), Usuario.id).all()

        return [
            {
                "usuario_id": fila.id,
                "nombre": fila.nombre,
                "usuario": fila.usuario,
                "cantidad_ventas": fila.cantidad_ventas,
                "total_vendido": float(fila.total_vendido or 0)
            }
            for fila in filas
        ]

    def clientes_mas_compras(self) -> List[Dict[str, Any]]:
        total_gastado = func.sum(Venta.total).label("total_gastado")
        filas = self.db.query(
            Cliente.id,
            Cliente.nombre,
            Cliente.documento,
            func.count(Venta.id).label("cantidad_compras"),
            total_gastado
        ).join(
            Venta, Venta.cliente_id == Cliente.id
        ).filter(VENTA_VALIDA).group_by(
            Cliente.id, Cliente.nombre, Cliente.documento
        ).order_by(desc(total_gastado), Cliente.id).all()

        return [
            {
                "cliente_id": fila.id,
                "nombre": fila.nombre,
                "documento": fila.documento,
                "cantidad_compras": fila.cantidad_compras,
                "total_gastado": float(fila.total_gastado or 0)
            }
            for fila in filas
        ]

    def ganancias_diarias(self) -> List[Dict[str, Any]]:
        """
        Ventas, costo y ganancia por día.

        Los totales de venta y el costo de las líneas se agregan por separado
        para no multiplicar el total de una venta por su número de líneas.
        """
        dia_venta = func.date(Venta.fecha).label("dia")
        ventas = self.db.query(
            dia_venta,
            func.count(Venta.id).label("cantidad_ventas"),
            func.sum(Venta.total).label("total_ventas")
        ).filter(VENTA_VALIDA).group_by(dia_venta).all()

        dia_linea = func.date(Venta.fecha).label("dia")
        lineas = self.db.query(
            dia_linea,
            func.sum(DetalleVenta.subtotal).label("ingresos"),
            func.sum(DetalleVenta.cantidad * func.coalesce(Producto.pre_compra, 0)).label("costo")
        ).join(
            Venta, Venta.id == DetalleVenta.venta_id
        ).join(
            Producto, Producto.id == DetalleVenta.producto_id
        ).filter(VENTA_VALIDA).group_by(dia_linea).all()

        costos = {str(fila.dia): fila for fila in lineas}

        reporte = []
        for fila in ventas:
            dia = str(fila.dia)
            linea = costos.get(dia)
            ingresos = float(linea.ingresos or 0) if linea else 0.0
            costo = float(linea.costo or 0) if linea else 0.0
            reporte.append({
                "dia": dia,
                "cantidad_ventas": fila.cantidad_ventas,
                "total_ventas": float(fila.total_ventas or 0),
                "costo": round(costo, 2),
                "ganancia": round(ingresos - costo, 2)
            })

        reporte.sort(key=lambda r: r["dia"], reverse=True)
        return reporte
