# sistema_ventas/shared/database/models.py
from sqlalchemy import (
    Column, Integer, BigInteger, String, Boolean, DateTime, Text,
    Numeric, ForeignKey, CheckConstraint, func
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


# =====================================================
# CATÁLOGO
# =====================================================

class Producto(Base):
    """Modelo de Producto"""
    __tablename__ = "productos"

    id = Column(Integer, primary_key=True, index=True)
    codigo = Column(String(100), unique=True, nullable=False, index=True)
    descripcion = Column(String(255), nullable=False)
    stock = Column(Integer, nullable=False, default=0)
    pre_compra = Column(Numeric(12, 2))
    pre_especial = Column(Numeric(12, 2))
    pre_por_mayor = Column(Numeric(12, 2))
    pre_general = Column(Numeric(12, 2))
    estado = Column(Boolean, nullable=False, default=True)

    __table_args__ = (
        CheckConstraint('stock >= 0', name='productos_stock_no_negativo'),
    )

    # Relationships
    movimientos = relationship("MovimientoAlmacen", back_populates="producto")


class Cliente(Base):
    """Modelo de Cliente"""
    __tablename__ = "clientes"

    id = Column(Integer, primary_key=True, index=True)
    nombre = Column(String(255), nullable=False)
    documento = Column(BigInteger, unique=True, nullable=False, index=True)
    telefono = Column(String(50))
    estado = Column(Boolean, nullable=False, default=True)

    ventas = relationship("Venta", back_populates="cliente")


# =====================================================
# USUARIOS
# =====================================================

class Usuario(Base):
    """Modelo de Usuario"""
    __tablename__ = "usuarios"

    id = Column(Integer, primary_key=True, index=True)
    nombre = Column(String(255), nullable=False)
    usuario = Column(String(100), unique=True, nullable=False, index=True)
    contrasena = Column(String(255), nullable=False)
    tipo = Column(String(20), nullable=False, default='vendedor')
    estado = Column(Boolean, nullable=False, default=True)

    ventas = relationship("Venta", back_populates="usuario", passive_deletes=True)


# =====================================================
# ALMACÉN
# =====================================================

class MovimientoAlmacen(Base):
    """Movimiento de almacén (solo inserción)"""
    __tablename__ = "almacen"

    id = Column(Integer, primary_key=True, index=True)
    producto_id = Column(Integer, ForeignKey("productos.id"), nullable=False, index=True)
    tipo_movimiento = Column(String(20), nullable=False)
    cantidad = Column(Integer, nullable=False)
    fecha = Column(DateTime, nullable=False, server_default=func.current_timestamp())

    __table_args__ = (
        CheckConstraint('cantidad > 0', name='almacen_cantidad_positiva'),
    )

    producto = relationship("Producto", back_populates="movimientos")


# =====================================================
# VENTAS
# =====================================================

class Venta(Base):
    """Modelo de Venta"""
    __tablename__ = "ventas"

    id = Column(Integer, primary_key=True, index=True)
    fecha = Column(DateTime, nullable=False, server_default=func.current_timestamp())
    cliente_id = Column(Integer, ForeignKey("clientes.id"), nullable=False, index=True)
    usuarios_id = Column(Integer, ForeignKey("usuarios.id"), nullable=False, index=True)

    # Pago
    total = Column(Numeric(12, 2), nullable=False)
    adelanto = Column(Numeric(12, 2), nullable=False, default=0)
    diferencia = Column(Numeric(12, 2), nullable=False, default=0)
    estado = Column(String(20), nullable=False, default='pendiente')
    es_adelanto = Column(Boolean, nullable=False, default=False)
    metodo_pago = Column(String(50))
    tipo_precio = Column(String(50))
    codigo_operacion = Column(String(100))
    ultimos_digitos = Column(String(10))
    comision_tarjeta = Column(Numeric(12, 2))
    total_con_comision = Column(Numeric(12, 2))

    # Envío
    agencia_encomienda = Column(String(255))
    destino = Column(String(255))
    contrasena = Column(String(100))
    nombre_motorizado = Column(String(255))
    placa_moto = Column(String(20))

    cliente = relationship("Cliente", back_populates="ventas")
    usuario = relationship("Usuario", back_populates="ventas")
    detalles = relationship("DetalleVenta", back_populates="venta", order_by="DetalleVenta.id")


class DetalleVenta(Base):
    """Línea de producto dentro de una venta"""
    __tablename__ = "detalle_venta"

    id = Column(Integer, primary_key=True, index=True)
    venta_id = Column(Integer, ForeignKey("ventas.id"), nullable=False, index=True)
    producto_id = Column(Integer, ForeignKey("productos.id"), nullable=False, index=True)
    cantidad = Column(Integer, nullable=False)
    precio_unitario = Column(Numeric(12, 2), nullable=False)
    subtotal = Column(Numeric(12, 2), nullable=False)

    venta = relationship("Venta", back_populates="detalles")
    producto = relationship("Producto")


# =====================================================
# COTIZACIONES
# =====================================================

class Cotizacion(Base):
    """Cotización: borrador de venta que no compromete stock"""
    __tablename__ = "cotizaciones"

    id = Column(Integer, primary_key=True, index=True)
    cliente_id = Column(Integer, ForeignKey("clientes.id"), nullable=True)
    cliente_nombre = Column(String(255))
    cliente_documento = Column(String(50))

    metodo_pago = Column(String(50), nullable=False, default='efectivo')
    codigo_operacion = Column(String(100))
    ultimos_digitos = Column(String(10))
    comision_tarjeta = Column(Numeric(12, 2), nullable=False, default=0)

    es_adelanto = Column(Boolean, nullable=False, default=False)
    monto_adelanto = Column(Numeric(12, 2))
    saldo_pendiente = Column(Numeric(12, 2))
    tipo_precio = Column(String(50), nullable=False, default='general')

    es_envio_encomienda = Column(Boolean, nullable=False, default=False)
    empresa_encomienda = Column(String(255))
    destino_encomienda = Column(String(255))
    es_envio_motorizado = Column(Boolean, nullable=False, default=False)
    nombre_motorizado = Column(String(255))
    placa_moto = Column(String(20))

    total_items = Column(Integer, nullable=False, default=0)
    total = Column(Numeric(12, 2), nullable=False)
    total_con_comision = Column(Numeric(12, 2))
    estado = Column(String(30), nullable=False, default='pendiente')
    observaciones = Column(Text)

    creado_por = Column(Integer, ForeignKey("usuarios.id"))
    fecha_creacion = Column(DateTime, nullable=False, server_default=func.current_timestamp())
    fecha_actualizacion = Column(DateTime)

    items = relationship(
        "CotizacionDetalle",
        back_populates="cotizacion",
        cascade="all, delete-orphan",
        order_by="CotizacionDetalle.id"
    )


class CotizacionDetalle(Base):
    """Línea de una cotización"""
    __tablename__ = "cotizaciones_detalle"

    id = Column(Integer, primary_key=True, index=True)
    cotizacion_id = Column(Integer, ForeignKey("cotizaciones.id", ondelete="CASCADE"), nullable=False, index=True)
    producto_id = Column(Integer, nullable=True)
    producto_nombre = Column(String(255))
    cantidad = Column(Integer, nullable=False)
    precio_unitario = Column(Numeric(12, 2), nullable=False)
    subtotal = Column(Numeric(12, 2), nullable=False)
    fecha_creacion = Column(DateTime, nullable=False, server_default=func.current_timestamp())

    cotizacion = relationship("Cotizacion", back_populates="items")
