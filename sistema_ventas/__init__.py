"""Sistema de Ventas JC - API de productos, clientes, almacén, ventas y cotizaciones"""
