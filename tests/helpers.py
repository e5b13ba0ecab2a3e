"""Altas rápidas vía API para armar escenarios de prueba."""


def crear_producto(client, headers, **overrides):
    payload = {
        "codigo": "P-001",
        "descripcion": "Polo algodón talla M",
        "stock": 10,
        "pre_compra": 30,
        "pre_general": 50,
    }
    payload.update(overrides)
    resp = client.post("/api/productos", json=payload, headers=headers)
    assert resp.status_code == 201, resp.json()
    return resp.json()["data"]


def crear_cliente(client, headers, **overrides):
    payload = {"nombre": "Rosa Quispe", "documento": "45871236", "telefono": "987654321"}
    payload.update(overrides)
    resp = client.post("/api/clientes", json=payload, headers=headers)
    assert resp.status_code == 201, resp.json()
    return resp.json()["data"]


def crear_venta(client, headers, cliente_id, usuarios_id, **overrides):
    payload = {
        "cliente_id": cliente_id,
        "usuarios_id": usuarios_id,
        "total": 100,
        "adelanto": 40,
        "es_adelanto": True,
    }
    payload.update(overrides)
    resp = client.post("/api/ventas", json=payload, headers=headers)
    assert resp.status_code == 201, resp.json()
    return resp.json()


def stock_de(client, headers, producto_id):
    return client.get(f"/api/productos/{producto_id}", headers=headers).json()["data"]["stock"]
