"""
Pruebas del ciclo de vida de una venta.

Verifica:
- Estado inicial según es_adelanto y adelanto
- diferencia == max(0, total - adelanto) tras registrar, actualizar y pagar
- Pagos parciales devuelven la venta a 'pendiente' (no a 'parcial')
- Anulación solo con credenciales de un administrador activo
- Cada item genera un egreso de almacén; los items fallidos no tumban la venta
"""

import pytest
from sqlalchemy.exc import OperationalError

from sistema_ventas.modules.ventas.repository import DetalleVentaRepository
from tests.helpers import crear_producto, crear_venta, stock_de


@pytest.fixture
def venta_parcial(client, vendedor_headers, cliente, vendedor_id):
    return crear_venta(client, vendedor_headers, cliente["id"], vendedor_id)["data"]


def pagar(client, headers, venta_id, monto, ruta="marcar-pagada"):
    return client.post(f"/api/ventas/{venta_id}/{ruta}", json={"monto": monto}, headers=headers)


# =============================================================================
# REGISTRO
# =============================================================================


class TestRegistrarVenta:

    def test_partial_advance_is_parcial(self, venta_parcial):
        assert venta_parcial["estado"] == "parcial"
        assert venta_parcial["diferencia"] == 60
        assert venta_parcial["adelanto"] == 40

    def test_without_advance_flag_is_pagada(self, client, vendedor_headers, cliente, vendedor_id):
        body = crear_venta(client, vendedor_headers, cliente["id"], vendedor_id, es_adelanto=False)
        assert body["data"]["estado"] == "pagada"
        assert body["message"] == "Venta registrada correctamente."

    def test_zero_advance_is_pendiente(self, client, vendedor_headers, cliente, vendedor_id):
        body = crear_venta(client, vendedor_headers, cliente["id"], vendedor_id, adelanto=0)
        assert body["data"]["estado"] == "pendiente"
        assert body["data"]["diferencia"] == 100

    def test_difference_is_floored_at_zero(self, client, vendedor_headers, cliente, vendedor_id):
        body = crear_venta(client, vendedor_headers, cliente["id"], vendedor_id, adelanto=150)
        assert body["data"]["diferencia"] == 0

    def test_required_fields(self, client, vendedor_headers, cliente):
        resp = client.post("/api/ventas", json={"cliente_id": cliente["id"], "total": 10}, headers=vendedor_headers)
        assert resp.status_code == 400
        assert resp.json()["message"] == "Los campos cliente_id, usuarios_id, total y adelanto son requeridos."

    def test_unknown_client_is_404(self, client, vendedor_headers, vendedor_id):
        resp = client.post(
            "/api/ventas",
            json={"cliente_id": 999, "usuarios_id": vendedor_id, "total": 10, "adelanto": 0},
            headers=vendedor_headers,
        )
        assert resp.status_code == 404

    def test_items_create_lines_and_decrement_stock(self, client, vendedor_headers, cliente, vendedor_id, producto):
        body = crear_venta(
            client, vendedor_headers, cliente["id"], vendedor_id,
            items=[{"producto_id": producto["id"], "cantidad": 2, "precio_unitario": 50}],
        )
        assert "detalles_fallidos" not in body
        detalles = body["data"]["detalles"]
        assert len(detalles) == 1
        assert detalles[0]["subtotal"] == 100
        assert detalles[0]["productos"]["codigo"] == "P-001"
        assert stock_de(client, vendedor_headers, producto["id"]) == 8

        movimientos = client.get("/api/almacen", headers=vendedor_headers).json()["data"]
        assert movimientos[0]["tipo_movimiento"] == "egreso"
        assert movimientos[0]["cantidad"] == 2

    def test_failed_item_is_skipped(self, client, vendedor_headers, cliente, vendedor_id, producto):
        otro = crear_producto(client, vendedor_headers, codigo="P-002", stock=1)
        body = crear_venta(
            client, vendedor_headers, cliente["id"], vendedor_id,
            items=[
                {"producto_id": producto["id"], "cantidad": 1, "precio_unitario": 50},
                {"producto_id": otro["id"], "cantidad": 5, "precio_unitario": 10},
                {"producto_id": 999, "cantidad": 1, "precio_unitario": 10},
            ],
        )
        assert body["success"] is True
        assert body["detalles_fallidos"] == 2
        assert [d["producto_id"] for d in body["data"]["detalles"]] == [producto["id"]]
        assert stock_de(client, vendedor_headers, otro["id"]) == 1


# =============================================================================
# CONSULTA Y ACTUALIZACIÓN
# =============================================================================


class TestConsultarVenta:

    def test_get_includes_summaries_and_lines(self, client, vendedor_headers, venta_parcial):
        resp = client.get(f"/api/ventas/{venta_parcial['id']}", headers=vendedor_headers)
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["clientes"] == {"nombre": "Rosa Quispe", "documento": 45871236}
        assert data["usuarios"] == {"nombre": "Vendedor Principal", "usuario": "vendedor"}
        assert data["detalles"] == []

    def test_list_newest_first(self, client, vendedor_headers, cliente, vendedor_id):
        primera = crear_venta(client, vendedor_headers, cliente["id"], vendedor_id)["data"]
        segunda = crear_venta(client, vendedor_headers, cliente["id"], vendedor_id)["data"]
        body = client.get("/api/ventas", headers=vendedor_headers).json()
        assert body["count"] == 2
        assert [v["id"] for v in body["data"]] == [segunda["id"], primera["id"]]

    def test_get_missing_is_404(self, client, vendedor_headers):
        resp = client.get("/api/ventas/999", headers=vendedor_headers)
        assert resp.status_code == 404
        assert resp.json()["message"] == "No se encontró una venta con el ID 999."

    def test_get_survives_line_loading_error(self, client, vendedor_headers, venta_parcial, monkeypatch):
        def fallar(self, venta_id):
            raise OperationalError("SELECT * FROM detalle_venta", {}, Exception("conexión perdida"))

        monkeypatch.setattr(DetalleVentaRepository, "get_by_venta", fallar)

        resp = client.get(f"/api/ventas/{venta_parcial['id']}", headers=vendedor_headers)
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["id"] == venta_parcial["id"]
        assert data["detalles"] == []


class TestActualizarVenta:

    def test_total_change_recomputes_difference(self, client, vendedor_headers, venta_parcial):
        resp = client.put(f"/api/ventas/{venta_parcial['id']}", json={"total": 150}, headers=vendedor_headers)
        assert resp.status_code == 200
        assert resp.json()["data"]["diferencia"] == 110

    def test_advance_above_total_floors_difference(self, client, vendedor_headers, venta_parcial):
        resp = client.put(f"/api/ventas/{venta_parcial['id']}", json={"adelanto": 200}, headers=vendedor_headers)
        assert resp.json()["data"]["diferencia"] == 0

    @pytest.mark.parametrize("campo", ["total", "adelanto"])
    def test_negative_amounts_rejected(self, client, vendedor_headers, venta_parcial, campo):
        resp = client.put(f"/api/ventas/{venta_parcial['id']}", json={campo: -50}, headers=vendedor_headers)
        assert resp.status_code == 400
        assert resp.json()["message"] == "El total y el adelanto no pueden ser negativos."

        data = client.get(f"/api/ventas/{venta_parcial['id']}", headers=vendedor_headers).json()["data"]
        assert data["total"] == 100
        assert data["adelanto"] == 40
        assert data["diferencia"] == 60

    def test_other_fields_keep_difference(self, client, vendedor_headers, venta_parcial):
        resp = client.put(
            f"/api/ventas/{venta_parcial['id']}",
            json={"destino": "Cusco", "agencia_encomienda": "Shalom"},
            headers=vendedor_headers,
        )
        data = resp.json()["data"]
        assert data["destino"] == "Cusco"
        assert data["diferencia"] == 60

    def test_update_missing_is_404(self, client, vendedor_headers):
        resp = client.put("/api/ventas/999", json={"total": 1}, headers=vendedor_headers)
        assert resp.status_code == 404


# =============================================================================
# PAGOS
# =============================================================================


class TestMarcarPagada:

    def test_full_payment_marks_pagada(self, client, vendedor_headers, venta_parcial):
        resp = pagar(client, vendedor_headers, venta_parcial["id"], 60)
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["adelanto"] == 100
        assert data["diferencia"] == 0
        assert data["estado"] == "pagada"

    def test_partial_payment_resets_to_pendiente(self, client, vendedor_headers, venta_parcial):
        resp = pagar(client, vendedor_headers, venta_parcial["id"], 30, ruta="pagar")
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["adelanto"] == 70
        assert data["diferencia"] == 30
        assert data["estado"] == "pendiente"

    def test_overpayment_is_clamped_to_total(self, client, vendedor_headers, venta_parcial):
        data = pagar(client, vendedor_headers, venta_parcial["id"], 500).json()["data"]
        assert data["adelanto"] == 100
        assert data["diferencia"] == 0

    @pytest.mark.parametrize("monto", [0, -10, "abc", None])
    def test_amount_must_be_positive(self, client, vendedor_headers, venta_parcial, monto):
        resp = pagar(client, vendedor_headers, venta_parcial["id"], monto)
        assert resp.status_code == 400
        assert resp.json()["message"] == "El monto debe ser un número positivo."

    def test_paid_sale_is_conflict_and_unchanged(self, client, vendedor_headers, venta_parcial):
        pagar(client, vendedor_headers, venta_parcial["id"], 60)
        antes = client.get(f"/api/ventas/{venta_parcial['id']}", headers=vendedor_headers).json()["data"]

        resp = pagar(client, vendedor_headers, venta_parcial["id"], 10)
        assert resp.status_code == 400

        despues = client.get(f"/api/ventas/{venta_parcial['id']}", headers=vendedor_headers).json()["data"]
        assert despues == antes


# =============================================================================
# ANULACIÓN
# =============================================================================


class TestAnularVenta:

    def anular(self, client, headers, venta_id, usuario, contrasena):
        return client.post(
            f"/api/ventas/{venta_id}/anular",
            json={"usuario": usuario, "contrasena": contrasena},
            headers=headers,
        )

    def test_admin_credentials_void_sale(self, client, vendedor_headers, venta_parcial):
        resp = self.anular(client, vendedor_headers, venta_parcial["id"], "admin", "admin123")
        assert resp.status_code == 200
        assert resp.json()["data"]["estado"] == "anulada"

    def test_paid_sale_can_be_voided_twice(self, client, vendedor_headers, venta_parcial):
        pagar(client, vendedor_headers, venta_parcial["id"], 60)
        for _ in range(2):
            resp = self.anular(client, vendedor_headers, venta_parcial["id"], "admin", "admin123")
            assert resp.status_code == 200
            assert resp.json()["data"]["estado"] == "anulada"

    def test_seller_credentials_are_forbidden(self, client, vendedor_headers, venta_parcial):
        resp = self.anular(client, vendedor_headers, venta_parcial["id"], "vendedor", "vendedor123")
        assert resp.status_code == 403
        estado = client.get(f"/api/ventas/{venta_parcial['id']}", headers=vendedor_headers).json()["data"]["estado"]
        assert estado == "parcial"

    def test_bad_password_is_401(self, client, vendedor_headers, venta_parcial):
        resp = self.anular(client, vendedor_headers, venta_parcial["id"], "admin", "otra")
        assert resp.status_code == 401

    def test_missing_credentials_is_400(self, client, vendedor_headers, venta_parcial):
        resp = self.anular(client, vendedor_headers, venta_parcial["id"], "admin", "")
        assert resp.status_code == 400

    def test_missing_sale_is_404(self, client, vendedor_headers, seed):
        resp = self.anular(client, vendedor_headers, 999, "admin", "admin123")
        assert resp.status_code == 404

    def test_voided_sale_cannot_be_paid(self, client, vendedor_headers, venta_parcial):
        self.anular(client, vendedor_headers, venta_parcial["id"], "admin", "admin123")
        resp = pagar(client, vendedor_headers, venta_parcial["id"], 60)
        assert resp.status_code == 400


# =============================================================================
# DETALLES DE VENTA
# =============================================================================


class TestDetallesVenta:

    def test_add_line_decrements_stock(self, client, vendedor_headers, venta_parcial, producto):
        resp = client.post(
            "/api/detalles-venta",
            json={"venta_id": venta_parcial["id"], "producto_id": producto["id"], "cantidad": 3, "precio_unitario": 20},
            headers=vendedor_headers,
        )
        assert resp.status_code == 201
        assert resp.json()["message"] == "Detalle de venta registrado y stock actualizado."
        assert resp.json()["data"]["subtotal"] == 60
        assert stock_de(client, vendedor_headers, producto["id"]) == 7

        body = client.get(f"/api/detalle-venta/{venta_parcial['id']}", headers=vendedor_headers).json()
        assert body["count"] == 1

    def test_explicit_subtotal_is_kept(self, client, vendedor_headers, venta_parcial, producto):
        resp = client.post(
            "/api/detalles-venta",
            json={
                "venta_id": venta_parcial["id"], "producto_id": producto["id"],
                "cantidad": 2, "precio_unitario": 20, "subtotal": 35,
            },
            headers=vendedor_headers,
        )
        assert resp.json()["data"]["subtotal"] == 35

    def test_insufficient_stock(self, client, vendedor_headers, venta_parcial, producto):
        resp = client.post(
            "/api/detalles-venta",
            json={"venta_id": venta_parcial["id"], "producto_id": producto["id"], "cantidad": 50, "precio_unitario": 1},
            headers=vendedor_headers,
        )
        assert resp.status_code == 400
        assert "insuficiente" in resp.json()["message"]

    def test_required_fields(self, client, vendedor_headers, venta_parcial):
        resp = client.post("/api/detalles-venta", json={"venta_id": venta_parcial["id"]}, headers=vendedor_headers)
        assert resp.status_code == 400
        assert resp.json()["message"] == (
            "Los campos venta_id, producto_id, cantidad y precio_unitario son requeridos."
        )

    def test_unknown_sale_is_404(self, client, vendedor_headers, producto):
        resp = client.post(
            "/api/detalles-venta",
            json={"venta_id": 999, "producto_id": producto["id"], "cantidad": 1, "precio_unitario": 1},
            headers=vendedor_headers,
        )
        assert resp.status_code == 404
        assert stock_de(client, vendedor_headers, producto["id"]) == 10
