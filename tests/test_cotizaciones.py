"""
Pruebas de cotizaciones.

Verifica:
- Alta con items y total positivo, valores por defecto y creado_por
- Detalle con información de producto y resumen
- Preparación de venta con alertas de stock
- Conversión: exige forzar_conversion cuando falta stock y no registra venta
"""

import pytest

from tests.helpers import crear_producto, stock_de


def crear_cotizacion(client, headers, producto_id=None, cantidad=2, **overrides):
    payload = {
        "cliente_nombre": "Cliente Mostrador",
        "total": 100,
        "total_items": 1,
        "items": [
            {
                "producto_id": producto_id,
                "producto_nombre": "Polo algodón talla M",
                "cantidad": cantidad,
                "precio_unitario": 50,
                "subtotal": 50 * cantidad,
            }
        ],
    }
    payload.update(overrides)
    resp = client.post("/api/cotizaciones", json=payload, headers=headers)
    assert resp.status_code == 201, resp.json()
    return resp.json()["data"]


@pytest.fixture
def cotizacion(client, vendedor_headers, producto):
    return crear_cotizacion(client, vendedor_headers, producto_id=producto["id"])


class TestCrearCotizacion:

    def test_defaults_and_author(self, client, vendedor_headers, vendedor_id, cotizacion):
        assert cotizacion["estado"] == "pendiente"
        assert cotizacion["metodo_pago"] == "efectivo"
        assert cotizacion["tipo_precio"] == "general"
        assert cotizacion["comision_tarjeta"] == 0
        assert cotizacion["total_con_comision"] == 100
        assert cotizacion["creado_por"] == vendedor_id
        assert len(cotizacion["items"]) == 1

    def test_does_not_touch_stock(self, client, vendedor_headers, producto, cotizacion):
        assert stock_de(client, vendedor_headers, producto["id"]) == 10

    def test_items_required(self, client, vendedor_headers):
        resp = client.post("/api/cotizaciones", json={"total": 10, "items": []}, headers=vendedor_headers)
        assert resp.status_code == 400
        assert resp.json()["message"] == "Los items de la cotización son requeridos"

    @pytest.mark.parametrize("total", [0, -5, None])
    def test_total_must_be_positive(self, client, vendedor_headers, total):
        resp = client.post(
            "/api/cotizaciones",
            json={"total": total, "items": [{"cantidad": 1, "precio_unitario": 1}]},
            headers=vendedor_headers,
        )
        assert resp.status_code == 400
        assert resp.json()["message"] == "El total debe ser mayor a 0"

    def test_free_text_item_without_product(self, client, vendedor_headers):
        data = crear_cotizacion(client, vendedor_headers, producto_id=None)
        assert data["items"][0]["producto_id"] is None


class TestConsultarCotizacion:

    def test_list_and_get(self, client, vendedor_headers, cotizacion):
        body = client.get("/api/cotizaciones", headers=vendedor_headers).json()
        assert body["count"] == 1
        assert "items" not in body["data"][0]

        resp = client.get(f"/api/cotizaciones/{cotizacion['id']}", headers=vendedor_headers)
        assert resp.json()["data"]["items"][0]["cantidad"] == 2

    def test_missing_is_404(self, client, vendedor_headers):
        resp = client.get("/api/cotizaciones/999", headers=vendedor_headers)
        assert resp.status_code == 404
        assert resp.json()["message"] == "Cotización no encontrada"

    def test_detail_enriches_lines(self, client, vendedor_headers, producto):
        cotizacion = crear_cotizacion(
            client, vendedor_headers,
            items=[
                {"producto_id": producto["id"], "producto_nombre": "Polo", "cantidad": 2,
                 "precio_unitario": 25, "subtotal": 50},
                {"producto_nombre": "Servicio de bordado", "cantidad": 3,
                 "precio_unitario": 10, "subtotal": 30},
            ],
            total=80,
        )
        data = client.get(f"/api/cotizaciones/{cotizacion['id']}/detalle", headers=vendedor_headers).json()["data"]

        assert data["cotizacion"]["id"] == cotizacion["id"]
        assert data["productos"][0]["producto_codigo"] == "P-001"
        assert data["productos"][0]["producto_info"]["stock"] == 10
        assert data["productos"][1]["producto_codigo"] == "N/A"
        assert data["productos"][1]["producto_info"] is None
        assert data["resumen"] == {
            "total_items": 2,
            "cantidad_total": 5,
            "total_productos": 80.0,
            "total": 80.0,
            "total_con_comision": 80.0,
        }


class TestActualizarCotizacion:

    def test_protected_fields_are_ignored(self, client, vendedor_headers, cotizacion):
        resp = client.put(
            f"/api/cotizaciones/{cotizacion['id']}",
            json={"observaciones": "Entrega el lunes", "estado": "aprobada"},
            headers=vendedor_headers,
        )
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["observaciones"] == "Entrega el lunes"
        assert data["estado"] == "aprobada"
        assert data["creado_por"] == cotizacion["creado_por"]
        assert data["fecha_creacion"] == cotizacion["fecha_creacion"]
        assert data["fecha_actualizacion"] is not None

    def test_unknown_status_rejected(self, client, vendedor_headers, cotizacion):
        resp = client.put(f"/api/cotizaciones/{cotizacion['id']}", json={"estado": "cerrada"}, headers=vendedor_headers)
        assert resp.status_code == 400

    def test_replace_lines_and_totals(self, client, vendedor_headers, cotizacion):
        resp = client.put(
            f"/api/cotizaciones/{cotizacion['id']}/detalle",
            json={
                "items": [
                    {"producto_nombre": "A", "cantidad": 1, "precio_unitario": 10},
                    {"producto_nombre": "B", "cantidad": 2, "precio_unitario": 5},
                ],
                "total": 20,
                "total_items": 2,
            },
            headers=vendedor_headers,
        )
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert [i["producto_nombre"] for i in data["items"]] == ["A", "B"]
        assert [i["subtotal"] for i in data["items"]] == [10, 10]
        assert data["total"] == 20
        assert data["total_items"] == 2

    def test_replace_lines_requires_items(self, client, vendedor_headers, cotizacion):
        resp = client.put(f"/api/cotizaciones/{cotizacion['id']}/detalle", json={"items": []}, headers=vendedor_headers)
        assert resp.status_code == 400


class TestConversion:

    def test_prepare_without_alerts(self, client, vendedor_headers, cotizacion):
        body = client.get(f"/api/cotizaciones/{cotizacion['id']}/preparar-venta", headers=vendedor_headers).json()
        assert body["message"] == "Cotización lista para convertir a venta"
        data = body["data"]
        assert data["puede_convertir"] is True
        assert data["alertas_stock"] == []
        assert data["datos_venta"]["cotizacion_origen_id"] == cotizacion["id"]
        assert data["datos_venta"]["items"][0]["cantidad"] == 2

    def test_prepare_reports_stock_alerts(self, client, vendedor_headers, producto):
        cotizacion = crear_cotizacion(client, vendedor_headers, producto_id=producto["id"], cantidad=12)
        data = client.get(f"/api/cotizaciones/{cotizacion['id']}/preparar-venta", headers=vendedor_headers).json()["data"]
        assert data["puede_convertir"] is False
        assert data["alertas_stock"] == [{
            "producto_id": producto["id"],
            "producto_nombre": "Polo algodón talla M",
            "cantidad_requerida": 12,
            "stock_actual": 10,
            "faltante": 2,
        }]

    def test_convert_with_alerts_requires_force(self, client, vendedor_headers, producto):
        cotizacion = crear_cotizacion(client, vendedor_headers, producto_id=producto["id"], cantidad=12)
        resp = client.post(f"/api/cotizaciones/{cotizacion['id']}/convertir-venta", json={}, headers=vendedor_headers)
        assert resp.status_code == 400
        assert resp.json()["alertas_stock"][0]["faltante"] == 2

        resp = client.post(
            f"/api/cotizaciones/{cotizacion['id']}/convertir-venta",
            json={"forzar_conversion": True},
            headers=vendedor_headers,
        )
        assert resp.status_code == 200
        assert resp.json()["data"]["alertas_procesadas"][0]["faltante"] == 2

    def test_convert_only_flips_status(self, client, vendedor_headers, producto, cotizacion):
        resp = client.post(f"/api/cotizaciones/{cotizacion['id']}/convertir-venta", headers=vendedor_headers)
        assert resp.status_code == 200
        assert resp.json()["message"] == "Cotización convertida a venta exitosamente"
        assert resp.json()["data"]["datos_venta"]["total"] == 100

        estado = client.get(f"/api/cotizaciones/{cotizacion['id']}", headers=vendedor_headers).json()["data"]["estado"]
        assert estado == "convertida_venta"
        assert client.get("/api/ventas", headers=vendedor_headers).json()["count"] == 0
        assert stock_de(client, vendedor_headers, producto["id"]) == 10

    def test_converted_cannot_be_prepared_again_or_deleted(self, client, vendedor_headers, cotizacion):
        client.post(f"/api/cotizaciones/{cotizacion['id']}/convertir-venta", headers=vendedor_headers)

        resp = client.get(f"/api/cotizaciones/{cotizacion['id']}/preparar-venta", headers=vendedor_headers)
        assert resp.status_code == 400
        assert resp.json()["message"] == "Esta cotización ya fue convertida a venta"

        resp = client.delete(f"/api/cotizaciones/{cotizacion['id']}", headers=vendedor_headers)
        assert resp.status_code == 400
        assert resp.json()["message"] == "No se puede eliminar una cotización que ya fue convertida a venta"


class TestEliminarYEstadisticas:

    def test_delete_pending(self, client, vendedor_headers, cotizacion):
        resp = client.delete(f"/api/cotizaciones/{cotizacion['id']}", headers=vendedor_headers)
        assert resp.status_code == 200
        assert client.get(f"/api/cotizaciones/{cotizacion['id']}", headers=vendedor_headers).status_code == 404

    def test_stats(self, client, vendedor_headers, producto):
        primera = crear_cotizacion(client, vendedor_headers, producto_id=producto["id"])
        crear_cotizacion(client, vendedor_headers, producto_id=producto["id"], total=50)
        tercera = crear_cotizacion(client, vendedor_headers, producto_id=producto["id"], total=25)
        client.put(f"/api/cotizaciones/{primera['id']}", json={"estado": "aprobada"}, headers=vendedor_headers)
        client.post(f"/api/cotizaciones/{tercera['id']}/convertir-venta", headers=vendedor_headers)

        data = client.get("/api/cotizaciones/estadisticas/resumen", headers=vendedor_headers).json()["data"]
        assert data == {
            "total_cotizaciones": 3,
            "pendientes": 1,
            "aprobadas": 1,
            "convertidas": 1,
            "valor_total": 175.0,
        }
