"""
Pruebas del registro de clientes.
"""

from sistema_ventas.modules.clientes.repository import ClientesRepository
from tests.helpers import crear_cliente


class TestClientes:

    def test_create_coerces_document_to_int(self, client, vendedor_headers):
        data = crear_cliente(client, vendedor_headers, documento="00012345")
        assert data["documento"] == 12345
        assert data["estado"] is True

    def test_non_numeric_document_rejected(self, client, vendedor_headers):
        resp = client.post(
            "/api/clientes",
            json={"nombre": "Ana", "documento": "ABC123"},
            headers=vendedor_headers,
        )
        assert resp.status_code == 400
        assert resp.json()["message"] == "El documento debe ser un número válido."

    def test_missing_name_rejected(self, client, vendedor_headers):
        resp = client.post("/api/clientes", json={"documento": 1}, headers=vendedor_headers)
        assert resp.status_code == 400
        assert resp.json()["message"] == "El nombre y el documento son requeridos."

    def test_duplicate_document_is_conflict(self, client, vendedor_headers, cliente):
        resp = client.post(
            "/api/clientes",
            json={"nombre": "Otra persona", "documento": 45871236},
            headers=vendedor_headers,
        )
        assert resp.status_code == 400
        assert resp.json()["message"] == "Ya existe un cliente con el documento 45871236."

    def test_duplicate_document_race_is_conflict(self, client, vendedor_headers, cliente, monkeypatch):
        monkeypatch.setattr(ClientesRepository, "get_by_document", lambda self, documento: None)
        resp = client.post(
            "/api/clientes",
            json={"nombre": "Otra persona", "documento": 45871236},
            headers=vendedor_headers,
        )
        assert resp.status_code == 400
        assert resp.json()["message"] == "Ya existe un cliente con el documento 45871236."
        assert client.get("/api/clientes", headers=vendedor_headers).json()["count"] == 1

    def test_document_out_of_range_rejected(self, client, vendedor_headers):
        resp = client.post(
            "/api/clientes",
            json={"nombre": "Ana", "documento": "99999999999999999999"},
            headers=vendedor_headers,
        )
        assert resp.status_code == 400
        assert resp.json()["message"] == "El documento debe ser un número válido."

    def test_list_ordered_by_name(self, client, vendedor_headers):
        crear_cliente(client, vendedor_headers, nombre="Zoila", documento=2)
        crear_cliente(client, vendedor_headers, nombre="Alberto", documento=1)
        body = client.get("/api/clientes", headers=vendedor_headers).json()
        assert body["count"] == 2
        assert [c["nombre"] for c in body["data"]] == ["Alberto", "Zoila"]

    def test_update_document_taken(self, client, vendedor_headers, cliente):
        otro = crear_cliente(client, vendedor_headers, nombre="Luis", documento=777)
        resp = client.put(
            f"/api/clientes/{otro['id']}",
            json={"documento": "45871236"},
            headers=vendedor_headers,
        )
        assert resp.status_code == 400

    def test_update_phone(self, client, vendedor_headers, cliente):
        resp = client.put(
            f"/api/clientes/{cliente['id']}",
            json={"telefono": "900111222"},
            headers=vendedor_headers,
        )
        assert resp.status_code == 200
        assert resp.json()["data"]["telefono"] == "900111222"
        assert resp.json()["data"]["documento"] == cliente["documento"]

    def test_deactivate_only_changes_estado(self, client, vendedor_headers, cliente):
        resp = client.delete(f"/api/clientes/{cliente['id']}", headers=vendedor_headers)
        assert resp.status_code == 200
        despues = client.get(f"/api/clientes/{cliente['id']}", headers=vendedor_headers).json()["data"]
        assert despues == dict(cliente, estado=False)

    def test_english_alias_and_404(self, client, vendedor_headers):
        resp = client.get("/api/clients/999", headers=vendedor_headers)
        assert resp.status_code == 404
        assert resp.json()["success"] is False
