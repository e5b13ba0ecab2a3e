"""
Fixtures de pytest para la API de ventas.

Cada prueba recibe una aplicación nueva sobre SQLite en memoria, con los
usuarios iniciales (admin y vendedor) ya creados.
"""

import pytest
from fastapi.testclient import TestClient

from sistema_ventas.config.settings import Settings
from sistema_ventas.main import create_app
from sistema_ventas.modules.usuarios.seed import seed_usuarios
from tests.helpers import crear_cliente, crear_producto


@pytest.fixture
def settings():
    return Settings(
        database_url="sqlite://",
        secret_key="clave-solo-para-pruebas",
        bcrypt_rounds=4,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    """Cliente HTTP; el bloque with ejecuta el arranque (creación de tablas)."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db_session(app, client):
    session = app.state.database.session()
    yield session
    session.close()


@pytest.fixture
def seed(app, db_session):
    """Usuarios iniciales: admin/admin123 y vendedor/vendedor123."""
    seed_usuarios(db_session, app.state.auth_service)


def login(client, usuario, contrasena):
    resp = client.post("/api/auth/login", json={"usuario": usuario, "contrasena": contrasena})
    assert resp.status_code == 200, resp.json()
    return resp.json()["token"]


@pytest.fixture
def admin_headers(client, seed):
    return {"Authorization": login(client, "admin", "admin123")}


@pytest.fixture
def vendedor_headers(client, seed):
    return {"Authorization": login(client, "vendedor", "vendedor123")}


@pytest.fixture
def admin_id(client, admin_headers):
    return client.get("/api/auth/me", headers=admin_headers).json()["data"]["id"]


@pytest.fixture
def vendedor_id(client, vendedor_headers):
    return client.get("/api/auth/me", headers=vendedor_headers).json()["data"]["id"]


@pytest.fixture
def producto(client, vendedor_headers):
    return crear_producto(client, vendedor_headers)


@pytest.fixture
def cliente(client, vendedor_headers):
    return crear_cliente(client, vendedor_headers)
