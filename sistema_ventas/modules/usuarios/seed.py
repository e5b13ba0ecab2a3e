from typing import List, Tuple
import logging

from sqlalchemy.orm import Session

from sistema_ventas.core.auth.service import AuthService
from .repository import UsuariosRepository

logger = logging.getLogger(__name__)

# (nombre, usuario, contraseña, tipo)
USUARIOS_INICIALES: List[Tuple[str, str, str, str]] = [
    ("Administrador Principal", "admin", "admin123", "admin"),
    ("Vendedor Principal", "vendedor", "vendedor123", "vendedor"),
]


def seed_usuarios(
    db: Session,
    auth_service: AuthService,
    usuarios: List[Tuple[str, str, str, str]] = USUARIOS_INICIALES
) -> List[str]:
    """Crear las cuentas iniciales que aún no existan; devuelve los logins creados"""
    repository = UsuariosRepository(db, auth_service)
    creados = []

    for nombre, usuario, contrasena, tipo in usuarios:
        if repository.get_by_login(usuario):
            logger.info(f"⏭️ Usuario existente, se omite: {usuario}")
            continue

        repository.create({
            "nombre": nombre,
            "usuario": usuario,
            "contrasena": contrasena,
            "tipo": tipo
        })
        creados.append(usuario)
        logger.info(f"✅ Usuario creado: {usuario} ({tipo})")

    return creados
