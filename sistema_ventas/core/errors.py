# sistema_ventas/core/errors.py
from typing import Any, Dict, Optional


class DomainError(Exception):
    """Error de negocio con discriminante; el status HTTP se decide en un solo lugar"""

    kind = "internal"

    def __init__(self, message: str, extra: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.extra = extra or {}


class ValidationError(DomainError):
    """Campos faltantes o con formato inválido"""
    kind = "validation"


class ConflictError(DomainError):
    """Violación de unicidad o transición de estado no permitida"""
    kind = "conflict"


class NotFoundError(DomainError):
    kind = "not_found"


class AuthError(DomainError):
    """Credenciales o token inválidos"""
    kind = "auth"


class AuthorizationError(DomainError):
    """Rol sin permiso para la operación"""
    kind = "authorization"


STATUS_BY_KIND = {
    ValidationError.kind: 400,
    ConflictError.kind: 400,
    NotFoundError.kind: 404,
    AuthError.kind: 401,
    AuthorizationError.kind: 403,
}


def status_for(error: DomainError) -> int:
    return STATUS_BY_KIND.get(error.kind, 500)
