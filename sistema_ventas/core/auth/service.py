from datetime import datetime, timedelta
from typing import Optional
import logging

from jose import jwt, JWTError
from passlib.context import CryptContext

from sistema_ventas.config.settings import Settings

logger = logging.getLogger(__name__)


class AuthService:
    """Servicio de autenticación: hash de contraseñas y tokens JWT"""

    def __init__(self, settings: Settings):
        self.settings = settings
        # Password context con costo fijo
        self.pwd_context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=settings.bcrypt_rounds
        )

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verificar contraseña"""
        try:
            # bcrypt solo considera los primeros 72 bytes
            encoded_password = plain_password.encode('utf-8')[:72].decode('utf-8', 'ignore')
            return self.pwd_context.verify(encoded_password, hashed_password)
        except (ValueError, TypeError) as e:
            logger.warning(f"Password verification error: {str(e)}")
            return False

    def get_password_hash(self, password: str) -> str:
        """Generar hash de contraseña"""
        encoded_password = password.encode('utf-8')[:72].decode('utf-8', 'ignore')
        return self.pwd_context.hash(encoded_password)

    def create_access_token(self, data: dict, expires_delta: Optional[timedelta] = None) -> str:
        """Crear token de acceso"""
        to_encode = data.copy()

        if expires_delta:
            expire = datetime.utcnow() + expires_delta
        else:
            expire = datetime.utcnow() + timedelta(minutes=self.settings.access_token_expire_minutes)

        to_encode.update({"exp": expire})

        if "id" not in to_encode:
            raise ValueError("id es requerido en el token")

        return jwt.encode(to_encode, self.settings.secret_key, algorithm=self.settings.algorithm)

    def verify_token(self, token: str) -> Optional[dict]:
        """Verificar y decodificar token"""
        try:
            return jwt.decode(token, self.settings.secret_key, algorithms=[self.settings.algorithm])
        except JWTError:
            return None
