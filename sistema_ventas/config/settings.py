# sistema_ventas/config/settings.py
from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # App Info
    app_name: str = "Sistema de Ventas JC API"
    version: str = "1.0.0"
    debug: bool = False

    # Database - sin valor por defecto: el proceso no arranca sin DATABASE_URL
    database_url: str

    # Security
    secret_key: str
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 1440
    bcrypt_rounds: int = 10

    # CORS
    cors_origins: List[str] = ["*"]

    # Server
    host: str = "0.0.0.0"
    port: int = 5000

    @property
    def database_url_with_ssl(self) -> str:
        """Agregar SSL para conexiones PostgreSQL hospedadas"""
        if self.database_url.startswith("postgresql") and "localhost" not in self.database_url:
            if "sslmode=" not in self.database_url:
                separator = "&" if "?" in self.database_url else "?"
                return f"{self.database_url}{separator}sslmode=require"
        return self.database_url

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = 'ignore'


@lru_cache()
def get_settings() -> Settings:
    """Configuración del proceso, leída una sola vez del entorno"""
    return Settings()
