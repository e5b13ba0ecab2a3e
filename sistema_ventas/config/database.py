# sistema_ventas/config/database.py
from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from .settings import Settings


class Database:
    """Conexión al almacén relacional, creada al arrancar el proceso"""

    def __init__(self, settings: Settings):
        url = settings.database_url_with_ssl

        engine_kwargs = {
            "echo": settings.debug,
        }

        if url.startswith("sqlite"):
            # Una sola conexión compartida para que la BD en memoria sobreviva entre sesiones
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            engine_kwargs["poolclass"] = StaticPool
        else:
            engine_kwargs["pool_pre_ping"] = True
            engine_kwargs["pool_recycle"] = 300

        self.engine = create_engine(url, **engine_kwargs)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def create_all(self) -> None:
        """Crear tablas que aún no existan"""
        from sistema_ventas.shared.database.models import Base

        Base.metadata.create_all(bind=self.engine)

    def session(self) -> Session:
        return self.SessionLocal()

    def dispose(self) -> None:
        self.engine.dispose()


# Database dependency
def get_db(request: Request) -> Iterator[Session]:
    """Database dependency for FastAPI"""
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
