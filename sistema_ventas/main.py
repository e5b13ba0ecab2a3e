# sistema_ventas/main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from sistema_ventas.config.settings import Settings, get_settings
from sistema_ventas.config.database import Database
from sistema_ventas.core.auth.service import AuthService
from sistema_ventas.core.middleware import setup_middleware, setup_exception_handlers
from sistema_ventas.api.router import api_router

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)
logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Construir la aplicación; sin DATABASE_URL o SECRET_KEY falla al arrancar"""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        database: Database = app.state.database
        database.create_all()
        logger.info("🚀 Sistema de Ventas JC API Starting...")
        logger.info(f"📍 Version: {settings.version}")
        logger.info(f"🌍 Environment: {'Development' if settings.debug else 'Production'}")
        logger.info(f"⏰ Token Expire: {settings.access_token_expire_minutes} minutes")
        logger.info(
            f"🗄️  Database: {settings.database_url.split('@')[1] if '@' in settings.database_url else 'local'}"
        )

        yield

        # Shutdown
        database.dispose()
        logger.info("🛑 Sistema de Ventas JC API Shutting down...")

    app = FastAPI(
        title=settings.app_name,
        version=settings.version,
        description="API de gestión de ventas: productos, clientes, almacén, ventas, cotizaciones y reportes",
        docs_url="/docs",
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan
    )

    # Recursos compartidos por todas las peticiones
    app.state.settings = settings
    app.state.database = Database(settings)
    app.state.auth_service = AuthService(settings)

    setup_middleware(app, settings)
    setup_exception_handlers(app)

    app.include_router(api_router, prefix="/api")

    @app.get("/")
    async def root():
        return {
            "message": "🚀 Sistema de Ventas JC API",
            "version": settings.version,
            "status": "running",
            "environment": "production" if not settings.debug else "development",
            "docs": "/docs",
            "api": "/api"
        }

    @app.get("/health")
    async def health_check():
        return {
            "status": "healthy",
            "version": settings.version,
            "app": settings.app_name,
            "environment": "production" if not settings.debug else "development"
        }

    return app


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "sistema_ventas.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
