import asyncio
import uvicorn
from fastapi import FastAPI
from contextlib import asynccontextmanager
from loguru import logger

from customer_service.core.config import settings
from customer_service.core.database import DatabaseManager
from customer_service.core.logging import setup_logging
from customer_service.api.errors import register_exception_handlers
from customer_service.api.middleware import request_context
from customer_service.api.routes import customers_router, health_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting up {settings.app_name} v{settings.version}...")
    logger.info(
        f"Database {settings.db_host}:{settings.db_port}/{settings.db_name} "
        f"pool min={settings.db_min_conns} max={settings.db_max_conns} "
        f"max_idle={settings.db_max_idle_seconds}s"
    )
    db = DatabaseManager()
    await db.init()
    try:
        yield
    finally:
        logger.info("Shutting down...")
        await db.close()


def create_app(use_lifespan: bool = True) -> FastAPI:
    setup_logging(settings.log_level, settings.log_json)
    app = FastAPI(
        title=settings.app_name,
        version=settings.version,
        lifespan=lifespan if use_lifespan else None,
        debug=settings.debug
    )
    app.middleware("http")(request_context)
    register_exception_handlers(app)

    app.include_router(health_router, tags=["Health"])
    app.include_router(customers_router, prefix="/v1", tags=["Customers"])
    return app


app = create_app()


async def main():
    config = uvicorn.Config(
        "customer_service.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
    server = uvicorn.Server(config)
    await server.serve()

if __name__ == "__main__":
    asyncio.run(main())
