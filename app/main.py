import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pymongo.errors import PyMongoError

from app.core.config import settings
from app.core.logging import configure_logging
from app.db.mongo import connect_to_mongo, close_mongo_connection, ping
from app.api.api import api_router
from app.api.errors import register_exception_handlers

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await connect_to_mongo()
    yield
    await close_mongo_connection()


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.PROJECT_VERSION,
        description=settings.DESCRIPTION,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    @app.get("/")
    async def root():
        return {"message": f"Welcome to {settings.PROJECT_NAME}"}

    @app.get("/health")
    async def health():
        try:
            database_ok = await ping()
        except PyMongoError as exc:
            logger.warning("MongoDB ping failed: %s", exc)
            database_ok = False
        return {"ok": database_ok, "database": settings.DATABASE_NAME}

    app.include_router(api_router, prefix=settings.API_PREFIX)
    return app


app = create_app()
