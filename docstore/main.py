from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from docstore.api.http import documents_router, health_router
from docstore.core.config import Settings, settings as default_settings
from docstore.core.db import create_engine, create_session_factory, init_models
from docstore.core.log import setup_logging

logger = logging.getLogger(__name__)


def create_app(settings: Settings = None) -> FastAPI:
    settings = settings or default_settings
    setup_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        engine = create_engine(settings)
        if settings.create_tables:
            await init_models(engine)
        app.state.engine = engine
        app.state.session_factory = create_session_factory(engine)
        logger.info(f"Database engine ready ({engine.dialect.name})")
        try:
            yield
        finally:
            await engine.dispose()

    app = FastAPI(
        title="DocStore",
        description="Иерархическая база знаний рабочих пространств",
        version="1.0.0",
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Подключаем роутеры
    app.include_router(health_router)
    app.include_router(documents_router)

    return app
