from fastapi import Request
from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from docstore.core.config import Settings

# Базовый класс для моделей
Base = declarative_base()


def create_engine(settings: Settings) -> AsyncEngine:
    """Асинхронный движок по настройкам приложения"""
    options = {"echo": settings.db_echo}
    if settings.db_isolation_level:
        options["isolation_level"] = settings.db_isolation_level

    is_sqlite = make_url(settings.database_url).get_backend_name() == "sqlite"
    if is_sqlite:
        options["connect_args"] = {"timeout": settings.sqlite_busy_timeout}

    engine = create_async_engine(settings.database_url, **options)
    if is_sqlite:
        _lock_sqlite_on_begin(engine)
    return engine


def _lock_sqlite_on_begin(engine: AsyncEngine) -> None:
    """Транзакции SQLite берут блокировку записи с первого чтения"""

    @event.listens_for(engine.sync_engine, "connect")
    def _disable_driver_transactions(dbapi_connection, connection_record):
        # драйвер сам открывает транзакцию только перед DML
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


async def init_models(engine: AsyncEngine) -> None:
    """Создание недостающих таблиц"""
    # модели должны быть импортированы, чтобы попасть в metadata
    import docstore.db.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# Функция для dependency injection в FastAPI
async def get_db(request: Request):
    async with request.app.state.session_factory() as session:
        yield session
