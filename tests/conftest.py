"""Общие фикстуры тестов."""

from pathlib import Path
import uuid

import pytest
import pytest_asyncio

from docstore.core.config import Settings
from docstore.core.db import create_engine, create_session_factory, init_models


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Настройки с файловой SQLite во временном каталоге."""
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'docstore.db'}",
        log_level="DEBUG",
    )


@pytest_asyncio.fixture
async def engine(test_settings: Settings):
    engine = create_engine(test_settings)
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def workspace_id() -> uuid.UUID:
    return uuid.uuid4()


@pytest.fixture
def user_id() -> uuid.UUID:
    return uuid.uuid4()
