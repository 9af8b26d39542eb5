from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///./docstore.db"
    db_echo: bool = False
    # Для PostgreSQL в продакшене: SERIALIZABLE
    db_isolation_level: Optional[str] = None
    create_tables: bool = True
    # Сколько секунд ждать блокировку записи SQLite
    sqlite_busy_timeout: float = 5.0

    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
