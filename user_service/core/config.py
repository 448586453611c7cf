import enum
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class EnvironmentEnum(str, enum.Enum):
    DEV = "DEV"
    PROD = "PROD"


class Settings(BaseSettings):
    PORT: int
    DB_CONNECT: str

    SERVICE_NAME: str = "user-service"
    # OTLP/gRPC коллектор (Jaeger принимает OTLP), без него спаны не экспортируются
    JAEGER_ENDPOINT: str | None = None
    ENVIRONMENT: EnvironmentEnum = EnvironmentEnum.DEV

    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10
    DB_ECHO: bool = False

    LOG_LEVEL: str = "INFO"
    LOG_PATH: str = "logs/user-service.log"
    LOG_MAX_BYTES: int = 10 * 1024 * 1024
    LOG_BACKUP_COUNT: int = 5

    SHUTDOWN_GRACE_SECONDS: float = 10.0

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def DATABASE_URL(self) -> str:
        # DB_CONNECT приходит как обычный postgres DSN, SQLAlchemy нужен asyncpg-диалект
        for prefix in ("postgresql://", "postgres://"):
            if self.DB_CONNECT.startswith(prefix):
                return "postgresql+asyncpg://" + self.DB_CONNECT[len(prefix):]
        return self.DB_CONNECT


@lru_cache
def get_settings() -> Settings:
    return Settings()
