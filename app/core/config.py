from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    ENV: str = Field("development")
    HOST: str = Field("0.0.0.0")
    PORT: int = Field(8080)
    LOG_LEVEL: str = Field("INFO")

    # Параметры подключения к PostgreSQL
    DB_HOST: str = Field("localhost")
    DB_PORT: int = Field(5432)
    DB_USER: str = Field("postgres")
    DB_PASSWORD: str = Field("postgres")
    DB_NAME: str = Field("user_api")
    DATABASE_URL: Optional[str] = Field(None)

    # Пул соединений
    DB_POOL_SIZE: int = Field(10, ge=1)
    DB_MAX_OVERFLOW: int = Field(5, ge=0)
    DB_POOL_TIMEOUT: float = Field(30.0, gt=0)
    DB_CONNECT_TIMEOUT: float = Field(5.0, gt=0)
    DB_ECHO: bool = Field(False)

    model_config = {"env_file": ".env", "extra": "ignore"}

    @property
    def database_url(self) -> str:
        """Строка подключения для асинхронного движка"""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+asyncpg://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

    @property
    def is_production(self) -> bool:
        return self.ENV.lower() == "production"


settings = Settings()
