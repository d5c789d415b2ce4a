from typing import Optional

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Service configuration read from the environment and .env"""

    # Application
    app_name: str = "Customer Service API"
    version: str = "1.0.0"
    host: str = "0.0.0.0"
    port: int = 8080
    debug: bool = False

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    # PostgreSQL
    db_host: str = "localhost"
    db_port: int = 5432
    db_user: str = "postgres"
    db_password: str = "postgres"
    db_name: str = "postgres"
    db_sslmode: str = "disable"
    database_url: Optional[str] = None

    # Connection pool
    db_min_conns: int = 2
    db_max_conns: int = 10
    db_max_idle_seconds: float = 1800.0

    # Requests
    request_timeout_seconds: float = 60.0

    # Validation
    phone_default_region: str = "IN"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @model_validator(mode="after")
    def check_pool_bounds(self) -> "Settings":
        if self.db_max_conns < 1:
            raise ValueError("db_max_conns must be positive")
        if self.db_min_conns < 0 or self.db_min_conns > self.db_max_conns:
            raise ValueError("db_min_conns must be between 0 and db_max_conns")
        self.log_level = self.log_level.upper()
        self.phone_default_region = self.phone_default_region.upper()
        return self

    @property
    def dsn(self) -> str:
        if self.database_url:
            return self.database_url
        return (
            f"postgres://{self.db_user}:{self.db_password}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )

    def tortoise_config(self) -> dict:
        """Tortoise ORM config with the bounded connection pool"""
        if self.dsn.startswith("sqlite"):
            connection = self.dsn
        else:
            connection = {
                "engine": "tortoise.backends.asyncpg",
                "credentials": {
                    "host": self.db_host,
                    "port": self.db_port,
                    "user": self.db_user,
                    "password": self.db_password,
                    "database": self.db_name,
                    "ssl": None if self.db_sslmode == "disable" else self.db_sslmode,
                    "minsize": self.db_min_conns,
                    "maxsize": self.db_max_conns,
                    "max_inactive_connection_lifetime": self.db_max_idle_seconds,
                },
            }
            if self.database_url:
                # explicit URL wins; pool bounds travel as query parameters
                connection = (
                    f"{self.database_url}{'&' if '?' in self.database_url else '?'}"
                    f"minsize={self.db_min_conns}&maxsize={self.db_max_conns}"
                    f"&max_inactive_connection_lifetime={self.db_max_idle_seconds}"
                )
        return {
            "connections": {"default": connection},
            "apps": {
                "models": {
                    "models": ["customer_service.models"],
                    "default_connection": "default",
                }
            },
        }


settings = Settings()
