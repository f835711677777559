from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

from todolist_api.errors import ConfigurationError


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    storage_backend: Literal["memory", "sql"] = "memory"

    # A full SQLAlchemy URL wins over the SQL Server fields below
    database_url: str | None = None
    db_server: str | None = None
    db_name: str | None = None
    db_integrated_security: bool = False
    db_user: str | None = None
    db_password: str | None = None
    db_driver: str = "ODBC Driver 18 for SQL Server"
    db_echo: bool = False

    app_host: str = "0.0.0.0"
    app_port: int = 8080
    log_level: str = "INFO"
    log_file: str | None = None

    def sqlalchemy_url(self) -> str | URL:
        """Connection URL for the relational backend."""
        if self.database_url:
            return self.database_url

        if not self.db_server or not self.db_name:
            raise ConfigurationError(
                "DB_SERVER and DB_NAME (or DATABASE_URL) must be set "
                "when STORAGE_BACKEND=sql"
            )

        query = {"driver": self.db_driver}
        if self.db_integrated_security:
            query["trusted_connection"] = "yes"
            return URL.create(
                "mssql+aioodbc",
                host=self.db_server,
                database=self.db_name,
                query=query,
            )

        return URL.create(
            "mssql+aioodbc",
            username=self.db_user,
            password=self.db_password,
            host=self.db_server,
            database=self.db_name,
            query=query,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()

