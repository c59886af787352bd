from __future__ import annotations

from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Configuration for products-api.

    The database can be given either as a full DATABASE_URL or as DB_* pieces;
    the full URL wins when both are present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # --- Service ---
    app_name: str = Field(default="products-api", validation_alias="APP_NAME")
    app_version: str = Field(default="0.1.0", validation_alias="APP_VERSION")
    environment: str = Field(default="local", validation_alias="ENVIRONMENT")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    # --- CORS (Cross-Origin Resource Sharing) ---
    # "*" opens the API to any origin; otherwise a CSV allowlist.
    cors_allowed_origins: str = Field(default="*", validation_alias="CORS_ALLOWED_ORIGINS")

    def cors_origins_list(self) -> List[str]:
        return [x.strip() for x in self.cors_allowed_origins.split(",") if x.strip()]

    # -------------------------
    # Database
    # -------------------------
    database_url: Optional[str] = Field(default=None, validation_alias="DATABASE_URL")

    db_dialect: str = Field(default="postgresql+psycopg", validation_alias="DB_DIALECT")
    db_host: str = Field(default="localhost", validation_alias="DB_HOST")
    db_port: int = Field(default=5432, validation_alias="DB_PORT")
    db_name: str = Field(default="products_db", validation_alias="DB_NAME")
    db_user: str = Field(default="products_app", validation_alias="DB_USER")
    db_password: Optional[str] = Field(default=None, validation_alias="DB_PASSWORD")

    # Create the products table on startup when it does not exist yet.
    create_tables: bool = Field(default=True, validation_alias="CREATE_TABLES")

    @property
    def database_url_resolved(self) -> str:
        """
        Return DATABASE_URL when set, otherwise build it from DB_*.

        A missing DB_PASSWORD still yields a URL; the connection will fail later
        if the server requires one.
        """
        if self.database_url and self.database_url.strip():
            return self.database_url.strip()

        pwd = self.db_password or ""
        return f"{self.db_dialect}://{self.db_user}:{pwd}@{self.db_host}:{self.db_port}/{self.db_name}"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
