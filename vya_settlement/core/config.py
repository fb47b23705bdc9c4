"""Application configuration using pydantic settings with structured sections."""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False


class DatabaseSettings(BaseModel):
    url: str = Field(default="sqlite+aiosqlite:///./vya.db", alias="url")
    echo: bool = False
    pool_size: Optional[int] = None
    max_overflow: Optional[int] = None
    sqlite_busy_timeout: float = 30.0


class SecuritySettings(BaseModel):
    jwt_secret: str = Field(default="change-me", min_length=8)
    algorithm: str = "HS256"
    audience: Optional[str] = None


class AsaasSettings(BaseModel):
    api_key: str = ""
    base_url: str = "https://sandbox.asaas.com"
    webhook_token: Optional[str] = None
    timeout: float = 10.0
    user_agent: str = "VYA App/1.0"


class LoggingSettings(BaseModel):
    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class CacheSettings(BaseModel):
    customer_ttl_seconds: int = 3600


class Settings(BaseSettings):
    """Top-level application settings with nested sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "staging", "production", "test"] = "development"
    debug: bool = False
    project_name: str = "VYA Settlement Service"
    api_prefix: str = "/api"

    server: ServerSettings = ServerSettings()
    database: DatabaseSettings = DatabaseSettings()
    security: SecuritySettings = SecuritySettings()
    asaas: AsaasSettings = AsaasSettings()
    logging: LoggingSettings = LoggingSettings()
    cache: CacheSettings = CacheSettings()

    @property
    def database_url(self) -> str:
        return self.database.url

    @property
    def host(self) -> str:
        return self.server.host

    @property
    def port(self) -> int:
        return self.server.port

    @property
    def jwt_secret(self) -> str:
        return self.security.jwt_secret

    @property
    def algorithm(self) -> str:
        return self.security.algorithm

    @property
    def webhook_token(self) -> Optional[str]:
        return self.asaas.webhook_token or None


@lru_cache()
def get_settings() -> Settings:
    return Settings()
