"""配置管理"""

from functools import lru_cache
from pathlib import Path
from typing import Annotated
from urllib.parse import quote

from pydantic import BaseModel, Field, SecretStr, computed_field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from storefront.core.constants import AUTH_HEADER_NAME, SESSION_EXPIRATION_MINUTES


class DatabaseConfig(BaseModel):
    """数据库配置"""

    host: str = "localhost"
    port: int = Field(default=5432, ge=1, le=65535)
    name: str = "storefront"
    user: str = "postgres"
    password: SecretStr = SecretStr("postgres")

    # 完整连接串（优先级最高，测试/本地开发可用 sqlite+aiosqlite）
    dsn: str | None = None

    @computed_field
    @property
    def url(self) -> str:
        """构建数据库连接 URL"""
        if self.dsn:
            return self.dsn
        user = quote(self.user, safe="")
        password = quote(self.password.get_secret_value(), safe="")
        return f"postgresql+asyncpg://{user}:{password}@{self.host}:{self.port}/{self.name}"


class Settings(BaseSettings):
    """应用配置"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="_",
        env_nested_max_split=1,
        extra="ignore",
    )

    # 应用配置
    app_name: str = "Storefront API"
    debug: bool = False

    # 日志
    log_level: str = "INFO"
    log_json: bool = False
    log_to_file: bool = False
    log_dir: Path = Path("logs")

    # 数据库（嵌套配置）
    db: DatabaseConfig = DatabaseConfig()

    # 会话
    session_expiration_minutes: int = Field(default=SESSION_EXPIRATION_MINUTES, ge=1)
    session_header_name: str = AUTH_HEADER_NAME
    session_max_entries: int = Field(default=100_000, ge=1)

    # CORS（空列表=全放开）
    cors_origins: Annotated[list[str], NoDecode] = []

    @computed_field
    @property
    def database_url(self) -> str:
        """数据库连接 URL（供 SQLAlchemy 使用）"""
        return self.db.url

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in allowed:
            msg = f"log_level must be one of {sorted(allowed)}"
            raise ValueError(msg)
        return upper

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: str | list[str]) -> list[str]:
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v


@lru_cache
def get_settings() -> Settings:
    """全局单例"""
    return Settings()
