"""数据库配置 - 实体基类"""

from datetime import datetime, timezone
from typing import Any, TypeVar
from uuid import UUID

from loguru import logger
from sqlalchemy import Boolean, DateTime, MetaData, Select, event, text
from sqlalchemy.ext.asyncio import (
    AsyncAttrs,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.pool import NullPool
from uuid_utils.compat import uuid7

from storefront.config import get_settings

settings = get_settings()

# 命名约定（Alembic 自动生成迁移友好）
convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

_engine_options: dict[str, Any] = {"echo": settings.debug, "pool_pre_ping": True}
if settings.database_url.startswith("sqlite"):
    # SQLite 连接不跨事件循环复用（测试 / CLI 会多次创建事件循环）
    _engine_options["poolclass"] = NullPool

engine = create_async_engine(settings.database_url, **_engine_options)

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


def utc_now() -> datetime:
    """返回当前 UTC 时间（aware datetime）"""
    return datetime.now(timezone.utc)


class Base(AsyncAttrs, DeclarativeBase):
    """
    实体基类

    特性：
    - UUIDv7 主键（时间有序），构造时即生成
    - created_at 构造时写入且只写一次
    - updated_at 初始为空，每次写操作（含软删除）由仓储打时间戳
    - is_deleted 软删除标记，正常流程从不物理删除
    """

    metadata = MetaData(naming_convention=convention)

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid7)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        default=None,
    )

    is_deleted: Mapped[bool] = mapped_column(Boolean, default=False, index=True)

    def touch(self) -> None:
        """记录一次写操作"""
        self.updated_at = utc_now()

    def soft_delete(self) -> None:
        """标记为软删除"""
        self.is_deleted = True
        self.touch()


@event.listens_for(Base, "init", propagate=True)
def assign_identity(target: Base, args: tuple, kwargs: dict[str, Any]) -> None:
    """构造时填充 id / created_at / is_deleted（入库前即可引用）"""
    kwargs.setdefault("id", uuid7())
    kwargs.setdefault("created_at", utc_now())
    kwargs.setdefault("is_deleted", False)


T = TypeVar("T", bound="Base")


def filter_active(stmt: Select[tuple[T]]) -> Select[tuple[T]]:
    """过滤已删除记录的通用方法"""
    entity = stmt.column_descriptions[0]["entity"]
    return stmt.where(entity.is_deleted.is_(False))


async def create_tables() -> None:
    """按模型建表（已存在的表跳过）"""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_tables() -> None:
    """删除所有模型表"""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


async def init_database() -> None:
    """初始化数据库：开发环境/SQLite 自动建表，并验证连接"""
    if settings.debug or engine.dialect.name == "sqlite":
        await create_tables()
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    logger.info("Database ready ({})", engine.dialect.name)


async def close_database() -> None:
    """关闭连接池"""
    await engine.dispose()
