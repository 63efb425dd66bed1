"""通用数据访问层"""

from collections.abc import Sequence
from typing import Generic, TypeVar
from uuid import UUID

from sqlalchemy import ColumnElement, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.database import Base, filter_active


T = TypeVar("T", bound=Base)


class Repository(Generic[T]):
    """
    单实体类型的通用仓储

    注意：
    - 写操作只暂存到 Session（add/update/soft_delete/delete 不 flush），
      由所属 UnitOfWork.save_changes() 统一持久化
    - 查询默认排除已软删除的记录，include_deleted=True 可绕过
    - 查询条件使用 SQLAlchemy 表达式，例如 ``User.username == "alice"``
    """

    def __init__(self, model: type[T], db: AsyncSession) -> None:
        self.model = model
        self.db = db

    def _select(self, criteria: Sequence[ColumnElement[bool]], include_deleted: bool):
        stmt = select(self.model).where(*criteria)
        if not include_deleted:
            stmt = filter_active(stmt)
        return stmt

    # ============================================================
    # 查询方法（默认排除已删除）
    # ============================================================

    async def get_by_id(self, entity_id: UUID, *, include_deleted: bool = False) -> T | None:
        stmt = self._select([self.model.id == entity_id], include_deleted)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_all(self, *, include_deleted: bool = False) -> list[T]:
        result = await self.db.execute(self._select([], include_deleted))
        return list(result.scalars().all())

    async def find(
        self, *criteria: ColumnElement[bool], include_deleted: bool = False
    ) -> list[T]:
        result = await self.db.execute(self._select(criteria, include_deleted))
        return list(result.scalars().all())

    async def first_or_default(
        self, *criteria: ColumnElement[bool], include_deleted: bool = False
    ) -> T | None:
        """第一条匹配记录（不保证顺序）"""
        stmt = self._select(criteria, include_deleted).limit(1)
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def exists(
        self, *criteria: ColumnElement[bool], include_deleted: bool = False
    ) -> bool:
        stmt = select(self._select(criteria, include_deleted).exists())
        return bool(await self.db.scalar(stmt))

    async def count(
        self, *criteria: ColumnElement[bool], include_deleted: bool = False
    ) -> int:
        subquery = self._select(criteria, include_deleted).subquery()
        stmt = select(func.count()).select_from(subquery)
        return await self.db.scalar(stmt) or 0

    # ============================================================
    # 写操作（仅暂存）
    # ============================================================

    def add(self, entity: T) -> None:
        """暂存新实体（id / created_at 已在构造时生成）"""
        self.db.add(entity)

    def add_range(self, entities: Sequence[T]) -> None:
        self.db.add_all(entities)

    def update(self, entity: T) -> None:
        """打 updated_at 时间戳并暂存"""
        entity.touch()
        self.db.add(entity)

    def soft_delete(self, entity: T) -> None:
        """软删除：记录保留在库中"""
        entity.soft_delete()
        self.db.add(entity)

    async def delete(self, entity: T) -> None:
        """物理删除（谨慎使用，默认流程使用软删除）"""
        await self.db.delete(entity)

    def __repr__(self) -> str:
        return f"Repository({self.model.__name__})"
