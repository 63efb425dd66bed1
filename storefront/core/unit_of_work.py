"""工作单元 - 事务边界"""

from collections.abc import AsyncGenerator
from types import TracebackType
from typing import Self

from loguru import logger
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from storefront.core.database import AsyncSessionLocal
from storefront.core.exceptions import PersistenceConflictError, PersistenceError
from storefront.core.repository import Repository
from storefront.modules.product.models import Product
from storefront.modules.user.models import User


class UnitOfWork:
    """
    工作单元：多个仓储共享同一个 AsyncSession / 事务

    用法::

        async with UnitOfWork(AsyncSessionLocal) as uow:
            uow.products.add(product)
            await uow.save_changes()

    注意：
    - 每个请求一个实例，不跨并发请求共享
    - 退出时总会关闭 Session；异常（含取消）退出时先回滚
    - 显式事务期间 save_changes() 只 flush，由 commit_transaction() 提交
    """

    users: Repository[User]
    products: Repository[Product]

    def __init__(
        self, session_factory: async_sessionmaker[AsyncSession] = AsyncSessionLocal
    ) -> None:
        self._session_factory = session_factory
        self._session: AsyncSession | None = None
        self._explicit_transaction = False

    async def __aenter__(self) -> Self:
        self._session = self._session_factory()
        self.users = Repository(User, self._session)
        self.products = Repository(Product, self._session)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        session = self.session
        try:
            if exc_type is not None or self._explicit_transaction:
                await session.rollback()
        finally:
            self._explicit_transaction = False
            self._session = None
            await session.close()

    @property
    def session(self) -> AsyncSession:
        if self._session is None:
            raise PersistenceError("Unit of work is not active.")
        return self._session

    @property
    def in_transaction(self) -> bool:
        """是否处于显式事务中"""
        return self._explicit_transaction

    # ============================================================
    # 持久化
    # ============================================================

    async def save_changes(self) -> int:
        """持久化所有暂存变更，返回受影响的实体数"""
        session = self.session
        affected = self._pending_count(session)
        try:
            await session.flush()
            if not self._explicit_transaction:
                await session.commit()
        except IntegrityError as exc:
            await self._abort()
            logger.warning("Integrity violation, changes rolled back: {}", exc.orig)
            raise PersistenceConflictError() from exc
        except SQLAlchemyError as exc:
            await self._abort()
            logger.error("Persistence failure, changes rolled back: {}", exc)
            raise PersistenceError() from exc
        return affected

    async def begin_transaction(self) -> None:
        if self._explicit_transaction:
            raise PersistenceError("A transaction is already in progress.")
        # Session 自动开启底层事务；此前未提交的只有尚未保存的暂存变更
        self._explicit_transaction = True

    async def commit_transaction(self) -> None:
        if not self._explicit_transaction:
            raise PersistenceError("No transaction is in progress.")
        try:
            await self.session.commit()
        except IntegrityError as exc:
            await self._abort()
            raise PersistenceConflictError() from exc
        finally:
            self._explicit_transaction = False

    async def rollback_transaction(self) -> None:
        if not self._explicit_transaction:
            raise PersistenceError("No transaction is in progress.")
        try:
            await self.session.rollback()
        finally:
            self._explicit_transaction = False

    async def _abort(self) -> None:
        self._explicit_transaction = False
        await self.session.rollback()

    @staticmethod
    def _pending_count(session: AsyncSession) -> int:
        modified = [obj for obj in session.dirty if session.is_modified(obj)]
        return len(session.new) + len(modified) + len(session.deleted)


async def get_unit_of_work() -> AsyncGenerator[UnitOfWork, None]:
    """工作单元依赖：每个请求一个，请求异常时自动回滚"""
    async with UnitOfWork(AsyncSessionLocal) as uow:
        yield uow
