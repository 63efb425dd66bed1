"""用户模块 - ORM 模型"""

from sqlalchemy import Boolean, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from storefront.core.database import Base


class User(Base):
    """
    用户模型

    继承自 Base，自动获得：
    - id: UUIDv7 主键
    - created_at, updated_at: 时间戳
    - is_deleted: 软删除
    """

    __tablename__ = "app_user"

    username: Mapped[str] = mapped_column(String(50))
    email: Mapped[str] = mapped_column(String(255))
    password_hash: Mapped[str] = mapped_column(String(255))
    full_name: Mapped[str | None] = mapped_column(String(200), default=None)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    __table_args__ = (
        # 全局唯一索引（软删除后仍不可复用），注册时的预检查之外的最终保障
        Index("uq_app_user_username", "username", unique=True),
        Index("uq_app_user_email", "email", unique=True),
    )
