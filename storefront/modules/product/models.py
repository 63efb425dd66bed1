"""商品模块 - ORM 模型"""

from decimal import Decimal

from sqlalchemy import Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from storefront.core.database import Base


class Product(Base):
    """商品模型（删除策略：软删除）"""

    __tablename__ = "product"

    name: Mapped[str] = mapped_column(String(200))
    description: Mapped[str | None] = mapped_column(String(1000), default=None)
    price: Mapped[Decimal] = mapped_column(Numeric(18, 2))
    stock: Mapped[int] = mapped_column(Integer, default=0)
    category: Mapped[str | None] = mapped_column(String(100), default=None, index=True)
