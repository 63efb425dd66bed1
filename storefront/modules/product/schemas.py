"""商品模块 - Pydantic 模型"""

from decimal import Decimal
from uuid import UUID

from storefront.schemas import BaseSchema, Money, MoneyInput, UTCDateTime


class ProductBase(BaseSchema):
    # 业务规则由 ProductValidator 校验，错误以列表形式返回
    name: str = ""
    description: str | None = None
    price: MoneyInput = Decimal("0")
    stock: int = 0
    category: str | None = None


class ProductCreate(ProductBase):
    pass


class ProductUpdate(ProductBase):
    """整体更新（PUT），所有字段均被覆盖"""


class ProductResponse(BaseSchema):
    """商品响应（不含 is_deleted）"""

    id: UUID
    name: str
    description: str | None
    price: Money
    stock: int
    category: str | None
    created_at: UTCDateTime
    updated_at: UTCDateTime | None
