"""商品模块 - 请求校验"""

from decimal import Decimal

from storefront.core.constants import ValidationMessages

from .schemas import ProductBase

NAME_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 1000
CATEGORY_MAX_LENGTH = 100
# 15 位有效数字，JSON 数字输出无精度损失
MAX_PRICE = Decimal("9999999999999.99")


class ProductValidator:
    """创建与更新共用同一套规则"""

    def validate_create(self, request: ProductBase) -> list[str]:
        return self._validate(request)

    def validate_update(self, request: ProductBase) -> list[str]:
        return self._validate(request)

    @staticmethod
    def _validate(request: ProductBase) -> list[str]:
        errors: list[str] = []

        if not request.name:
            errors.append(ValidationMessages.REQUIRED_FIELD.format("Name"))
        elif len(request.name) > NAME_MAX_LENGTH:
            errors.append(ValidationMessages.MAX_LENGTH.format("Name", NAME_MAX_LENGTH))

        if request.price <= 0:
            errors.append(ValidationMessages.PRICE_NOT_POSITIVE)
        elif request.price > MAX_PRICE:
            errors.append(ValidationMessages.PRICE_TOO_LARGE.format(MAX_PRICE))

        if request.stock < 0:
            errors.append(ValidationMessages.STOCK_NEGATIVE)

        if request.description and len(request.description) > DESCRIPTION_MAX_LENGTH:
            errors.append(
                ValidationMessages.MAX_LENGTH.format("Description", DESCRIPTION_MAX_LENGTH)
            )

        if request.category and len(request.category) > CATEGORY_MAX_LENGTH:
            errors.append(
                ValidationMessages.MAX_LENGTH.format("Category", CATEGORY_MAX_LENGTH)
            )

        return errors
