"""商品模块 - 业务逻辑层"""

from uuid import UUID

from loguru import logger

from storefront.core.exceptions import ValidationError
from storefront.core.unit_of_work import UnitOfWork
from storefront.schemas.datetime_types import ensure_utc_aware

from .models import Product
from .schemas import ProductCreate, ProductResponse, ProductUpdate
from .validator import ProductValidator


class ProductService:
    def __init__(self, uow: UnitOfWork, validator: ProductValidator) -> None:
        self.uow = uow
        self.validator = validator

    async def list_products(self) -> list[ProductResponse]:
        """所有未删除商品，按创建时间排序"""
        products = await self.uow.products.get_all()
        products.sort(key=lambda p: ensure_utc_aware(p.created_at))
        return [ProductResponse.model_validate(p) for p in products]

    async def get_product(self, product_id: UUID) -> ProductResponse | None:
        product = await self.uow.products.get_by_id(product_id)
        if product is None:
            return None
        return ProductResponse.model_validate(product)

    async def create_product(self, request: ProductCreate) -> ProductResponse:
        errors = self.validator.validate_create(request)
        if errors:
            raise ValidationError(errors)

        product = Product(
            name=request.name,
            description=request.description,
            price=request.price,
            stock=request.stock,
            category=request.category,
        )
        self.uow.products.add(product)
        await self.uow.save_changes()

        logger.info("Product created: {} ({})", product.name, product.id)
        return ProductResponse.model_validate(product)

    async def update_product(
        self, product_id: UUID, request: ProductUpdate
    ) -> ProductResponse | None:
        """整体更新，商品不存在（或已删除）时返回 None"""
        errors = self.validator.validate_update(request)
        if errors:
            raise ValidationError(errors)

        product = await self.uow.products.get_by_id(product_id)
        if product is None:
            return None

        product.name = request.name
        product.description = request.description
        product.price = request.price
        product.stock = request.stock
        product.category = request.category
        self.uow.products.update(product)
        await self.uow.save_changes()

        logger.info("Product updated: {}", product.id)
        return ProductResponse.model_validate(product)

    async def delete_product(self, product_id: UUID) -> bool:
        """软删除，商品不存在时返回 False"""
        product = await self.uow.products.get_by_id(product_id)
        if product is None:
            return False

        self.uow.products.soft_delete(product)
        await self.uow.save_changes()

        logger.info("Product deleted: {}", product_id)
        return True
