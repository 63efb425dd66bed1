"""商品模块 - 依赖注入"""

from typing import Annotated

from fastapi import Depends

from storefront.dependencies import UnitOfWorkDep

from .service import ProductService
from .validator import ProductValidator


def get_product_service(uow: UnitOfWorkDep) -> ProductService:
    return ProductService(uow, ProductValidator())


ProductServiceDep = Annotated[ProductService, Depends(get_product_service)]
