"""商品模块 - 路由（需登录）"""

from uuid import UUID

from fastapi import APIRouter, status

from storefront.core.exceptions import NotFoundError
from storefront.schemas.response import ApiResponse

from .dependencies import ProductServiceDep
from .schemas import ProductCreate, ProductResponse, ProductUpdate

router = APIRouter()


@router.get("", response_model=ApiResponse[list[ProductResponse]])
async def list_products(service: ProductServiceDep) -> ApiResponse[list[ProductResponse]]:
    """获取商品列表"""
    return ApiResponse.ok(await service.list_products())


@router.get("/{product_id}", response_model=ApiResponse[ProductResponse])
async def get_product(
    product_id: UUID, service: ProductServiceDep
) -> ApiResponse[ProductResponse]:
    """获取单个商品"""
    product = await service.get_product(product_id)
    if product is None:
        raise NotFoundError()
    return ApiResponse.ok(product)


@router.post(
    "",
    response_model=ApiResponse[ProductResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_product(
    product_in: ProductCreate, service: ProductServiceDep
) -> ApiResponse[ProductResponse]:
    """创建商品"""
    product = await service.create_product(product_in)
    return ApiResponse.ok(product, "Product created successfully")


@router.put("/{product_id}", response_model=ApiResponse[ProductResponse])
async def update_product(
    product_id: UUID, product_in: ProductUpdate, service: ProductServiceDep
) -> ApiResponse[ProductResponse]:
    """更新商品"""
    product = await service.update_product(product_id, product_in)
    if product is None:
        raise NotFoundError()
    return ApiResponse.ok(product, "Product updated successfully")


@router.delete("/{product_id}", response_model=ApiResponse[bool])
async def delete_product(product_id: UUID, service: ProductServiceDep) -> ApiResponse[bool]:
    """删除商品（软删除）"""
    if not await service.delete_product(product_id):
        raise NotFoundError()
    return ApiResponse.ok(True, "Product deleted successfully")
