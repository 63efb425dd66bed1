"""API 路由聚合"""

from fastapi import APIRouter, Depends

from storefront.modules.auth.dependencies import require_session
from storefront.modules.auth.router import router as auth_router
from storefront.modules.product.router import router as product_router

api_router = APIRouter()

# 认证接口本身免会话校验
api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(
    product_router,
    prefix="/products",
    tags=["products"],
    dependencies=[Depends(require_session)],
)
