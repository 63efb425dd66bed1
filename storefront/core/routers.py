"""路由配置"""

from fastapi import FastAPI

from storefront.api.router import api_router


def setup_routers(app: FastAPI) -> None:
    """注册路由（挂载在根路径）"""
    app.include_router(api_router)
