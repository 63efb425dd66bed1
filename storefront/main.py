"""
Storefront API - 应用入口

特点：
- create_app 工厂模式，便于测试和多实例
- setup_xxx 函数分离注册逻辑
- 会话存储归应用所有（app.state.session_store），随应用关闭清空
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from loguru import logger

from storefront import __version__
from storefront.config import Settings, get_settings
from storefront.core.database import close_database, init_database
from storefront.core.exception_handlers import setup_exception_handlers
from storefront.core.logging import setup_logging
from storefront.core.middlewares import setup_middlewares
from storefront.core.routers import setup_routers
from storefront.core.session_store import SessionStore
from storefront.schemas.response import ApiResponse


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    # 启动时初始化
    await init_database()
    logger.info("{} started", app.title)
    yield
    # 关闭时清理
    app.state.session_store.clear()
    await close_database()
    logger.info("{} stopped", app.title)


def create_app(settings: Settings | None = None) -> FastAPI:
    """应用工厂函数"""
    settings = settings or get_settings()
    setup_logging(
        level=settings.log_level,
        json_format=settings.log_json,
        to_file=settings.log_to_file,
        log_dir=settings.log_dir,
    )

    application = FastAPI(
        title=settings.app_name,
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )
    application.state.session_store = SessionStore(max_entries=settings.session_max_entries)

    # 注册组件（顺序重要）
    setup_middlewares(application, settings)
    setup_routers(application)
    setup_exception_handlers(application)

    @application.get("/health", response_model=ApiResponse[dict[str, str]], tags=["health"])
    async def health_check() -> ApiResponse[dict[str, str]]:
        return ApiResponse(data={"status": "ok"})

    return application


app = create_app()
