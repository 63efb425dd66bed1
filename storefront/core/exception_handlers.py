"""全局异常处理器注册"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.core.constants import ErrorMessages
from storefront.core.exceptions import ApiError
from storefront.schemas.response import ErrorResponse


def _envelope(
    status_code: int,
    message: str,
    errors: list[str] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    body = ErrorResponse(message=message, errors=errors)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json"),
        headers=headers,
    )


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    """业务异常处理"""
    if exc.status_code >= 500:
        logger.error("业务异常: {} | path={}", exc.message, request.url.path)
    else:
        logger.warning(
            "业务异常: {} | status={} path={}",
            exc.message,
            exc.status_code,
            request.url.path,
        )
    return _envelope(exc.status_code, exc.message, exc.errors)


def _format_validation_error(error: dict) -> str:
    loc = [str(part) for part in error["loc"] if part not in ("body", "query", "path")]
    field = ".".join(loc)
    return f"{field}: {error['msg']}" if field else str(error["msg"])


async def validation_error_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """请求验证异常处理（统一按 400 返回可读错误列表）"""
    errors = [_format_validation_error(error) for error in exc.errors()]
    logger.warning("请求参数验证失败: {} | path={}", errors, request.url.path)
    return _envelope(400, ErrorMessages.VALIDATION_FAILED, errors)


async def http_error_handler(
    request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    """HTTP 异常处理"""
    if exc.status_code == 404:
        message = ErrorMessages.RESOURCE_NOT_FOUND
    else:
        message = str(exc.detail)
    return _envelope(exc.status_code, message, headers=dict(exc.headers or {}) or None)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """未捕获异常处理"""
    logger.exception(
        "未捕获异常 {method} {path}", method=request.method, path=request.url.path
    )
    return _envelope(500, ErrorMessages.INTERNAL_SERVER_ERROR)


def setup_exception_handlers(app: FastAPI) -> None:
    """注册全局异常处理器"""
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
