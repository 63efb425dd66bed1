"""认证模块 - 路由"""

from fastapi import APIRouter

from storefront.core.constants import ErrorMessages
from storefront.core.exceptions import (
    BadRequestError,
    InvalidCredentialsError,
    ValidationError,
)
from storefront.schemas.response import ApiResponse

from .dependencies import AuthServiceDep, AuthValidatorDep, SessionTokenDep
from .schemas import LoginRequest, LoginResponse, RegisterRequest

router = APIRouter()


@router.post("/register", response_model=ApiResponse[bool])
async def register(
    request: RegisterRequest,
    auth_service: AuthServiceDep,
    validator: AuthValidatorDep,
) -> ApiResponse[bool]:
    """注册新用户"""
    errors = await validator.validate_register(request)
    if errors:
        raise ValidationError(errors)

    if not await auth_service.register(request):
        raise BadRequestError(ErrorMessages.REGISTRATION_FAILED)
    return ApiResponse.ok(True, "User registered successfully")


@router.post("/login", response_model=ApiResponse[LoginResponse])
async def login(
    request: LoginRequest,
    auth_service: AuthServiceDep,
    validator: AuthValidatorDep,
) -> ApiResponse[LoginResponse]:
    """登录并创建会话"""
    errors = validator.validate_login(request)
    if errors:
        raise ValidationError(errors)

    result = await auth_service.login(request)
    if result is None:
        raise InvalidCredentialsError()
    return ApiResponse.ok(result, "Login successful")


@router.post("/logout", response_model=ApiResponse[bool])
async def logout(token: SessionTokenDep, auth_service: AuthServiceDep) -> ApiResponse[bool]:
    """登出（重复调用同样成功）"""
    if token is None:
        raise BadRequestError(ErrorMessages.SESSION_TOKEN_MISSING)

    await auth_service.logout(token)
    return ApiResponse.ok(True, "Logout successful")
