"""认证模块 - 依赖注入"""

from datetime import timedelta
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Request

from storefront.core.context import set_current_user
from storefront.core.exceptions import SessionExpiredError, UnauthorizedError
from storefront.core.security import Argon2PasswordHasher, PasswordHasher
from storefront.dependencies import SessionStoreDep, SettingsDep, UnitOfWorkDep

from .schemas import UserInfo
from .service import AuthService
from .validator import AuthValidator


@lru_cache
def get_password_hasher() -> PasswordHasher:
    return Argon2PasswordHasher()


def get_auth_service(
    uow: UnitOfWorkDep,
    session_store: SessionStoreDep,
    password_hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
    settings: SettingsDep,
) -> AuthService:
    return AuthService(
        uow,
        session_store,
        password_hasher,
        session_ttl=timedelta(minutes=settings.session_expiration_minutes),
    )


def get_auth_validator(uow: UnitOfWorkDep) -> AuthValidator:
    return AuthValidator(uow)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
AuthValidatorDep = Annotated[AuthValidator, Depends(get_auth_validator)]


def get_session_token(request: Request, settings: SettingsDep) -> str | None:
    """从请求头读取会话令牌（仅缺少请求头时为 None，空值照常查找）"""
    return request.headers.get(settings.session_header_name)


SessionTokenDep = Annotated[str | None, Depends(get_session_token)]


async def require_session(
    request: Request,
    token: SessionTokenDep,
    auth_service: AuthServiceDep,
) -> UserInfo:
    """
    会话校验依赖

    - 未携带令牌: 401 UNAUTHORIZED_ACCESS
    - 令牌未知或已过期: 401 SESSION_EXPIRED
    - 通过: 用户快照写入 request.state.user 和请求上下文
    """
    if token is None:
        raise UnauthorizedError()

    user = await auth_service.validate_session(token)
    if user is None:
        raise SessionExpiredError()

    request.state.user = user
    set_current_user(user.id, user.username)
    return user
