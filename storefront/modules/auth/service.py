"""认证模块 - 业务逻辑层"""

from datetime import timedelta

from loguru import logger

from storefront.core.constants import SESSION_EXPIRATION_MINUTES, SESSION_KEY_PREFIX
from storefront.core.database import utc_now
from storefront.core.exceptions import PersistenceConflictError
from storefront.core.security import PasswordHasher, generate_session_token
from storefront.core.session_store import Clock, SessionStore
from storefront.core.unit_of_work import UnitOfWork
from storefront.modules.user.models import User

from .schemas import LoginRequest, LoginResponse, RegisterRequest, UserInfo


def session_key(token: str) -> str:
    return f"{SESSION_KEY_PREFIX}{token}"


class AuthService:
    """
    会话认证服务

    会话生命周期：登录创建（绝对过期时间）→ 登出或过期后查询时移除。
    登录失败不区分用户不存在、已停用和密码错误。
    """

    def __init__(
        self,
        uow: UnitOfWork,
        session_store: SessionStore[UserInfo],
        password_hasher: PasswordHasher,
        *,
        session_ttl: timedelta = timedelta(minutes=SESSION_EXPIRATION_MINUTES),
        clock: Clock = utc_now,
    ) -> None:
        self.uow = uow
        self.session_store = session_store
        self.password_hasher = password_hasher
        self.session_ttl = session_ttl
        self.clock = clock

    async def register(self, request: RegisterRequest) -> bool:
        """注册用户（调用方已完成校验），唯一约束冲突时返回 False"""
        user = User(
            username=request.username,
            email=request.email,
            password_hash=self.password_hasher.hash(request.password),
            full_name=request.full_name,
            is_active=True,
        )
        self.uow.users.add(user)
        try:
            await self.uow.save_changes()
        except PersistenceConflictError:
            logger.warning("Registration conflict for username={}", request.username)
            return False

        logger.info("User registered: {} ({})", user.username, user.id)
        return True

    async def login(self, request: LoginRequest) -> LoginResponse | None:
        user = await self.uow.users.first_or_default(
            User.username == request.username,
            User.is_active.is_(True),
        )
        if user is None or not self.password_hasher.verify(
            request.password, user.password_hash
        ):
            logger.info("Login failed for username={}", request.username)
            return None

        token = generate_session_token()
        expires_at = self.clock() + self.session_ttl
        snapshot = UserInfo(
            id=user.id,
            username=user.username,
            email=user.email,
            full_name=user.full_name,
        )
        self.session_store.set(session_key(token), snapshot, expires_at)

        logger.info("User logged in: {} ({})", user.username, user.id)
        return LoginResponse(session_token=token, expires_at=expires_at, user=snapshot)

    async def logout(self, token: str) -> bool:
        """移除会话（幂等，总是返回 True）"""
        self.session_store.remove(session_key(token))
        logger.info("Session closed")
        return True

    async def validate_session(self, token: str) -> UserInfo | None:
        return self.session_store.get(session_key(token))
