"""认证模块 - Pydantic 模型"""

from typing import Annotated
from uuid import UUID

from pydantic import ConfigDict, StringConstraints

from storefront.schemas import BaseSchema, UTCDateTime

# 密码原样交给 PasswordHasher，不去除首尾空白
RawPassword = Annotated[str, StringConstraints(strip_whitespace=False)]


class RegisterRequest(BaseSchema):
    # 字段规则由 AuthValidator 统一校验，这里只做形状约束
    username: str = ""
    email: str = ""
    password: RawPassword = ""
    full_name: str | None = None


class LoginRequest(BaseSchema):
    username: str = ""
    password: RawPassword = ""


class UserInfo(BaseSchema):
    """登录时的用户快照（存入会话，之后不随用户数据变化）"""

    model_config = ConfigDict(frozen=True)

    id: UUID
    username: str
    email: str
    full_name: str | None = None


class LoginResponse(BaseSchema):
    session_token: str
    expires_at: UTCDateTime
    user: UserInfo
