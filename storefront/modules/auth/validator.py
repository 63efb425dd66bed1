"""认证模块 - 请求校验"""

from storefront.core.constants import ValidationMessages
from storefront.core.security import is_valid_email
from storefront.core.unit_of_work import UnitOfWork
from storefront.modules.user.models import User

from .schemas import LoginRequest, RegisterRequest

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 50
PASSWORD_MIN_LENGTH = 6
FULL_NAME_MAX_LENGTH = 200


class AuthValidator:
    """
    登录/注册请求校验，返回错误信息列表（空列表表示通过）

    用户名、邮箱唯一性在这里预检查（含已软删除用户），
    并发注册时以数据库唯一索引为准。
    """

    def __init__(self, uow: UnitOfWork) -> None:
        self.uow = uow

    def validate_login(self, request: LoginRequest) -> list[str]:
        errors: list[str] = []
        if not request.username:
            errors.append(ValidationMessages.REQUIRED_FIELD.format("Username"))
        if not request.password.strip():
            errors.append(ValidationMessages.REQUIRED_FIELD.format("Password"))
        return errors

    async def validate_register(self, request: RegisterRequest) -> list[str]:
        errors: list[str] = []

        username = request.username
        if not username:
            errors.append(ValidationMessages.REQUIRED_FIELD.format("Username"))
        elif len(username) < USERNAME_MIN_LENGTH:
            errors.append(
                ValidationMessages.MIN_LENGTH.format("Username", USERNAME_MIN_LENGTH)
            )
        elif len(username) > USERNAME_MAX_LENGTH:
            errors.append(
                ValidationMessages.MAX_LENGTH.format("Username", USERNAME_MAX_LENGTH)
            )
        elif await self.uow.users.exists(User.username == username, include_deleted=True):
            errors.append(ValidationMessages.USERNAME_TAKEN)

        email = request.email
        if not email:
            errors.append(ValidationMessages.REQUIRED_FIELD.format("Email"))
        elif not is_valid_email(email):
            errors.append(ValidationMessages.INVALID_EMAIL)
        elif await self.uow.users.exists(User.email == email, include_deleted=True):
            errors.append(ValidationMessages.EMAIL_TAKEN)

        if not request.password.strip():
            errors.append(ValidationMessages.REQUIRED_FIELD.format("Password"))
        elif len(request.password) < PASSWORD_MIN_LENGTH:
            errors.append(
                ValidationMessages.MIN_LENGTH.format("Password", PASSWORD_MIN_LENGTH)
            )

        if request.full_name and len(request.full_name) > FULL_NAME_MAX_LENGTH:
            errors.append(
                ValidationMessages.MAX_LENGTH.format("Full name", FULL_NAME_MAX_LENGTH)
            )

        return errors
