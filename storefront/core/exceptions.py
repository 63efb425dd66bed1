"""业务异常定义"""

from storefront.core.constants import ErrorMessages


class ApiError(Exception):
    """业务异常基类"""

    def __init__(
        self,
        message: str,
        status_code: int = 400,
        errors: list[str] | None = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.errors = errors
        super().__init__(self.message)


class ValidationError(ApiError):
    """请求数据未通过校验"""

    def __init__(
        self,
        errors: list[str],
        message: str = ErrorMessages.VALIDATION_FAILED,
    ) -> None:
        super().__init__(message, status_code=400, errors=list(errors))


class BadRequestError(ApiError):
    """请求不完整"""

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=400)


class UnauthorizedError(ApiError):
    """认证失败"""

    def __init__(self, message: str = ErrorMessages.UNAUTHORIZED_ACCESS) -> None:
        super().__init__(message, status_code=401)


class InvalidCredentialsError(UnauthorizedError):
    """用户名或密码错误（不区分具体原因）"""

    def __init__(self) -> None:
        super().__init__(ErrorMessages.INVALID_CREDENTIALS)


class SessionExpiredError(UnauthorizedError):
    """会话不存在或已过期"""

    def __init__(self) -> None:
        super().__init__(ErrorMessages.SESSION_EXPIRED)


class NotFoundError(ApiError):
    """资源不存在"""

    def __init__(self, message: str = ErrorMessages.RESOURCE_NOT_FOUND) -> None:
        super().__init__(message, status_code=404)


class PersistenceError(ApiError):
    """持久化失败（事务已回滚）"""

    def __init__(
        self,
        message: str = ErrorMessages.INTERNAL_SERVER_ERROR,
        status_code: int = 500,
    ) -> None:
        super().__init__(message, status_code=status_code)


class PersistenceConflictError(PersistenceError):
    """提交时违反唯一约束等完整性约束"""

    def __init__(self, message: str = ErrorMessages.PERSISTENCE_CONFLICT) -> None:
        super().__init__(message, status_code=409)
