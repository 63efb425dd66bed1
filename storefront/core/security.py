"""安全工具

依赖安装: uv add "pwdlib[argon2]" email-validator
"""

import uuid
from typing import Protocol

from email_validator import EmailNotValidError, validate_email
from pwdlib import PasswordHash


class PasswordHasher(Protocol):
    """密码哈希接口（可替换实现，测试可注入轻量版本）"""

    def hash(self, password: str) -> str: ...

    def verify(self, password: str, password_hash: str) -> bool: ...


class Argon2PasswordHasher:
    """默认实现：pwdlib 推荐的 Argon2"""

    def __init__(self) -> None:
        self._hasher = PasswordHash.recommended()

    def hash(self, password: str) -> str:
        return self._hasher.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        return self._hasher.verify(password, password_hash)


def generate_session_token() -> str:
    """128 位随机令牌（UUID 标准文本形式）"""
    return str(uuid.uuid4())


def is_valid_email(email: str) -> bool:
    """邮箱语法校验（不做 DNS 查询）"""
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True
