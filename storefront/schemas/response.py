"""统一响应模型"""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class BaseSchema(BaseModel):
    """
    所有 Schema 的基类

    特性：
    - from_attributes: 支持 ORM 模型转换
    - str_strip_whitespace: 自动去除字符串首尾空白
    - 对外字段使用 camelCase，同时接受 snake_case 输入

    注意：datetime 字段请使用 UTCDateTime 类型（见 datetime_types.py）
    """

    model_config = ConfigDict(
        from_attributes=True,
        str_strip_whitespace=True,
        validate_default=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ApiResponse(BaseModel, Generic[T]):
    """统一响应信封（成功与失败共用）"""

    success: bool = True
    message: str | None = None
    data: T | None = None
    errors: list[str] | None = None

    @classmethod
    def ok(cls, data: T | None = None, message: str | None = None) -> "ApiResponse[T]":
        return cls(success=True, data=data, message=message)


class ErrorResponse(ApiResponse[None]):
    """错误响应"""

    success: bool = False
