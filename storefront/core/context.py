"""请求上下文 - contextvars"""

from contextvars import ContextVar
from dataclasses import dataclass
from uuid import UUID


@dataclass
class RequestContext:
    """请求上下文数据"""

    user_id: UUID | None = None
    username: str | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    request_id: str | None = None


# 请求上下文（避免可变默认值导致跨请求污染）
request_context: ContextVar[RequestContext | None] = ContextVar(
    "request_context",
    default=None,
)


def get_request_context() -> RequestContext:
    """获取当前请求上下文"""
    ctx = request_context.get()
    if ctx is None:
        ctx = RequestContext()
        request_context.set(ctx)
    return ctx


def set_request_context(ctx: RequestContext) -> None:
    """设置当前请求上下文"""
    request_context.set(ctx)


def set_current_user(user_id: UUID | None, username: str | None = None) -> None:
    """记录当前会话用户（会话校验通过后调用）"""
    ctx = get_request_context()
    ctx.user_id = user_id
    ctx.username = username
    request_context.set(ctx)
