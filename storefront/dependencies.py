"""全局共享依赖"""

from typing import Annotated

from fastapi import Depends, Request

from storefront.config import Settings, get_settings
from storefront.core.session_store import SessionStore
from storefront.core.unit_of_work import UnitOfWork, get_unit_of_work


def get_session_store(request: Request) -> SessionStore:
    """应用级会话存储（create_app 中创建）"""
    return request.app.state.session_store


# 配置依赖
SettingsDep = Annotated[Settings, Depends(get_settings)]

# 工作单元依赖（每个请求一个，异常时自动回滚）
UnitOfWorkDep = Annotated[UnitOfWork, Depends(get_unit_of_work)]

# 会话存储依赖
SessionStoreDep = Annotated[SessionStore, Depends(get_session_store)]
