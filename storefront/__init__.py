"""Storefront API：会话认证 + 商品目录服务"""

__version__ = "1.0.0"
