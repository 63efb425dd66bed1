"""日期时间与金额类型定义"""

from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Annotated

from pydantic import AfterValidator, PlainSerializer


def ensure_utc_aware(dt: datetime) -> datetime:
    """
    确保 datetime 是 UTC aware

    - naive datetime: 视为 UTC（SQLite 读回的时间不带时区）
    - aware datetime: 转换为 UTC
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def serialize_to_iso8601z(dt: datetime) -> str:
    """序列化为 ISO8601 UTC 格式（Z 后缀）"""
    utc_dt = ensure_utc_aware(dt)
    return utc_dt.isoformat().replace("+00:00", "Z")


# 统一的 datetime 类型
# - 输入时：统一转换为 UTC
# - 输出时：序列化为 ISO8601 UTC 格式（Z 后缀）
UTCDateTime = Annotated[
    datetime,
    AfterValidator(ensure_utc_aware),
    PlainSerializer(serialize_to_iso8601z),
]

CENT = Decimal("0.01")


def quantize_money(value: Decimal) -> Decimal:
    """按分四舍五入，与 Numeric(18, 2) 列的存储精度一致"""
    try:
        return value.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise ValueError("amount is out of range") from exc


# 金额输入：先取整到分，业务校验看到的就是将要入库的值
MoneyInput = Annotated[Decimal, AfterValidator(quantize_money)]

# 金额输出：JSON 数字
# float 只能精确往返 15 位有效数字，金额上限由业务校验保证（见 ProductValidator）
Money = Annotated[
    Decimal,
    PlainSerializer(float, return_type=float),
]
