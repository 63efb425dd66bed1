"""全局 Schema"""

from .datetime_types import Money, MoneyInput, UTCDateTime
from .response import ApiResponse, BaseSchema, ErrorResponse

__all__ = ["Money", "MoneyInput", "UTCDateTime", "ApiResponse", "BaseSchema", "ErrorResponse"]
