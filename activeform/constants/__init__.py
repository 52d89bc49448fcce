"""常量模块。

主要常量：
- ColumnType: 字段语义类型标签
- ErrorMessages: 错误消息常量
- ValidationMessages: 字段校验文案
"""

from .column_types import ColumnType
from .system_constants import (
    ErrorCategory,
    ErrorMessages,
    ErrorSeverity,
    LogLevel,
    ValidationMessages,
)

__all__ = [
    "ColumnType",
    "ErrorCategory",
    "ErrorMessages",
    "ErrorSeverity",
    "LogLevel",
    "ValidationMessages",
]
