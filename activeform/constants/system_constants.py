"""ActiveForm - 常量定义模块

统一管理错误分类、严重度与默认文案.
"""

from enum import Enum


class LogLevel(Enum):
    """日志级别枚举."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ErrorCategory(Enum):
    """错误分类枚举."""

    VALIDATION = "validation"
    BUSINESS = "business"
    SYSTEM = "system"
    UNKNOWN = "unknown"


class ErrorSeverity(Enum):
    """错误严重程度枚举."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


# 错误消息常量
class ErrorMessages:
    """错误消息常量."""

    # 通用错误
    INTERNAL_ERROR = "服务器内部错误"
    VALIDATION_ERROR = "数据验证失败"
    INVALID_ARGUMENT = "无效的参数"

    # 表单错误
    RECORD_INVALID = "表单校验失败"
    UNKNOWN_OPTION = "未知的字段选项: {options}"
    UNKNOWN_ATTRIBUTE = "未知的表单属性: {attribute}"
    INVALID_COLUMN_SPEC = "无效的字段定义: {spec}"
    DANGEROUS_ATTRIBUTE = "字段名与表单内置属性冲突: {attribute}"
    CONFLICTING_OPTION = "字段选项重复: {option}"


# 校验失败的默认文案, 拼接在字段显示名之后
class ValidationMessages:
    """字段级校验文案."""

    BLANK = "不能为空"
    INVALID = "格式不正确"
    TOO_SHORT = "长度不能少于 {count} 个字符"
    TOO_LONG = "长度不能超过 {count} 个字符"
    INCLUSION = "不在可选范围内"
    TYPE_MISMATCH = "不是有效的 {type} 值"


__all__ = [
    "ErrorCategory",
    "ErrorMessages",
    "ErrorSeverity",
    "LogLevel",
    "ValidationMessages",
]
