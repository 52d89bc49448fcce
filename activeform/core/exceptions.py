"""ActiveForm - 统一异常定义.

说明:
- 本模块只负责定义异常类型与语义字段,不包含 HTTP/Flask 等框架细节.
- 异常到 HTTP status 的映射在 Web 边界完成(见 `activeform/web.py`).
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from activeform.constants.system_constants import ErrorCategory, ErrorMessages, ErrorSeverity

if TYPE_CHECKING:
    from activeform.forms.base import ActiveForm


@dataclass(frozen=True, slots=True)
class ExceptionMetadata:
    """异常的元信息(不包含传输层信息)."""

    category: ErrorCategory
    severity: ErrorSeverity
    default_message_key: str


class AppError(Exception):
    """统一的基础异常.

    Args:
        message: 自定义错误文案,若为空则根据 ``message_key`` 推导.
        message_key: 自定义消息键.
        extra: 结构化日志附加字段.
        severity: 错误严重度.
        category: 错误分类.
    """

    metadata = ExceptionMetadata(
        category=ErrorCategory.SYSTEM,
        severity=ErrorSeverity.HIGH,
        default_message_key="INTERNAL_ERROR",
    )

    def __init__(
        self,
        message: str | None = None,
        *,
        message_key: str | None = None,
        extra: Mapping[str, object] | None = None,
        severity: ErrorSeverity | None = None,
        category: ErrorCategory | None = None,
    ) -> None:
        self.message_key = message_key or self.metadata.default_message_key
        self.message = message or getattr(ErrorMessages, self.message_key, ErrorMessages.INTERNAL_ERROR)
        self.extra = dict(extra or {})
        self.severity = severity or self.metadata.severity
        self.category = category or self.metadata.category
        super().__init__(self.message)

    @property
    def recoverable(self) -> bool:
        """表示该异常是否可恢复."""

        return self.severity in (ErrorSeverity.LOW, ErrorSeverity.MEDIUM)


class InvalidArgumentError(AppError):
    """表示字段声明或工厂参数不合法.

    通常在类定义阶段抛出,属于编程错误,不应被重试.
    """

    metadata = ExceptionMetadata(
        category=ErrorCategory.SYSTEM,
        severity=ErrorSeverity.HIGH,
        default_message_key="INVALID_ARGUMENT",
    )


class UnknownAttributeError(InvalidArgumentError):
    """表示给表单赋值了未声明的属性."""

    def __init__(self, attribute: str) -> None:
        super().__init__(
            ErrorMessages.UNKNOWN_ATTRIBUTE.format(attribute=attribute),
            extra={"attribute": attribute},
        )
        self.attribute = attribute


class ValidationError(AppError):
    """表示输入参数或表单校验失败."""

    metadata = ExceptionMetadata(
        category=ErrorCategory.VALIDATION,
        severity=ErrorSeverity.LOW,
        default_message_key="VALIDATION_ERROR",
    )


class RecordInvalid(ValidationError):
    """表单 ``save_or_raise`` 校验失败时抛出,携带失败的表单实例.

    Attributes:
        record: 校验失败的表单实例,可通过 ``record.errors`` 查看明细.
    """

    def __init__(self, record: ActiveForm) -> None:
        details = "; ".join(record.errors.full_messages())
        message = f"{ErrorMessages.RECORD_INVALID}: {details}" if details else ErrorMessages.RECORD_INVALID
        super().__init__(
            message,
            message_key="RECORD_INVALID",
            extra={"form": type(record).__name__, "errors": record.errors.to_dict()},
        )
        self.record = record


__all__ = [
    "AppError",
    "ExceptionMetadata",
    "InvalidArgumentError",
    "RecordInvalid",
    "UnknownAttributeError",
    "ValidationError",
]
