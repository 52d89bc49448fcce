"""ActiveForm - 非持久化表单对象.

复用模型风格的字段声明与校验,``save`` 只校验并触发回调,不写入存储.
"""

from activeform.constants import ColumnType
from activeform.core.exceptions import (
    AppError,
    InvalidArgumentError,
    RecordInvalid,
    UnknownAttributeError,
    ValidationError,
)
from activeform.forms import ActiveForm, Errors, FormColumn, make_form

__all__ = [
    "ActiveForm",
    "AppError",
    "ColumnType",
    "Errors",
    "FormColumn",
    "InvalidArgumentError",
    "RecordInvalid",
    "UnknownAttributeError",
    "ValidationError",
    "make_form",
]
