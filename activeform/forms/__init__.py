"""
表单定义包

集中提供非持久化表单的字段声明、校验与回调.
"""

from .base import ActiveForm, ColumnAttribute
from .columns import ColumnOptions, ColumnRegistry, FormColumn
from .errors import Errors
from .factory import make_form

__all__ = [
    "ActiveForm",
    "ColumnAttribute",
    "ColumnOptions",
    "ColumnRegistry",
    "Errors",
    "FormColumn",
    "make_form",
]
