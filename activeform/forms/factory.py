"""匿名表单类工厂."""

from __future__ import annotations

import types
from collections.abc import Mapping
from typing import Any

from activeform.forms.base import ActiveForm, split_column_spec

DEFAULT_FORM_NAME = "AnonymousForm"


def make_form(*columns: str | Mapping[Any, Mapping[Any, object] | None], name: str | None = None) -> type[ActiveForm]:
    """返回声明了给定字段的新表单类.

    每个字段定义可以是字段名,也可以是只含一个键值对的映射,键为字段名,
    值为传给 ``ActiveForm.column`` 的选项映射.每次调用都生成独立的类.

    Example:
        >>> FeedbackForm = make_form("email", {"message": {"type": "text"}})
        >>> FeedbackForm.column_names()
        ['email', 'message']

    """
    form_class: type[ActiveForm] = types.new_class(name or DEFAULT_FORM_NAME, (ActiveForm,))
    form_class.__module__ = __name__
    for spec in columns:
        column_name, options = split_column_spec(spec)
        form_class.column(column_name, options)
    return form_class
