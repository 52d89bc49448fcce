"""异常层级测试."""

import pytest

from activeform.constants import ErrorCategory, ErrorSeverity
from activeform.core.exceptions import (
    AppError,
    InvalidArgumentError,
    RecordInvalid,
    UnknownAttributeError,
    ValidationError,
)
from activeform.forms.factory import make_form


@pytest.mark.unit
def test_invalid_argument_is_not_recoverable() -> None:
    error = InvalidArgumentError()

    assert isinstance(error, AppError)
    assert error.message == "无效的参数"
    assert error.category is ErrorCategory.SYSTEM
    assert error.severity is ErrorSeverity.HIGH
    assert error.recoverable is False


@pytest.mark.unit
def test_unknown_attribute_error_names_attribute() -> None:
    error = UnknownAttributeError("phone")

    assert isinstance(error, InvalidArgumentError)
    assert str(error) == "未知的表单属性: phone"
    assert error.extra == {"attribute": "phone"}


@pytest.mark.unit
def test_record_invalid_is_validation_error() -> None:
    form_class = make_form("email")
    form_class.validates_presence_of("email")
    form = form_class()
    form.valid()

    error = RecordInvalid(form)

    assert isinstance(error, ValidationError)
    assert error.record is form
    assert error.message_key == "RECORD_INVALID"
    assert error.category is ErrorCategory.VALIDATION
    assert error.extra["form"] == "AnonymousForm"


@pytest.mark.unit
def test_record_invalid_without_errors_uses_default_message() -> None:
    error = RecordInvalid(make_form()())

    assert error.message == "表单校验失败"
